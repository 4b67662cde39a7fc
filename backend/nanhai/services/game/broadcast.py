from typing import Any, List, Optional

from flask import current_app

LEADERBOARD_UPDATE = 'leaderboard-update'
FRAGMENT_FOUND = 'fragment-found'
SERVER_FULL = 'server-full'


class Broadcaster:
    """Fire-and-forget fan-out to every live connection on one namespace.

    No acks and no retries: a client that misses an event resyncs by fetching
    ``/data``.
    """

    def __init__(self, socketio, namespace: str = '/ws'):
        self.socketio = socketio
        self.namespace = namespace

    def leaderboard(self, players: List[dict]) -> None:
        self._emit(LEADERBOARD_UPDATE, players)

    def fragment_found(self, fragment: Optional[dict]) -> None:
        # None tells clients the pool was regenerated
        self._emit(FRAGMENT_FOUND, fragment)

    def claim(self, fragment: dict, players: List[dict]) -> None:
        self.fragment_found(fragment)
        self.leaderboard(players)

    def reset(self, players: List[dict]) -> None:
        self.leaderboard(players)
        self.fragment_found(None)

    def _emit(self, event: str, payload: Any) -> None:
        try:
            self.socketio.emit(event, payload, namespace=self.namespace)
        except Exception as exc:
            current_app.logger.warning(f"[broadcast] {event} not delivered: {exc}")
