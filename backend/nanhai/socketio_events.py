from flask import current_app, request
from flask_socketio import emit, disconnect
from nanhai import socketio
from nanhai.services.game import get_engine
from nanhai.services.game.broadcast import LEADERBOARD_UPDATE, SERVER_FULL
from nanhai.services.game.registry import leaderboard
from nanhai.services.gate import ConnectionGate
from nanhai.errors import GameError

GATE_KEY = 'nanhai_gate'
SERVER_FULL_MESSAGE = 'Server is at capacity. Please try again later.'


def get_gate(app=None) -> ConnectionGate:
    app = app or current_app
    return app.extensions[GATE_KEY]


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    gate = get_gate()
    sid = _get_sid()
    if not gate.try_acquire(sid):
        current_app.logger.info(f"[gate] rejected sid={sid} active={gate.active}/{gate.limit}")
        emit(SERVER_FULL, {'message': SERVER_FULL_MESSAGE})
        disconnect()
        return
    current_app.logger.info(f"[gate] connected active={gate.active}/{gate.limit}")
    # New viewers start from the current leaderboard
    try:
        document = get_engine().snapshot()
    except GameError as exc:
        current_app.logger.warning(f"[gate] no leaderboard for sid={sid}: {exc}")
        return
    emit(LEADERBOARD_UPDATE, leaderboard(document['players']))


def handle_disconnect(reason=None):
    gate = get_gate()
    if gate.release(_get_sid()):
        current_app.logger.info(f"[gate] disconnected active={gate.active}/{gate.limit}")


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Bind the push handlers; clients only listen, they never send game events."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
