import threading
from typing import Set


class ConnectionGate:
    """Bounded counter of admitted push connections, keyed by socket id."""

    def __init__(self, limit: int = 4):
        self.limit = limit
        self._admitted: Set[str] = set()
        self._lock = threading.Lock()

    def try_acquire(self, sid: str) -> bool:
        with self._lock:
            if sid in self._admitted:
                return True
            if len(self._admitted) >= self.limit:
                return False
            self._admitted.add(sid)
            return True

    def release(self, sid: str) -> bool:
        # Rejected sockets also fire disconnect; only admitted ones count
        with self._lock:
            if sid not in self._admitted:
                return False
            self._admitted.discard(sid)
            return True

    @property
    def active(self) -> int:
        with self._lock:
            return len(self._admitted)
