import random
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from flask import current_app

from nanhai.catalog import load_catalog
from nanhai.errors import ConcurrencyConflict, PersistenceError, ValidationError
from . import pool, registry
from .broadcast import Broadcaster
from .dive import perform_dive
from .store import DocumentStore

EXTENSION_KEY = 'nanhai'


def get_engine(app=None) -> 'GameEngine':
    app = app or current_app
    return app.extensions[EXTENSION_KEY]


class GameEngine:
    """Owns the game document and every operation that changes it.

    Built once by the app factory and stored on ``app.extensions``. Mutating
    operations load, change, save and broadcast while holding ``_lock``; a
    save that loses a compare-and-swap against another process is retried
    from a fresh load.
    """

    def __init__(self, app=None, socketio=None):
        self._lock = threading.Lock()
        self.catalog = None
        self.store: Optional[DocumentStore] = None
        self.broadcaster: Optional[Broadcaster] = None
        self.rng = random.Random()
        self.completion_bonus = 5
        self.max_retries = 5
        if app is not None:
            self.init_app(app, socketio)

    def init_app(self, app, socketio) -> None:
        cfg = app.config
        self.catalog = load_catalog(cfg.get('ARTIFACT_CATALOG'))
        self.store = DocumentStore(cfg.get('DOCUMENT_KEY', 'nanhai'), self.initial_document)
        self.broadcaster = Broadcaster(socketio, cfg.get('SOCKETIO_NAMESPACE', '/ws'))
        seed = cfg.get('DIVE_RANDOM_SEED')
        self.rng = random.Random(seed) if seed is not None else random.Random()
        self.completion_bonus = int(cfg.get('COMPLETION_BONUS', 5))
        self.max_retries = max(1, int(cfg.get('DIVE_MAX_RETRIES', 5)))
        app.extensions[EXTENSION_KEY] = self

    def initial_document(self) -> Dict[str, Any]:
        return {'players': [], 'fragments': pool.generate(self.catalog)}

    # ---- operations ----

    def ensure_document(self) -> Dict[str, Any]:
        """Create the document if absent and refill an empty fragment list."""
        def _fill(document):
            if not document['fragments']:
                document['fragments'] = pool.generate(self.catalog)
                current_app.logger.info('[startup] fragment pool was empty, generated a new one')
            return None

        document, _ = self._mutate('startup', _fill)
        return document

    def register(self, name: str) -> Dict[str, Any]:
        name = _require_name(name, 'Please enter a name.')

        def _register(document):
            players = document['players']
            existing = registry.find(players, name) is not None
            registry.find_or_create(players, name)
            return {'ok': True, 'created': not existing}

        with self._lock:
            document, outcome = self._mutate('register', _register, locked=True)
            current_app.logger.info(f"[register] player={name} new={outcome['created']}")
            self.broadcaster.leaderboard(registry.leaderboard(document['players']))
        return {'ok': True}

    def dive(self, name: str) -> Dict[str, Any]:
        name = _require_name(name, 'Please enter your name.')

        def _dive(document):
            return perform_dive(document, name, self.catalog, self.rng, self.completion_bonus)

        with self._lock:
            document, outcome = self._mutate('dive', _dive, locked=True)
            if outcome.get('reset'):
                current_app.logger.info(f"[reset] generation exhausted, triggered by player={name}")
                self.broadcaster.reset(outcome['leaderboard'])
            else:
                fragment = outcome['fragment']
                current_app.logger.info(
                    f"[dive] player={name} fragment={fragment['id']} artifact={fragment['artifactKey']} "
                    f"quadrant={fragment['quadrant']} points={fragment['points']} completed={outcome['completed']}"
                )
                self.broadcaster.claim(fragment, outcome['leaderboard'])
        return outcome

    def reset_pool(self) -> Dict[str, Any]:
        """Start a new generation now, applying the same reset policy as a dive."""
        def _reset(document):
            document['fragments'] = pool.generate(self.catalog)
            registry.reset_scores(document['players'])
            return {'ok': True, 'reset': True, 'leaderboard': registry.leaderboard(document['players'])}

        with self._lock:
            _, outcome = self._mutate('reset', _reset, locked=True)
            current_app.logger.info('[reset] fragment pool regenerated by operator')
            self.broadcaster.reset(outcome['leaderboard'])
        return outcome

    def snapshot(self) -> Dict[str, Any]:
        document, _ = self.store.load()
        return document

    # ---- internals ----

    def _mutate(self, label: str, change: Callable[[Dict[str, Any]], Any],
                locked: bool = False) -> Tuple[Dict[str, Any], Any]:
        if not locked:
            with self._lock:
                return self._mutate(label, change, locked=True)
        for attempt in range(1, self.max_retries + 1):
            document, version = self.store.load()
            outcome = change(document)
            try:
                self.store.save(document, version)
            except ConcurrencyConflict:
                current_app.logger.info(f"[{label}] version {version} was stale, retrying ({attempt}/{self.max_retries})")
                continue
            return document, outcome
        current_app.logger.error(f"[{label}] gave up after {self.max_retries} conflicting writes")
        raise PersistenceError()


def _require_name(raw, message: str) -> str:
    name = (raw or '').strip() if isinstance(raw, str) else ''
    if not name:
        raise ValidationError(message)
    return name
