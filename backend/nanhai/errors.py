"""Error types raised by the game engine.

HTTP handlers translate ``GameError`` subclasses into ``{ok: false, message}``
payloads; ``status_code`` picks the response code and ``message`` is the only
text a player ever sees.
"""


class GameError(Exception):
    status_code = 500
    message = 'Something went wrong. Please try again.'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'ok': False, 'message': self.message}


class ValidationError(GameError):
    status_code = 400
    message = 'Please enter a name.'


class PersistenceError(GameError):
    status_code = 500
    message = 'The server could not save your dive. Please try again.'


class ConcurrencyConflict(Exception):
    """Another writer saved the document after it was loaded. Retried by the engine."""


class CatalogError(ValueError):
    pass


class FragmentAlreadyClaimed(AssertionError):
    """A claim was attempted on a fragment that already has a finder."""
