from nanhai import db
import json
import time


class GameDocument(db.Model):
    __tablename__ = 'game_document'
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(64), unique=True, nullable=False, index=True)
    # Bumped on every save; writers compare-and-swap against it
    version = db.Column(db.Integer, nullable=False, default=1)
    body = db.Column(db.Text, nullable=False)  # JSON-encoded {players, fragments}
    updated_at = db.Column(db.Float, nullable=True)

    def __init__(self, **kwargs):
        super(GameDocument, self).__init__(**kwargs)
        if self.version is None:
            self.version = 1
        if self.updated_at is None:
            self.updated_at = time.time()

    @property
    def data(self):
        # A body that does not decode is corrupt storage, never an empty game
        parsed = json.loads(self.body)
        if not isinstance(parsed, dict):
            raise ValueError(f"game document {self.key} is not a JSON object")
        return {
            'players': list(parsed.get('players') or []),
            'fragments': list(parsed.get('fragments') or []),
        }

    @staticmethod
    def encode(document) -> str:
        return json.dumps({
            'players': document.get('players') or [],
            'fragments': document.get('fragments') or [],
        })
