import time
from typing import Any, Callable, Dict, Tuple

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from nanhai import db
from nanhai.errors import ConcurrencyConflict, PersistenceError
from nanhai.models import GameDocument

Document = Dict[str, Any]


class DocumentStore:
    """Durable load/save of the whole game document.

    Every save is a compare-and-swap on ``version``: a writer that loaded an
    older version gets ``ConcurrencyConflict`` and must reload. Database
    failures are rolled back and surface as ``PersistenceError``.
    """

    def __init__(self, key: str, initial_factory: Callable[[], Document]):
        self.key = key
        self.initial_factory = initial_factory

    def load(self) -> Tuple[Document, int]:
        try:
            row = GameDocument.query.filter_by(key=self.key).populate_existing().first()
            if row is None:
                row = self._create()
            return row.data, row.version
        except (SQLAlchemyError, ValueError, TypeError) as exc:
            db.session.rollback()
            current_app.logger.exception(f"[store] load failed key={self.key}")
            raise PersistenceError() from exc

    def save(self, document: Document, expected_version: int) -> int:
        new_version = expected_version + 1
        try:
            result = db.session.execute(
                update(GameDocument)
                .where(GameDocument.key == self.key, GameDocument.version == expected_version)
                .values(body=GameDocument.encode(document), version=new_version, updated_at=time.time())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                db.session.rollback()
                raise ConcurrencyConflict()
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.exception(f"[store] save failed key={self.key} version={expected_version}")
            raise PersistenceError() from exc
        return new_version

    def _create(self) -> GameDocument:
        row = GameDocument(key=self.key, body=GameDocument.encode(self.initial_factory()))
        db.session.add(row)
        try:
            db.session.commit()
            current_app.logger.info(f"[store] created document key={self.key}")
        except IntegrityError:
            # Another process created it first
            db.session.rollback()
            row = GameDocument.query.filter_by(key=self.key).populate_existing().first()
            if row is None:
                raise
        return row
