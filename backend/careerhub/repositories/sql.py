"""
SQLAlchemy-backed record store.

Writes are flushed, never committed: the request-scoped session decides when
the unit of work lands (see careerhub.db.session.get_db).
"""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from careerhub.repositories.base import Record, RecordStore


def row_to_record(row: Any) -> Record:
    """Convert a mapped row to a plain dict of its column values."""
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


class SqlRecordStore(RecordStore):
    """Record store over one SQLAlchemy model."""

    def __init__(self, db: Session, model: type):
        self.db = db
        self.model = model

    def insert(self, fields: Record) -> Record:
        values = {key: value for key, value in fields.items() if key != "id"}
        row = self.model(**values)
        self.db.add(row)
        self.db.flush()
        return row_to_record(row)

    def get(self, record_id: Any) -> Optional[Record]:
        row = self._get_row(record_id)
        return row_to_record(row) if row is not None else None

    def patch(self, record_id: Any, fields: Record) -> Optional[Record]:
        row = self._get_row(record_id)
        if row is None:
            return None
        for key, value in fields.items():
            if key == "id":
                continue
            setattr(row, key, value)
        self.db.flush()
        return row_to_record(row)

    def delete(self, record_id: Any) -> bool:
        row = self._get_row(record_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def query(self, filters: Optional[Record] = None) -> List[Record]:
        stmt = select(self.model)
        for key, value in (filters or {}).items():
            column = getattr(self.model, key, None)
            if column is None:
                raise KeyError(f"{self.model.__tablename__} has no field '{key}'")
            stmt = stmt.where(column == value)
        stmt = stmt.order_by(self.model.id)
        return [row_to_record(row) for row in self.db.execute(stmt).scalars().all()]

    def _get_row(self, record_id: Any) -> Any:
        try:
            key = int(record_id)
        except (TypeError, ValueError):
            return None
        return self.db.get(self.model, key)
