"""In-memory record store used by tests and local scripts."""

import copy
import itertools
from typing import Any, Dict, List, Optional

from careerhub.repositories.base import Record, RecordStore


class InMemoryRecordStore(RecordStore):
    """Dict-backed collection with integer ids assigned in insertion order."""

    def __init__(self, name: str = "records"):
        self.name = name
        self._records: Dict[int, Record] = {}
        self._ids = itertools.count(1)

    def insert(self, fields: Record) -> Record:
        record_id = next(self._ids)
        record = {**copy.deepcopy(fields), "id": record_id}
        self._records[record_id] = record
        return copy.deepcopy(record)

    def get(self, record_id: Any) -> Optional[Record]:
        record = self._records.get(self._key(record_id))
        return copy.deepcopy(record) if record is not None else None

    def patch(self, record_id: Any, fields: Record) -> Optional[Record]:
        record = self._records.get(self._key(record_id))
        if record is None:
            return None
        record.update({key: copy.deepcopy(value) for key, value in fields.items() if key != "id"})
        return copy.deepcopy(record)

    def delete(self, record_id: Any) -> bool:
        return self._records.pop(self._key(record_id), None) is not None

    def query(self, filters: Optional[Record] = None) -> List[Record]:
        filters = filters or {}
        return [
            copy.deepcopy(record)
            for record in self._records.values()
            if all(record.get(key) == value for key, value in filters.items())
        ]

    def snapshot(self) -> Dict[int, Record]:
        return copy.deepcopy(self._records)

    def restore(self, records: Dict[int, Record]) -> None:
        self._records = records

    @staticmethod
    def _key(record_id: Any) -> Optional[int]:
        try:
            return int(record_id)
        except (TypeError, ValueError):
            return None
