"""
Record Store Interface

Every collection (jobs, sessions, whitelist, ...) is reached through a
RecordStore. Records are plain dicts with an ``id`` key assigned by the store,
which keeps the moderation and matching logic independent of the backing
database and lets tests run against the in-memory implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class RecordStore(ABC):
    """
    Abstract interface for a single collection.

    Implementations:
    - SqlRecordStore: SQLAlchemy model backed (production)
    - InMemoryRecordStore: dict backed (tests, scripts)

    Query results are returned in insertion order.
    """

    @abstractmethod
    def insert(self, fields: Record) -> Record:
        """
        Insert a new record.

        Args:
            fields: Field values (without ``id``)

        Returns:
            The stored record including its new ``id``
        """

    @abstractmethod
    def get(self, record_id: Any) -> Optional[Record]:
        """
        Fetch a record by id.

        Returns:
            The record, or None if absent
        """

    @abstractmethod
    def patch(self, record_id: Any, fields: Record) -> Optional[Record]:
        """
        Update some fields of a record.

        Returns:
            The updated record, or None if absent
        """

    @abstractmethod
    def delete(self, record_id: Any) -> bool:
        """
        Delete a record.

        Returns:
            True if a record was removed, False if it did not exist
        """

    @abstractmethod
    def query(self, filters: Optional[Record] = None) -> List[Record]:
        """
        Return records whose fields equal every given filter value.

        Args:
            filters: Field -> value equality constraints (None = all records)

        Returns:
            Matching records in insertion order
        """

    def collect(self) -> List[Record]:
        """Return every record in insertion order."""
        return self.query()

    def first(self, filters: Record) -> Optional[Record]:
        """Return the first record matching the filters, or None."""
        matches = self.query(filters)
        return matches[0] if matches else None

    def count(self, filters: Optional[Record] = None) -> int:
        return len(self.query(filters))
