"""Abstract transaction store interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

# Import entities directly to avoid circular import through domain/__init__.py
from spendlens.domain.entities import TransactionRecord

INDEX_NAMES = ("timestamp", "month_key", "category", "amount")


@dataclass(frozen=True)
class KeyRange:
    """Inclusive key range for index queries. Either bound may be omitted."""

    lower: Optional[Any] = None
    upper: Optional[Any] = None


class TransactionStore(ABC):
    """Abstract key-value store of transaction records keyed by ``id``."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables and indexes)."""
        pass

    @abstractmethod
    def get_all(self) -> list[TransactionRecord]:
        """Return every record, newest first."""
        pass

    @abstractmethod
    def get(self, record_id: str) -> Optional[TransactionRecord]:
        """Get a record by id."""
        pass

    @abstractmethod
    def put(self, record: TransactionRecord) -> None:
        """Insert a record, replacing any record with the same id."""
        pass

    @abstractmethod
    def put_many(self, records: Iterable[TransactionRecord]) -> int:
        """Upsert several records in one transaction. Returns the count written."""
        pass

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Delete a record. Returns False when no record had that id."""
        pass

    @abstractmethod
    def clear(self) -> int:
        """Delete every record. Returns the number deleted."""
        pass

    @abstractmethod
    def query_by_index(
        self, index_name: str, key_or_range: Union[KeyRange, Any]
    ) -> list[TransactionRecord]:
        """Return records whose indexed field equals a key or falls in a range.

        Args:
            index_name: One of ``timestamp``, ``month_key``, ``category``, ``amount``
            key_or_range: Exact key, or a ``KeyRange`` with inclusive bounds

        Raises:
            ValueError: If the index name is unknown
        """
        pass
