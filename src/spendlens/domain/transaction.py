"""Transaction domain service."""

from datetime import datetime, tzinfo
from dataclasses import replace
from typing import Optional

from dateutil import tz as dateutil_tz

from spendlens.database.base import TransactionStore
from spendlens.domain.entities import UNCATEGORIZED, FilterSpec, TransactionRecord
from spendlens.domain.errors import NotFoundError, transaction_not_found
from spendlens.domain.normalizer import reassign_timestamp
from spendlens.domain.query import filter_records
from spendlens.logging_setup import get_logger

logger = get_logger("spendlens.domain.transaction")


class TransactionService:
    """Service for reading and editing stored transactions."""

    def __init__(self, store: TransactionStore, zone: tzinfo = dateutil_tz.UTC):
        """Initialize transaction service.

        Args:
            store: Transaction store
            zone: Reporting time zone for month bucketing
        """
        self.store = store
        self.zone = zone

    def get_transaction(self, transaction_id: str) -> Optional[TransactionRecord]:
        """Get transaction by id.

        Returns:
            Record or None if not found
        """
        return self.store.get(transaction_id)

    def list_transactions(self, spec: Optional[FilterSpec] = None) -> list[TransactionRecord]:
        """List stored transactions, newest first, optionally filtered."""
        records = self.store.get_all()
        if spec is None:
            return records
        return filter_records(records, spec)

    def upsert(self, record: TransactionRecord) -> None:
        """Store a record, replacing any record with the same id."""
        self.store.put(record)

    def update_category(self, transaction_id: str, category: Optional[str]) -> TransactionRecord:
        """Update transaction category.

        Args:
            transaction_id: Transaction id
            category: New category; blank or None means "Uncategorized"

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self._require(transaction_id)
        updated = replace(txn, category=(category or "").strip() or UNCATEGORIZED)
        self.store.put(updated)
        return updated

    def update_notes(self, transaction_id: str, notes: Optional[str]) -> TransactionRecord:
        """Update transaction notes.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self._require(transaction_id)
        updated = replace(txn, notes=(notes or "").strip() or None)
        self.store.put(updated)
        return updated

    def update_timestamp(self, transaction_id: str, timestamp: datetime) -> TransactionRecord:
        """Move a transaction in time, recomputing its month.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self._require(transaction_id)
        updated = reassign_timestamp(txn, timestamp, self.zone)
        self.store.put(updated)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if not self.store.delete(transaction_id):
            raise NotFoundError(transaction_not_found(transaction_id))

    def clear_transactions(self) -> int:
        """Delete every stored transaction. Returns the number removed."""
        removed = self.store.clear()
        logger.info("Removed %d transactions", removed)
        return removed

    def _require(self, transaction_id: str) -> TransactionRecord:
        txn = self.store.get(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn
