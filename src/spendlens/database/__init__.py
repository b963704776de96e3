"""Storage layer for spendlens."""

from spendlens.database.base import KeyRange, TransactionStore
from spendlens.database.factories import create_sqlite_store

__all__ = ["KeyRange", "TransactionStore", "create_sqlite_store"]
