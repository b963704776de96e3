"""Store factory functions for creating store instances."""

import os
from datetime import tzinfo
from pathlib import Path
from typing import Optional

from dateutil import tz as dateutil_tz

from spendlens.database.sqlalchemy_db import SQLAlchemyTransactionStore


def create_sqlite_store(
    database_path: Optional[str] = None, zone: tzinfo = dateutil_tz.UTC
) -> SQLAlchemyTransactionStore:
    """Create a SQLite-backed transaction store.

    Args:
        database_path: Path to SQLite database file. If None, checks
            SPENDLENS_DB_PATH environment variable, then defaults to
            ~/.spendlens/spendlens.db. ":memory:" gives a throwaway store.
        zone: Reporting time zone records are returned in

    Returns:
        SQLAlchemyTransactionStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SPENDLENS_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".spendlens"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "spendlens.db")

    if database_path == ":memory:":
        return SQLAlchemyTransactionStore("sqlite://", zone=zone)
    return SQLAlchemyTransactionStore(f"sqlite:///{database_path}", zone=zone)
