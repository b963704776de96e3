"""Shared pytest fixtures for spendlens tests."""

import os
import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from dateutil import tz as dateutil_tz

from spendlens.database.factories import create_sqlite_store
from spendlens.domain.entities import TransactionRecord
from spendlens.domain.transaction import TransactionService
from spendlens.utils.date_parser import month_key_for


def _make_record(
    record_id: str,
    when: datetime,
    amount: str,
    category: str = "Uncategorized",
    merchant: str = "Unknown",
    account: str = "Other",
    **kwargs,
) -> TransactionRecord:
    """Build a normalized record with ``month_key`` derived from ``when``."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=dateutil_tz.UTC)
    return TransactionRecord(
        id=record_id,
        timestamp=when,
        month_key=month_key_for(when),
        amount=Decimal(amount),
        category=category,
        merchant=merchant,
        account=account,
        **kwargs,
    )


@pytest.fixture
def temp_store():
    """Create a temporary SQLite store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def make_record():
    """Factory for normalized records in UTC."""
    return _make_record


@pytest.fixture
def transaction_service(temp_store):
    """Create a TransactionService over a temporary store."""
    return TransactionService(temp_store)


@pytest.fixture
def sample_records():
    """A small mixed set spanning two months and two accounts."""
    return [
        _make_record("t1", datetime(2024, 1, 3, 9, 0), "-50.00", "Groceries", "Tesco", "Starling"),
        _make_record("t2", datetime(2024, 1, 10, 19, 30), "-30.00", "Dining", "Nando's", "Amex"),
        _make_record("t3", datetime(2024, 1, 25, 8, 0), "2000.00", "Income", "Salary", "Starling"),
        _make_record("t4", datetime(2024, 2, 2, 12, 0), "-70.00", "Groceries", "Tesco", "Starling"),
        _make_record("t5", datetime(2024, 2, 14, 20, 0), "-120.00", "Travel", "EasyJet", "Amex"),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
