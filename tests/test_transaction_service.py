"""Tests for the transaction service."""

from datetime import datetime

import pytest

from spendlens.domain.entities import FilterSpec
from spendlens.domain.errors import NotFoundError


def test_list_transactions_with_filter(transaction_service, sample_records):
    transaction_service.store.put_many(sample_records)

    all_records = transaction_service.list_transactions()
    groceries = transaction_service.list_transactions(
        FilterSpec(categories=frozenset({"Groceries"}))
    )

    assert len(all_records) == 5
    assert [r.id for r in groceries] == ["t4", "t1"]


def test_update_category(transaction_service, sample_records):
    transaction_service.upsert(sample_records[0])

    updated = transaction_service.update_category("t1", "Household")
    assert updated.category == "Household"
    assert transaction_service.get_transaction("t1").category == "Household"

    cleared = transaction_service.update_category("t1", "  ")
    assert cleared.category == "Uncategorized"


def test_update_notes(transaction_service, sample_records):
    transaction_service.upsert(sample_records[1])

    assert transaction_service.update_notes("t2", "team lunch").notes == "team lunch"
    assert transaction_service.update_notes("t2", "").notes is None


def test_update_timestamp_moves_month(transaction_service, sample_records):
    transaction_service.upsert(sample_records[0])

    moved = transaction_service.update_timestamp("t1", datetime(2024, 5, 20, 10, 0))

    assert moved.month_key == "2024-05"
    assert transaction_service.get_transaction("t1").month_key == "2024-05"


def test_missing_transaction_raises(transaction_service):
    with pytest.raises(NotFoundError, match="not found"):
        transaction_service.update_category("missing", "Food")
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction("missing")


def test_delete_and_clear(transaction_service, sample_records):
    transaction_service.store.put_many(sample_records)

    transaction_service.delete_transaction("t3")
    assert transaction_service.get_transaction("t3") is None
    assert transaction_service.clear_transactions() == 4
