"""Tests for monthly, category and daily aggregation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from spendlens.domain.aggregation import (
    aggregate_by_category,
    aggregate_by_day,
    aggregate_by_month,
    rolling_monthly_totals,
    trailing_days,
)


def test_monthly_rollup(make_record):
    records = [
        make_record("a", datetime(2024, 1, 5), "-50", "Groceries"),
        make_record("b", datetime(2024, 1, 9), "-30", "Dining"),
        make_record("c", datetime(2024, 1, 25), "2000", "Income"),
    ]
    monthly = aggregate_by_month(records)

    assert list(monthly) == ["2024-01"]
    january = monthly["2024-01"]
    assert january.total_expenses == Decimal("80")
    assert january.total_income == Decimal("2000")
    assert january.net_amount == Decimal("1920")
    assert [(c.category, c.total) for c in january.category_totals] == [
        ("Groceries", Decimal("50")),
        ("Dining", Decimal("30")),
    ]


def test_months_are_ordered(sample_records):
    monthly = aggregate_by_month(reversed(sample_records))

    assert list(monthly) == ["2024-01", "2024-02"]
    assert monthly["2024-02"].total_expenses == Decimal("190")
    assert monthly["2024-02"].total_income == Decimal("0")


def test_month_totals_match_record_sums(sample_records):
    monthly = aggregate_by_month(sample_records)

    income = sum(r.amount for r in sample_records if r.amount > 0)
    expenses = sum(-r.amount for r in sample_records if r.amount < 0)
    assert sum(m.total_income for m in monthly.values()) == income
    assert sum(m.total_expenses for m in monthly.values()) == expenses
    for month in monthly.values():
        assert sum(c.total for c in month.category_totals) == month.total_expenses

    assert sum(c.total for c in aggregate_by_category(sample_records)) == sum(
        m.total_expenses for m in monthly.values()
    )


def test_empty_input():
    assert aggregate_by_month([]) == {}
    assert aggregate_by_category([]) == []


def test_zero_amount_counts_nowhere(make_record):
    monthly = aggregate_by_month([make_record("z", datetime(2024, 4, 1), "0", "Fees")])

    april = monthly["2024-04"]
    assert april.total_income == 0
    assert april.total_expenses == 0
    assert april.category_totals == ()


def test_full_precision_until_rounded(make_record):
    records = [
        make_record("p1", datetime(2024, 1, 1), "-0.005", "Fees"),
        make_record("p2", datetime(2024, 1, 2), "-0.005", "Fees"),
    ]
    month = aggregate_by_month(records)["2024-01"]

    assert month.total_expenses == Decimal("0.010")
    assert month.rounded().total_expenses == Decimal("0.01")
    assert month.rounded().category_totals[0].total == Decimal("0.01")


def test_category_ties_keep_first_seen_order(make_record):
    records = [
        make_record("1", datetime(2024, 1, 1), "-10", "Books"),
        make_record("2", datetime(2024, 1, 2), "-25", "Rent"),
        make_record("3", datetime(2024, 1, 3), "-10", "Apps"),
        make_record("4", datetime(2024, 1, 4), "100", "Income"),
    ]
    totals = aggregate_by_category(records)

    assert [t.category for t in totals] == ["Rent", "Books", "Apps"]


def test_daily_series_is_dense(make_record):
    today = date(2024, 3, 10)
    start, end = trailing_days(7, today)
    records = [
        make_record("d1", datetime(2024, 3, 4, 10), "-12", "Dining"),
        make_record("d2", datetime(2024, 3, 4, 18), "-3", "Dining"),
        make_record("d3", datetime(2024, 3, 9, 8), "-20", "Transport"),
        make_record("d4", datetime(2024, 3, 9, 9), "500", "Income"),
        make_record("d5", datetime(2024, 2, 1, 9), "-99", "Outside"),
    ]
    series = aggregate_by_day(records, start, end)

    assert [p.day for p in series] == [date(2024, 3, d) for d in range(4, 11)]
    assert series[0].amount == Decimal("15")
    assert series[5].amount == Decimal("20")
    assert sum(1 for p in series if p.amount == 0) == 5


def test_daily_series_rejects_inverted_window():
    with pytest.raises(ValueError):
        aggregate_by_day([], date(2024, 1, 2), date(2024, 1, 1))


def test_trailing_days_requires_positive_length():
    assert trailing_days(1, date(2024, 1, 1)) == (date(2024, 1, 1), date(2024, 1, 1))
    with pytest.raises(ValueError):
        trailing_days(0)


def test_rolling_monthly_totals_fills_gaps(sample_records):
    rolling = rolling_monthly_totals(sample_records, months=4, today=date(2024, 3, 15))

    assert [m.month_key for m in rolling] == ["2023-12", "2024-01", "2024-02", "2024-03"]
    assert rolling[0].total_expenses == 0
    assert rolling[1].total_expenses == Decimal("80")
    assert rolling[3].category_totals == ()


def test_rolling_monthly_totals_crosses_year_boundary(sample_records):
    rolling = rolling_monthly_totals(sample_records, months=12, today=date(2024, 2, 29))

    assert len(rolling) == 12
    assert rolling[0].month_key == "2023-03"
    assert rolling[-1].month_key == "2024-02"
