"""Tests for record filtering."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from dateutil import tz as dateutil_tz

from spendlens.domain.entities import AmountRange, DateRange, DateWindow, FilterSpec
from spendlens.domain.query import filter_records, resolve_date_range

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=dateutil_tz.UTC)


def test_empty_spec_returns_everything(sample_records):
    result = filter_records(sample_records, FilterSpec())

    assert result == sample_records
    assert result is not sample_records


def test_all_window_is_empty(sample_records):
    assert FilterSpec(date_range=DateWindow.ALL).is_empty()
    assert filter_records(sample_records, FilterSpec(date_range=DateWindow.ALL)) == sample_records


def test_filters_compose(make_record):
    a = make_record("A", NOW - timedelta(days=2), "-20", "Groceries", "Tesco", "Starling")
    b = make_record("B", NOW - timedelta(days=2), "-20", "Groceries", "Tesco", "Amex")
    c = make_record("C", NOW - timedelta(days=40), "-20", "Groceries", "Tesco", "Starling")
    d = make_record("D", NOW - timedelta(days=2), "-500", "Groceries", "Tesco", "Starling")

    spec = FilterSpec(
        search_term="tes",
        accounts=frozenset({"Starling"}),
        date_range=DateWindow.LAST_30_DAYS,
        amount_range=AmountRange(maximum=Decimal("100")),
    )

    assert filter_records([a, b, c, d], spec, now=NOW) == [a]


def test_search_matches_merchant_or_category(sample_records):
    by_merchant = filter_records(sample_records, FilterSpec(search_term="NANDO"))
    by_category = filter_records(sample_records, FilterSpec(search_term="groc"))

    assert [r.id for r in by_merchant] == ["t2"]
    assert [r.id for r in by_category] == ["t1", "t4"]


def test_category_filter(sample_records):
    spec = FilterSpec(categories=frozenset({"Travel", "Dining"}))

    assert [r.id for r in filter_records(sample_records, spec)] == ["t2", "t5"]


def test_amount_range_uses_magnitude(sample_records):
    spec = FilterSpec(amount_range=AmountRange(minimum=Decimal("60"), maximum=Decimal("2000")))

    assert [r.id for r in filter_records(sample_records, spec)] == ["t3", "t4", "t5"]


def test_explicit_dates_include_whole_days(sample_records):
    spec = FilterSpec(date_range=DateRange(start=date(2024, 1, 10), end=date(2024, 2, 2)))

    assert [r.id for r in filter_records(sample_records, spec)] == ["t2", "t3", "t4"]


def test_today_and_yesterday(make_record):
    today = make_record("today", NOW.replace(hour=1), "-1")
    yesterday = make_record("yesterday", NOW.replace(hour=23) - timedelta(days=1), "-1")
    older = make_record("older", NOW - timedelta(days=3), "-1")
    records = [today, yesterday, older]

    assert filter_records(records, FilterSpec(date_range=DateWindow.TODAY), now=NOW) == [today]
    assert filter_records(
        records, FilterSpec(date_range=DateWindow.YESTERDAY), now=NOW
    ) == [yesterday]


def test_rolling_windows():
    start, end = resolve_date_range(DateWindow.LAST_7_DAYS, NOW)
    assert start == NOW - timedelta(days=7)
    assert end is None

    start, end = resolve_date_range(DateWindow.LAST_YEAR, NOW)
    assert start == datetime(2023, 3, 15, 12, 0, tzinfo=dateutil_tz.UTC)
    assert end is None

    assert resolve_date_range(DateWindow.ALL, NOW) is None


def test_input_is_not_mutated(sample_records):
    before = list(sample_records)
    filter_records(sample_records, FilterSpec(search_term="tesco"))

    assert sample_records == before
