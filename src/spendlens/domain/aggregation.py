"""Aggregation of normalized records into monthly, categorical and daily rollups.

All functions are pure and keep full Decimal precision. Rounding happens only
when a caller asks an aggregate for its ``rounded()`` presentation copy.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from spendlens.domain.entities import (
    UNCATEGORIZED,
    CategoryTotal,
    DailyTotal,
    MonthlyAggregate,
    TransactionRecord,
)
from spendlens.utils.date_parser import month_key_for

ZERO = Decimal("0")


def aggregate_by_month(
    records: Iterable[TransactionRecord],
) -> dict[str, MonthlyAggregate]:
    """Fold records into one ``MonthlyAggregate`` per month key.

    Returns:
        Mapping of month key to aggregate, in ascending month order
    """
    by_month: dict[str, list[TransactionRecord]] = defaultdict(list)
    for record in records:
        by_month[record.month_key].append(record)

    return {
        month_key: _aggregate_month(month_key, by_month[month_key])
        for month_key in sorted(by_month)
    }


def aggregate_by_category(records: Iterable[TransactionRecord]) -> list[CategoryTotal]:
    """Sum expense magnitudes per category.

    Income is not categorized. Results are sorted by descending total; equal
    totals keep the order in which their categories were first seen.
    """
    totals: dict[str, Decimal] = {}
    for record in records:
        if record.amount < 0:
            category = record.category or UNCATEGORIZED
            totals[category] = totals.get(category, ZERO) - record.amount

    # sorted() is stable and dicts keep insertion order, so ties stay first-seen
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category=name, total=total) for name, total in ordered]


def aggregate_by_day(
    records: Iterable[TransactionRecord], start: date, end: date
) -> list[DailyTotal]:
    """Build a dense daily expense series for ``start``..``end`` inclusive.

    Every calendar day in the window gets an entry, with zero on days without
    expenses.

    Raises:
        ValueError: If ``start`` is after ``end``
    """
    if start > end:
        raise ValueError(f"Window start {start} is after end {end}")

    daily: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for record in records:
        day = record.day
        if record.amount < 0 and start <= day <= end:
            daily[day] -= record.amount

    series = []
    current = start
    while current <= end:
        series.append(DailyTotal(day=current, amount=daily.get(current, ZERO)))
        current += timedelta(days=1)
    return series


def trailing_days(days: int, today: Optional[date] = None) -> tuple[date, date]:
    """Return the ``days``-long window ending on ``today`` inclusive.

    Raises:
        ValueError: If ``days`` is less than one
    """
    if days < 1:
        raise ValueError("Window must span at least one day")
    end = today or date.today()
    return end - timedelta(days=days - 1), end


def rolling_monthly_totals(
    records: Iterable[TransactionRecord],
    months: int = 12,
    today: Optional[date] = None,
) -> list[MonthlyAggregate]:
    """Return aggregates for the last ``months`` months, oldest first.

    Months without records are present with zero totals. Records outside the
    window are ignored.
    """
    current = (today or date.today()).replace(day=1)
    keys = [
        month_key_for(current - relativedelta(months=offset))
        for offset in range(months - 1, -1, -1)
    ]
    window = set(keys)
    aggregates = aggregate_by_month(r for r in records if r.month_key in window)
    return [aggregates.get(key, MonthlyAggregate(month_key=key)) for key in keys]


def _aggregate_month(
    month_key: str, records: Sequence[TransactionRecord]
) -> MonthlyAggregate:
    income = ZERO
    expenses = ZERO
    for record in records:
        if record.amount > 0:
            income += record.amount
        elif record.amount < 0:
            expenses -= record.amount

    return MonthlyAggregate(
        month_key=month_key,
        total_income=income,
        total_expenses=expenses,
        category_totals=tuple(aggregate_by_category(records)),
    )
