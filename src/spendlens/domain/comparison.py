"""Month-over-month expense comparison."""

from decimal import Decimal
from typing import Iterable, Optional

from spendlens.domain.entities import (
    CategoryDelta,
    ComparisonResult,
    Delta,
    MonthlyAggregate,
    Percent,
    PercentMarker,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def compare(baseline: MonthlyAggregate, comparand: MonthlyAggregate) -> ComparisonResult:
    """Compare the expenses of ``comparand`` against ``baseline``.

    The caller decides which month is older; month keys are not inspected.

    Args:
        baseline: Older month
        comparand: Newer month

    Returns:
        ComparisonResult with the total delta and one delta per category in
        either month, largest swing first
    """
    total_absolute = comparand.total_expenses - baseline.total_expenses
    if baseline.total_expenses == 0:
        total_percent: Percent = (
            ZERO if comparand.total_expenses == 0 else PercentMarker.INFINITE
        )
    else:
        total_percent = percent_change(baseline.total_expenses, comparand.total_expenses)

    categories: dict[str, None] = {}
    for item in baseline.category_totals:
        categories.setdefault(item.category)
    for item in comparand.category_totals:
        categories.setdefault(item.category)

    deltas = [
        _category_delta(
            category,
            baseline.category_total(category),
            comparand.category_total(category),
        )
        for category in categories
    ]
    deltas.sort(key=lambda delta: abs(delta.absolute), reverse=True)

    return ComparisonResult(
        baseline=baseline,
        comparand=comparand,
        total_delta=Delta(absolute=total_absolute, percent=total_percent),
        category_deltas=tuple(deltas),
    )


def percent_change(old: Decimal, new: Decimal) -> Optional[Decimal]:
    """Return ``(new - old) / old * 100``, or None when ``old`` is zero."""
    if old == 0:
        return None
    return (new - old) / old * HUNDRED


def latest_pair(
    monthly: Iterable[MonthlyAggregate],
) -> Optional[tuple[MonthlyAggregate, MonthlyAggregate]]:
    """Pick the two most recent months with spending, oldest first.

    Returns:
        (baseline, comparand) tuple, or None when fewer than two months have
        expenses
    """
    with_spending = sorted(
        (month for month in monthly if month.total_expenses > 0),
        key=lambda month: month.month_key,
    )
    if len(with_spending) < 2:
        return None
    return with_spending[-2], with_spending[-1]


def _category_delta(category: str, old: Decimal, new: Decimal) -> CategoryDelta:
    if old == 0:
        percent: Percent = PercentMarker.NEW if new != 0 else None
    else:
        percent = percent_change(old, new)
    return CategoryDelta(
        category=category,
        baseline=old,
        comparand=new,
        absolute=new - old,
        percent=percent,
    )
