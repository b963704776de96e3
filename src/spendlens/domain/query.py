"""Record filtering.

``filter_records`` applies a ``FilterSpec`` to a record collection and returns
a new list. Named date windows are resolved against the time of the call, so
the same spec selects different records on different days.
"""

from datetime import datetime, time, timedelta, tzinfo
from typing import Iterable, Optional

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta

from spendlens.domain.entities import (
    DateRange,
    DateWindow,
    FilterSpec,
    TransactionRecord,
)


def filter_records(
    records: Iterable[TransactionRecord],
    spec: FilterSpec,
    now: Optional[datetime] = None,
) -> list[TransactionRecord]:
    """Return the records matching every field set on ``spec``.

    Args:
        records: Records to filter; never mutated
        spec: Predicate; an empty spec matches everything
        now: Reference time for named windows. Defaults to the current time

    Returns:
        New list of matching records in input order
    """
    records = list(records)
    if spec.is_empty():
        return records

    bounds = None
    if spec.date_range is not None:
        bounds = resolve_date_range(spec.date_range, now or _now_for(records))

    term = spec.search_term.lower() if spec.search_term else None
    amount_range = spec.amount_range

    results = []
    for record in records:
        if term and term not in record.merchant.lower() and term not in record.category.lower():
            continue
        if spec.accounts and record.account not in spec.accounts:
            continue
        if spec.categories and record.category not in spec.categories:
            continue
        if bounds is not None and not _within(record.timestamp, bounds):
            continue
        if amount_range is not None:
            magnitude = abs(record.amount)
            if amount_range.minimum is not None and magnitude < amount_range.minimum:
                continue
            if amount_range.maximum is not None and magnitude > amount_range.maximum:
                continue
        results.append(record)
    return results


def resolve_date_range(
    date_range, now: datetime
) -> Optional[tuple[Optional[datetime], Optional[datetime]]]:
    """Turn a named window or explicit range into ``[start, end)`` datetimes.

    Rolling windows (last 7/30 days, last year) and ``today`` have no upper
    bound. ``yesterday`` covers exactly the previous calendar day.

    Returns:
        (start, end) tuple where either side may be None, or None for
        ``DateWindow.ALL``
    """
    zone = now.tzinfo or dateutil_tz.UTC
    if now.tzinfo is None:
        now = now.replace(tzinfo=zone)
    midnight = datetime.combine(now.date(), time.min, tzinfo=zone)

    if isinstance(date_range, DateRange):
        return (
            _start_of(date_range.start, zone),
            _end_of(date_range.end, zone),
        )

    window = DateWindow(date_range)
    if window == DateWindow.ALL:
        return None
    if window == DateWindow.TODAY:
        return midnight, None
    if window == DateWindow.YESTERDAY:
        return midnight - timedelta(days=1), midnight
    if window == DateWindow.LAST_7_DAYS:
        return now - timedelta(days=7), None
    if window == DateWindow.LAST_30_DAYS:
        return now - timedelta(days=30), None
    return now - relativedelta(years=1), None


def _within(
    timestamp: datetime, bounds: Optional[tuple[Optional[datetime], Optional[datetime]]]
) -> bool:
    if bounds is None:
        return True
    start, end = bounds
    if start is not None and timestamp < start:
        return False
    if end is not None and timestamp >= end:
        return False
    return True


def _start_of(value, zone: tzinfo) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=zone)
    return datetime.combine(value, time.min, tzinfo=zone)


def _end_of(value, zone: tzinfo) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        # explicit datetimes are inclusive
        value = value if value.tzinfo else value.replace(tzinfo=zone)
        return value + timedelta(microseconds=1)
    return datetime.combine(value + timedelta(days=1), time.min, tzinfo=zone)


def _now_for(records: list[TransactionRecord]) -> datetime:
    zone = records[0].timestamp.tzinfo if records else None
    return datetime.now(zone or dateutil_tz.UTC)
