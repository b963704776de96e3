"""Mapper functions to convert between domain records and SQLAlchemy rows."""

from datetime import datetime, tzinfo

from dateutil import tz as dateutil_tz

from spendlens.domain.entities import TransactionRecord, TransactionStatus
from spendlens.database.models import TransactionRow
from spendlens.utils.date_parser import month_key_for


def to_storage_timestamp(value: datetime) -> datetime:
    """Convert an aware datetime to the naive UTC form the table stores."""
    if value.tzinfo is None:
        return value
    return value.astimezone(dateutil_tz.UTC).replace(tzinfo=None)


def record_to_row(record: TransactionRecord) -> TransactionRow:
    """Convert a domain record to a SQLAlchemy row."""
    return TransactionRow(
        id=record.id,
        timestamp=to_storage_timestamp(record.timestamp),
        month_key=record.month_key,
        amount=record.amount,
        category=record.category,
        merchant=record.merchant,
        description=record.description,
        account=record.account,
        status=record.status.value,
        reference=record.reference,
        notes=record.notes,
        provider=record.provider,
    )


def row_to_record(row: TransactionRow, zone: tzinfo) -> TransactionRecord:
    """Convert a SQLAlchemy row to a domain record in the reporting time zone."""
    timestamp = row.timestamp.replace(tzinfo=dateutil_tz.UTC).astimezone(zone)
    return TransactionRecord(
        id=row.id,
        timestamp=timestamp,
        month_key=month_key_for(timestamp),
        amount=row.amount,
        category=row.category,
        merchant=row.merchant,
        description=row.description,
        account=row.account,
        status=TransactionStatus(row.status),
        reference=row.reference,
        notes=row.notes,
        provider=row.provider,
    )
