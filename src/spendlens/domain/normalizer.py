"""Transaction normalization.

Every source reports transactions in its own shape. ``normalize`` maps each
onto a single ``TransactionRecord`` where a negative amount is an expense and
``month_key`` is derived from the timestamp in the reporting time zone.
"""

import hashlib
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from dateutil import tz as dateutil_tz

from spendlens.domain.entities import (
    UNCATEGORIZED,
    SourceKind,
    TransactionRecord,
    TransactionStatus,
)
from spendlens.domain.errors import ValidationError
from spendlens.utils.amount_parser import parse_amount
from spendlens.utils.date_parser import month_key_for, parse_timestamp


@dataclass(frozen=True)
class SourceConvention:
    """How a source names its fields and signs its amounts."""

    id_field: str
    date_field: str
    amount_field: str
    merchant_field: Optional[str]
    description_field: Optional[str]
    category_field: str
    status_field: Optional[str]
    reference_field: Optional[str]
    expenses_positive: bool = False
    day_first: bool = False
    minor_units: bool = False
    default_account: Optional[str] = None


CONVENTIONS: dict[SourceKind, SourceConvention] = {
    SourceKind.MOCK: SourceConvention(
        id_field="id",
        date_field="date",
        amount_field="amount",
        merchant_field="merchant",
        description_field="description",
        category_field="category",
        status_field="status",
        reference_field="reference",
    ),
    SourceKind.STORE: SourceConvention(
        id_field="id",
        date_field="timestamp",
        amount_field="amount",
        merchant_field="merchant",
        description_field="description",
        category_field="category",
        status_field="status",
        reference_field="reference",
    ),
    SourceKind.CSV_BANK: SourceConvention(
        id_field="id",
        date_field="date",
        amount_field="amount",
        merchant_field=None,
        description_field="description",
        category_field="category",
        status_field=None,
        reference_field=None,
        day_first=True,
        default_account="Other",
    ),
    SourceKind.CSV_CARD_ISSUER: SourceConvention(
        id_field="id",
        date_field="date",
        amount_field="amount",
        merchant_field=None,
        description_field="description",
        category_field="category",
        status_field=None,
        reference_field=None,
        expenses_positive=True,
        default_account="Amex",
    ),
    SourceKind.STARLING: SourceConvention(
        id_field="feedItemUid",
        date_field="transactionTime",
        amount_field="amount",
        merchant_field="counterPartyName",
        description_field="counterPartyName",
        category_field="spendingCategory",
        status_field="status",
        reference_field="reference",
        minor_units=True,
        default_account="Starling",
    ),
    SourceKind.AMEX: SourceConvention(
        id_field="transactionId",
        date_field="date",
        amount_field="amount",
        merchant_field="merchantName",
        description_field="description",
        category_field="category",
        status_field="status",
        reference_field="referenceNumber",
        expenses_positive=True,
        default_account="Amex",
    ),
}


def normalize(
    raw: Union[Mapping[str, Any], TransactionRecord],
    source_kind: SourceKind,
    tz: Optional[tzinfo] = None,
) -> TransactionRecord:
    """Convert a raw transaction into a ``TransactionRecord``.

    Args:
        raw: Source-shaped mapping, or an already normalized record
        source_kind: Convention the raw shape follows
        tz: Reporting time zone used for ``timestamp`` and ``month_key``.
            Defaults to the zone of an already normalized record, else UTC

    Returns:
        Normalized record

    Raises:
        ValidationError: If the timestamp or amount cannot be parsed, the
            status is unknown, or the record has no id
    """
    if isinstance(raw, TransactionRecord):
        if tz is None:
            tz = raw.timestamp.tzinfo
        raw = record_to_raw(raw)
        source_kind = SourceKind.STORE
    if tz is None:
        tz = dateutil_tz.UTC
    convention = CONVENTIONS[SourceKind(source_kind)]

    try:
        timestamp = parse_timestamp(
            raw.get(convention.date_field), tz, day_first=convention.day_first
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e

    amount = _read_amount(raw.get(convention.amount_field), convention)

    description = _text(raw, convention.description_field)
    merchant = _text(raw, convention.merchant_field)
    if merchant is None and description:
        merchant = description.split()[0]
    if description is None:
        description = _text(raw, "reference") or merchant or "Transaction"

    record_id = _text(raw, convention.id_field)
    if record_id is None:
        raise ValidationError("Transaction has no id")

    return TransactionRecord(
        id=record_id,
        timestamp=timestamp,
        month_key=month_key_for(timestamp),
        amount=amount,
        category=_text(raw, convention.category_field) or UNCATEGORIZED,
        merchant=merchant or "Unknown",
        description=description,
        account=_text(raw, "account") or convention.default_account or "Other",
        status=_read_status(raw, convention),
        reference=_text(raw, convention.reference_field),
        notes=_text(raw, "notes"),
        provider=_text(raw, "provider"),
    )


def reassign_timestamp(
    record: TransactionRecord, timestamp: datetime, tz: tzinfo = dateutil_tz.UTC
) -> TransactionRecord:
    """Return a copy of ``record`` moved to ``timestamp`` with its month recomputed."""
    moved = parse_timestamp(timestamp, tz)
    return replace(record, timestamp=moved, month_key=month_key_for(moved))


def record_to_raw(record: TransactionRecord) -> dict[str, Any]:
    """Render a record in the persisted-store shape."""
    return {
        "id": record.id,
        "timestamp": record.timestamp.isoformat(),
        "month_key": record.month_key,
        "amount": str(record.amount),
        "category": record.category,
        "merchant": record.merchant,
        "description": record.description,
        "account": record.account,
        "status": record.status.value,
        "reference": record.reference,
        "notes": record.notes,
        "provider": record.provider,
    }


def generate_import_id(
    source: str, row_number: int, date_str: str, description: str, amount_str: str
) -> str:
    """Build a deterministic id for an imported row.

    Re-importing the same file yields the same ids, so rows replace instead of
    duplicating.
    """
    payload = "|".join([source, str(row_number), date_str, description, amount_str])
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()[:16]
    return f"imp-{digest}"


def _read_amount(value: Any, convention: SourceConvention) -> Decimal:
    if isinstance(value, Mapping):
        value = value.get("minorUnits")
    try:
        amount = parse_amount(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if convention.minor_units:
        amount = amount / 100
    if convention.expenses_positive:
        amount = -amount
    return amount


def _read_status(raw: Mapping[str, Any], convention: SourceConvention) -> TransactionStatus:
    value = _text(raw, convention.status_field)
    if value is None:
        return TransactionStatus.COMPLETED
    try:
        return TransactionStatus(value.lower())
    except ValueError:
        raise ValidationError(f"Unknown transaction status '{value}'")


def _text(raw: Mapping[str, Any], key: Optional[str]) -> Optional[str]:
    if key is None:
        return None
    value = raw.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None
