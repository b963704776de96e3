"""CSV export of transaction records."""

import csv
import io
from typing import Iterable

from spendlens.domain.entities import TransactionRecord
from spendlens.utils.amount_parser import round_money

EXPORT_COLUMNS = ("date", "description", "merchant", "amount", "category", "account")


def export_csv(records: Iterable[TransactionRecord]) -> str:
    """Render records as CSV text.

    Columns are fixed (``date, description, merchant, amount, category,
    account``), dates are ISO ``YYYY-MM-DD`` in the reporting time zone, and
    fields containing a comma are quoted. Rows end with CRLF.

    Returns:
        CSV text including the header, or an empty string when there are no
        records
    """
    records = list(records)
    if not records:
        return ""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerow(EXPORT_COLUMNS)
    for record in records:
        writer.writerow(
            [
                record.timestamp.date().isoformat(),
                record.description,
                record.merchant,
                f"{round_money(record.amount):f}",
                record.category,
                record.account,
            ]
        )
    return buffer.getvalue()
