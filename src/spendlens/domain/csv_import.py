"""CSV import domain service."""

import csv
from datetime import tzinfo
from pathlib import Path
from typing import Iterable, Mapping, Optional

from dateutil import tz as dateutil_tz

from spendlens.database.base import TransactionStore
from spendlens.domain.entities import (
    ColumnMapping,
    ImportResult,
    RowError,
    SourceKind,
    TransactionRecord,
)
from spendlens.domain.errors import ValidationError, missing_csv_columns
from spendlens.domain.normalizer import generate_import_id, normalize
from spendlens.logging_setup import get_logger

logger = get_logger("spendlens.domain.csv_import")

CSV_SOURCE_KINDS = (SourceKind.CSV_BANK, SourceKind.CSV_CARD_ISSUER)

DEFAULT_MAPPINGS: dict[SourceKind, ColumnMapping] = {
    SourceKind.CSV_CARD_ISSUER: ColumnMapping(
        date="Date", description="Description", amount="Amount", category="Category"
    ),
}


def default_mapping(source_kind: SourceKind) -> Optional[ColumnMapping]:
    """Return the built-in column mapping for a CSV convention, if any."""
    return DEFAULT_MAPPINGS.get(SourceKind(source_kind))


class CSVImportService:
    """Service for importing CSV files."""

    def __init__(self, store: TransactionStore, zone: tzinfo = dateutil_tz.UTC):
        """Initialize CSV import service.

        Args:
            store: Transaction store that receives imported records
            zone: Reporting time zone for month bucketing
        """
        self.store = store
        self.zone = zone

    def import_csv(
        self,
        csv_file_path: str,
        source_kind: SourceKind,
        mapping: Optional[ColumnMapping] = None,
        account: Optional[str] = None,
    ) -> ImportResult:
        """Import transactions from a CSV file.

        Rows that fail to normalize are reported in the result and skipped;
        every other row is stored, replacing records with the same id.

        Args:
            csv_file_path: Path to CSV file
            source_kind: CSV convention (bank or card issuer)
            mapping: Column names to read; defaults to the convention's mapping
            account: Account label for imported records

        Returns:
            ImportResult with stored records and per-row errors

        Raises:
            ValidationError: If the mapping is missing or incomplete, or the
                file lacks mapped columns
            FileNotFoundError: If CSV file doesn't exist
        """
        mapping = self._resolve_mapping(source_kind, mapping)

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(2048)
            f.seek(0)
            try:
                dialect = csv.Sniffer().sniff(sample, delimiters=",;\t|")
            except csv.Error:
                dialect = csv.excel

            reader = csv.DictReader(f, dialect=dialect)
            csv_columns = reader.fieldnames
            if csv_columns is None:
                raise ValidationError("CSV file has no columns")

            required = {mapping.date, mapping.description, mapping.amount}
            missing = required - set(csv_columns)
            if missing:
                raise ValidationError(missing_csv_columns(missing))

            result = self.parse_rows(
                reader,
                source_kind=source_kind,
                mapping=mapping,
                source_name=csv_path.name,
                account=account,
            )

        self.store.put_many(result.records)
        logger.info(
            "Imported %d transactions from %s (%d rows rejected)",
            result.imported,
            csv_path.name,
            len(result.errors),
        )
        return result

    def parse_rows(
        self,
        rows: Iterable[Mapping[str, Optional[str]]],
        source_kind: SourceKind,
        mapping: ColumnMapping,
        source_name: str = "import",
        account: Optional[str] = None,
    ) -> ImportResult:
        """Normalize parsed CSV rows without touching the store.

        Row numbers start at 2 so they match spreadsheet line numbers under the
        header row.
        """
        source_kind = SourceKind(source_kind)
        if source_kind not in CSV_SOURCE_KINDS:
            raise ValidationError(f"'{source_kind.value}' is not a CSV convention")

        records: list[TransactionRecord] = []
        errors: list[RowError] = []

        for row_num, row in enumerate(rows, start=2):
            values = {
                "date": _cell(row, mapping.date),
                "description": _cell(row, mapping.description),
                "amount": _cell(row, mapping.amount),
                "category": _cell(row, mapping.category),
            }
            if not any(values.values()):
                continue
            if not values["date"]:
                errors.append(RowError(row_num, "Missing date"))
                continue
            if not values["amount"]:
                errors.append(RowError(row_num, "Missing amount"))
                continue

            raw = dict(values)
            raw["id"] = generate_import_id(
                source_name,
                row_num,
                values["date"],
                values["description"] or "",
                values["amount"],
            )
            raw["account"] = account
            raw["provider"] = "csv"
            try:
                records.append(normalize(raw, source_kind, self.zone))
            except ValidationError as e:
                errors.append(RowError(row_num, str(e)))

        for error in errors:
            logger.warning("Skipped %s", error)
        return ImportResult(records=tuple(records), errors=tuple(errors))

    def _resolve_mapping(
        self, source_kind: SourceKind, mapping: Optional[ColumnMapping]
    ) -> ColumnMapping:
        mapping = mapping or default_mapping(source_kind)
        if mapping is None:
            raise ValidationError(
                f"A column mapping is required for '{SourceKind(source_kind).value}' imports"
            )
        if not mapping.date or not mapping.description or not mapping.amount:
            raise ValidationError(
                "Please map the required fields (date, description, amount)"
            )
        return mapping


def _cell(row: Mapping[str, Optional[str]], column: Optional[str]) -> Optional[str]:
    if not column:
        return None
    value = row.get(column)
    if value is None:
        return None
    return value.strip() or None
