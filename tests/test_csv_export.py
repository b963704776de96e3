"""Tests for CSV export."""

import csv
import io
from datetime import datetime

from spendlens.domain.csv_export import export_csv


def test_export_empty():
    assert export_csv([]) == ""


def test_export_rows(make_record):
    records = [
        make_record("e1", datetime(2024, 1, 5, 10), "-45.205", "Groceries", "Tesco", "Amex"),
        make_record(
            "e2",
            datetime(2024, 1, 6),
            "12",
            "Refunds",
            "Shop",
            "Starling",
            description="Refund, partial",
        ),
    ]
    text = export_csv(records)

    lines = text.split("\r\n")
    assert lines[0] == "date,description,merchant,amount,category,account"
    assert lines[1] == "2024-01-05,Transaction,Tesco,-45.21,Groceries,Amex"
    assert lines[2] == '2024-01-06,"Refund, partial",Shop,12.00,Refunds,Starling'
    assert text.endswith("\r\n")

    rows = list(csv.DictReader(io.StringIO(text)))
    assert rows[1]["description"] == "Refund, partial"
