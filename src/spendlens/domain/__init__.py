"""Domain layer for spendlens.

The pure engines are re-exported here. Services that need a store live in
their own modules (``transaction``, ``csv_import``, ``providers``, ``account``).
"""

from spendlens.domain.normalizer import normalize, reassign_timestamp
from spendlens.domain.aggregation import (
    aggregate_by_category,
    aggregate_by_day,
    aggregate_by_month,
    rolling_monthly_totals,
)
from spendlens.domain.comparison import compare, latest_pair
from spendlens.domain.query import filter_records
from spendlens.domain.csv_export import export_csv

__all__ = [
    "normalize",
    "reassign_timestamp",
    "aggregate_by_category",
    "aggregate_by_day",
    "aggregate_by_month",
    "rolling_monthly_totals",
    "compare",
    "latest_pair",
    "filter_records",
    "export_csv",
]
