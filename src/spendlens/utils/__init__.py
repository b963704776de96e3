"""Utility functions for spendlens."""

from spendlens.utils.date_parser import parse_date, parse_timestamp, month_key_for
from spendlens.utils.amount_parser import parse_amount, round_money

__all__ = ["parse_date", "parse_timestamp", "month_key_for", "parse_amount", "round_money"]
