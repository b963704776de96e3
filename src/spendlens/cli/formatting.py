"""Display formatting for CLI output."""

from decimal import Decimal

from spendlens.domain.entities import Percent, PercentMarker
from spendlens.utils.amount_parser import round_money


def format_money(amount: Decimal) -> str:
    """Format an amount as currency, e.g. ``£1,234.50`` or ``-£12.00``."""
    rounded = round_money(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}£{abs(rounded):,.2f}"


def format_percent(percent: Percent) -> str:
    """Format a percent change, rendering zero-baseline markers as words."""
    if percent is None:
        return "-"
    if isinstance(percent, PercentMarker):
        return "new" if percent is PercentMarker.NEW else "up from zero"
    return f"{round_money(percent):+,.2f}%"
