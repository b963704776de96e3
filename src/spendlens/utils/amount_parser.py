"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_amount(value) -> Decimal:
    """Parse an amount into a finite Decimal.

    Handles numbers and strings in various formats:
    - "123.45"
    - "$123.45", "£123.45"
    - "-123.45"
    - "-£123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        value: Amount as str, int, float or Decimal

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed or is not finite
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Could not parse amount {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        # str() keeps the shortest repr so 12.3 stays 12.3
        amount = Decimal(str(value))
    else:
        amount_str = str(value).strip()
        if not amount_str:
            raise ValueError("Empty amount string")

        is_negative = False
        if amount_str.startswith("(") and amount_str.endswith(")"):
            is_negative = True
            amount_str = amount_str[1:-1]

        amount_str = re.sub(r"[$€£¥]", "", amount_str)
        amount_str = amount_str.replace(",", "").strip()

        try:
            amount = Decimal(amount_str)
        except InvalidOperation:
            raise ValueError(f"Could not parse amount '{value}'")
        if is_negative:
            amount = -amount

    if not amount.is_finite():
        raise ValueError(f"Amount '{value}' is not a finite number")
    return amount


def round_money(amount: Decimal) -> Decimal:
    """Round a monetary value to two decimal places for presentation."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
