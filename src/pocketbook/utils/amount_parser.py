"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Any
import re

CENT = Decimal("0.01")
# Numeric(12, 2) column limit
MAX_AMOUNT = Decimal("10000000000")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "€ 12"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        return Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e


def to_money(value: Any) -> Decimal:
    """Validate a currency amount: a non-negative number with at most 2 decimals.

    Accepts Decimal, int, float (JSON numbers) or a numeric string.

    Raises:
        ValueError: If value is not a finite non-negative amount below
            MAX_AMOUNT with at most two decimal places
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid amount {value!r}: must be a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        # str() keeps the shortest repr, so 45.67 stays 45.67
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = parse_amount(value)
    else:
        raise ValueError(f"Invalid amount {value!r}: must be a number")

    if not amount.is_finite():
        raise ValueError(f"Invalid amount {value!r}: must be a finite number")
    if amount < 0:
        raise ValueError(f"Invalid amount {value!r}: must not be negative")
    if amount >= MAX_AMOUNT:
        raise ValueError(f"Invalid amount {value!r}: must be less than {MAX_AMOUNT:,}")
    try:
        rounded = amount.quantize(CENT)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount {value!r}: at most 2 decimal places allowed") from e
    if amount != rounded:
        raise ValueError(f"Invalid amount {value!r}: at most 2 decimal places allowed")
    return rounded
