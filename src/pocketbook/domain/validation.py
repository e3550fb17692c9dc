"""Field validation shared by manual entry and bulk upload."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pocketbook.domain.errors import ValidationError
from pocketbook.utils.amount_parser import to_money
from pocketbook.utils.date_parser import parse_iso_date


def clean_name(value: Any, field: str = "name") -> str:
    """Return a stripped, non-empty name.

    Raises:
        ValidationError: If value is missing, not a string or blank
    """
    if value is None:
        raise ValidationError(f"Missing {field}")
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field} {value!r}: must be a string")
    name = value.strip()
    if not name:
        raise ValidationError(f"Missing {field}")
    return name


def clean_description(value: Any, field: str = "description") -> Optional[str]:
    """Return a stripped optional text field, None when blank.

    Raises:
        ValidationError: If value is neither None nor a string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field} {value!r}: must be a string or null")
    return value.strip() or None


def clean_name_list(value: Any, field: str = "tags") -> tuple[str, ...]:
    """Return unique stripped names in first-seen order.

    Raises:
        ValidationError: If value is not a list of non-empty strings
    """
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValidationError(f"Invalid {field} {value!r}: must be a list of names")
    names: list[str] = []
    for item in value:
        name = clean_name(item, field="tag name")
        if name not in names:
            names.append(name)
    return tuple(names)


def clean_amount(value: Any) -> Decimal:
    """Return a non-negative amount with at most two decimal places.

    Raises:
        ValidationError: If value is missing or not a valid amount
    """
    if value is None:
        raise ValidationError("Missing amount")
    try:
        return to_money(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def clean_date(value: Any) -> date:
    """Return a calendar date given as date or YYYY-MM-DD string.

    Raises:
        ValidationError: If value is missing or not a valid ISO date
    """
    if value is None:
        raise ValidationError("Missing date")
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e
