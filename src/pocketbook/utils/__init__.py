"""Utility functions for pocketbook."""

from pocketbook.utils.date_parser import parse_date, parse_iso_date
from pocketbook.utils.amount_parser import parse_amount, to_money
from pocketbook.utils.reference_resolver import resolve_reference

__all__ = ["parse_date", "parse_iso_date", "parse_amount", "to_money", "resolve_reference"]
