"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date, parse_month_key
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.formatting import format_currency, month_key_to_label

__all__ = [
    "parse_date",
    "parse_month_key",
    "parse_amount",
    "format_currency",
    "month_key_to_label",
]
