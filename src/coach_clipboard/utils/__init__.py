"""Utility functions for Coach Clipboard."""

from coach_clipboard.utils.dates import format_session_date, parse_date, parse_optional_date
from coach_clipboard.utils.formatting import format_minutes, split_csv

__all__ = [
    "parse_date",
    "parse_optional_date",
    "format_session_date",
    "format_minutes",
    "split_csv",
]
