"""Date utility functions."""

from datetime import date, datetime
from typing import Optional


def parse_date(date_str: str) -> date:
    """
    Parse a date string in ISO format (YYYY-MM-DD).

    Args:
        date_str: Date string in ISO format

    Returns:
        Date object
    """
    try:
        return date.fromisoformat(date_str)
    except ValueError as err:
        raise ValueError(f"Invalid date format: {date_str}. Expected format: YYYY-MM-DD") from err


def parse_optional_date(date_str: Optional[str]) -> Optional[date]:
    """Like parse_date, but blank input means no date."""
    if date_str is None or not date_str.strip():
        return None
    return parse_date(date_str.strip())


def format_session_date(moment: datetime) -> str:
    """Local date and time of a session, e.g. 'Mon 2024-01-15 17:30'."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime("%a %Y-%m-%d %H:%M")
