"""Formatting utilities."""


def format_minutes(minutes: int) -> str:
    """Render a duration in minutes as '45 min' or '1h 05m'."""
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m"


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated tool argument, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
