"""
Date Formatting Helpers

Dates are shown in the medium style used throughout the catalog pages
("Jun 25, 1903") and echoed into HTML date inputs as ISO strings.
"""

from datetime import date


def format_date_medium(value: date | None, default: str = "") -> str:
    """
    Format a date as abbreviated month, day and year.

    Examples:
        >>> format_date_medium(date(1903, 6, 25))
        'Jun 25, 1903'
        >>> format_date_medium(None, "unknown")
        'unknown'
    """
    if value is None:
        return default
    return f"{value:%b} {value.day}, {value.year}"


def format_date_iso(value: date | None) -> str:
    """Format a date for an <input type="date"> value ("" when absent)."""
    return value.isoformat() if value is not None else ""
