"""Date utilities for pocketfin.

Pure functions for parsing transaction dates and deriving month keys.
"""

from datetime import date, datetime

from pocketfin.domain.models import Month

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date | None:
    """Parse a transaction date.

    Args:
        value: Date string in YYYY-MM-DD format.

    Returns:
        The parsed date, or None if the string is not a valid calendar date.
    """
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except (ValueError, AttributeError):
        return None


def month_key(value: str) -> Month | None:
    """Derive the YYYY-MM bucket key for a transaction date.

    Args:
        value: Date string in YYYY-MM-DD format.

    Returns:
        Month key, or None for unparsable dates.
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    return Month(f"{parsed.year:04d}-{parsed.month:02d}")


def month_label(month: Month) -> str:
    """Human-readable month label.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Label such as "January 2025".
    """
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")


def today_iso() -> str:
    """Today's date in YYYY-MM-DD format."""
    return date.today().strftime(ISO_DATE_FORMAT)
