"""Date formatting helpers for Markdown output."""

import logging
from datetime import datetime, timezone

import dateutil.parser

logger = logging.getLogger("forgejo-mcp.utils.date")

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse an RFC 3339 timestamp from the Forgejo API.

    Returns:
        The parsed datetime, or None for empty and unparseable values
    """
    if value is None or isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return dateutil.parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Could not parse date '{value}': {e}")
        return None


def format_date(value: str | datetime | None, format_string: str = DATE_FORMAT) -> str:
    """Format a timestamp, returning an empty string when there is none.

    Strings that cannot be parsed are returned unchanged.
    """
    parsed = parse_datetime(value)
    if parsed is None:
        return value if isinstance(value, str) else ""
    return parsed.strftime(format_string)


def format_duration(start: datetime | None, end: datetime | None) -> str:
    """Render the time between two instants as ``1h2m3s`` style text."""
    if start is None or end is None:
        return ""
    seconds = int((end - start).total_seconds())
    if seconds < 0:
        return ""
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"


def parse_date_argument(value: str | None, argument: str = "date") -> datetime | None:
    """Parse a user supplied date (``2024-12-31`` or RFC 3339).

    Values without a UTC offset are taken as UTC.

    Raises:
        ValueError: If the value is not empty and cannot be parsed
    """
    if not value:
        return None
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(
            f"Invalid {argument} '{value}', expected YYYY-MM-DD or RFC 3339"
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
