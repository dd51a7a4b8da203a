"""Date parsing utilities."""

from datetime import UTC, date, datetime, time, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ALL_MONTHS = "all"


def _midnight_utc(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def parse_date(date_str: str) -> datetime:
    """Parse a date string into a UTC instant.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024", etc.
    - Full instants: "2024-01-15T10:30:00Z", "2024-01-15T10:30:00-03:00"
    - Relative dates: "today", "yesterday", "tomorrow"

    Plain dates become midnight UTC. Instants without an offset are taken
    as UTC; instants with one are converted to UTC.

    Args:
        date_str: Date string in various formats

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return _midnight_utc(relative_dates[date_str])

    # Day-first when the string uses slashes (dd/mm/yyyy)
    dayfirst = "/" in date_str

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str, dayfirst=dayfirst)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_month_key(month_str: str) -> str:
    """Parse a month selector into a ``YYYY-MM`` bucket or ``"all"``.

    Accepts "all", "this month", "last month", "2024-03", "03/2024", or any
    date string (its month is used).

    Raises:
        ValueError: If the selector cannot be parsed
    """
    month_str = month_str.strip().lower()
    today = date.today()

    if month_str == ALL_MONTHS:
        return ALL_MONTHS
    if month_str == "this month":
        return today.strftime("%Y-%m")
    if month_str == "last month":
        return (today - relativedelta(months=1)).strftime("%Y-%m")

    parts = month_str.replace("/", "-").split("-")
    if len(parts) == 2 and all(p.isdigit() for p in parts):
        year, month = (parts[0], parts[1]) if len(parts[0]) == 4 else (parts[1], parts[0])
        if len(year) == 4 and 1 <= int(month) <= 12:
            return f"{year}-{int(month):02d}"
        raise ValueError(f"Could not parse month '{month_str}'")

    return parse_date(month_str).strftime("%Y-%m")
