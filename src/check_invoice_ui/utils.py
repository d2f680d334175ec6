"""
Utility functions for order data parsing and formatting.

Provides helpers for:
- Date parsing and the UTC "today" default of the lookup form
- Money parsing (values arrive as numbers, strings or null) and formatting
- Resolving backend document URLs against the configured base URL
"""

from datetime import date, datetime, timezone


def today_utc() -> str:
    """Return today's date in UTC formatted as YYYY-MM-DD."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def parse_calendar_date(date_str: str | None) -> date | None:
    """
    Parse a YYYY-MM-DD string into a date.

    Args:
        date_str: Date string as produced by an HTML date input.

    Returns:
        date object if parsing succeeds, None otherwise.
    """
    if date_str:
        date_str = date_str.strip()
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_datetime(value: str | None) -> datetime | None:
    """
    Parse an ISO 8601 timestamp, accepting a trailing "Z".

    Returns:
        datetime object if parsing succeeds, None otherwise.
    """
    if value:
        value = str(value).strip()
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def parse_amount(value: object) -> float | None:
    """Convert a number, numeric string or null into a float."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace(",", "")
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def format_currency(value: float | None, currency: str = "MXN") -> str:
    """
    Format an amount with the currency code prefix.

    Returns:
        Formatted string like 'MXN 1,234.56', or an empty string for None.
    """
    if value is None:
        return ""
    return f"{currency} {value:,.2f}"


def resolve_url(base_url: str, path: str | None) -> str:
    """
    Resolve a document URL returned by the backend.

    Relative paths are joined to the base URL; absolute URLs are kept.

    Args:
        base_url: Configured backend base URL, without a trailing slash.
        path: URL or path from a backend response.

    Returns:
        Absolute URL, or an empty string when path is empty.
    """
    if not path:
        return ""
    if path.startswith(("http://", "https://")):
        return path
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}{path}"
