"""Timestamps carried by LogInfo and rendered by formatters."""

from datetime import datetime, timezone

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    """Aware UTC time of a log call."""
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime, date_format: str | None = None) -> str:
    """Render a timestamp with ``strftime``.

    Args:
        moment: Timestamp of the log call
        date_format: strftime format, DEFAULT_DATE_FORMAT when empty or None

    Returns:
        The formatted date
    """
    return moment.strftime(date_format or DEFAULT_DATE_FORMAT)


def iso_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds")
