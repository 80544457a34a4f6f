"""
Time semantics utilities for UTC instants and zone-local civil time.

This module centralises zone database lookups so that an unknown timezone id
surfaces as a single error type wherever it is resolved.
"""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import TimeZoneNotFoundError

UTC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def resolve_timezone(timezone_id: str) -> ZoneInfo:
    """
    Look up a timezone in the zone database.

    Args:
        timezone_id: IANA timezone id such as "Europe/Berlin"

    Returns:
        ZoneInfo instance for the id

    Raises:
        TimeZoneNotFoundError: If the id is not a known zone
    """
    if not isinstance(timezone_id, str) or not timezone_id.strip():
        raise TimeZoneNotFoundError(
            f"Time zone {timezone_id!r} not found",
            timezone_id=timezone_id,
        )

    try:
        return ZoneInfo(timezone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise TimeZoneNotFoundError(
            f"Time zone {timezone_id!r} not found",
            timezone_id=timezone_id,
        ) from e


def ensure_utc(ts: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC instant.

    Args:
        ts: Aware datetime in any zone, or naive datetime assumed to be UTC

    Returns:
        Equivalent datetime with tzinfo=timezone.utc
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def utc_midnight(ts: datetime) -> datetime:
    """Return 00:00 UTC of the instant's UTC calendar date."""
    ts = ensure_utc(ts)
    return datetime.combine(ts.date(), time(0), tzinfo=timezone.utc)


def minutes_since_utc_midnight(ts: datetime) -> int:
    """Whole minutes elapsed since 00:00 UTC, seconds truncated."""
    ts = ensure_utc(ts)
    return ts.hour * 60 + ts.minute


def to_local_time(ts: datetime, zone: ZoneInfo) -> datetime:
    """Convert an instant to civil time in the given zone."""
    return ensure_utc(ts).astimezone(zone)


def local_hour(local_date: date, hour: int) -> datetime:
    """Naive wall-clock value for the given hour of a local calendar date."""
    return datetime.combine(local_date, time(0)) + timedelta(hours=hour)


def format_utc_timestamp(ts: datetime) -> str:
    """
    Format an instant for reports and logging.

    Args:
        ts: Instant to format

    Returns:
        String such as "2023-07-01T22:00:00Z"
    """
    return ensure_utc(ts).strftime(UTC_TIMESTAMP_FORMAT)
