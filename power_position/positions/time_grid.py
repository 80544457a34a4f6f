"""Hourly UTC time grid construction for a local delivery date"""

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from zoneinfo import ZoneInfo

import structlog

from ..utils.time import format_utc_timestamp, local_hour, resolve_timezone

logger = structlog.get_logger(__name__)

HOURS_PER_DAY = 24

TimeGrid = tuple[datetime, ...]


class HourKind(Enum):
    """How a wall-clock value relates to the zone's transition rules."""
    NORMAL = "normal"        # Occurs exactly once
    GAP = "gap"              # Skipped by a spring-forward transition
    AMBIGUOUS = "ambiguous"  # Repeated by a fall-back transition


def classify_local_time(local_time: datetime, zone: ZoneInfo) -> HourKind:
    """
    Classify a naive wall-clock value against a zone's transitions.

    The two fold interpretations of the value disagree only around a
    transition: in a gap fold=0 applies the earlier (smaller) offset, in a
    repeated hour fold=0 applies the earlier (daylight, larger) offset.

    Args:
        local_time: Naive wall-clock value
        zone: Target timezone

    Returns:
        HourKind of the value
    """
    first = local_time.replace(tzinfo=zone, fold=0).utcoffset()
    second = local_time.replace(tzinfo=zone, fold=1).utcoffset()

    if first == second:
        return HourKind.NORMAL
    if first > second:
        return HourKind.AMBIGUOUS
    return HourKind.GAP


def dst_delta(local_time: datetime, zone: ZoneInfo) -> timedelta:
    """Offset difference between the two occurrences of a repeated wall-clock value."""
    return (local_time.replace(tzinfo=zone, fold=0).utcoffset()
            - local_time.replace(tzinfo=zone, fold=1).utcoffset())


def to_utc(local_time: datetime, zone: ZoneInfo) -> datetime:
    """Convert a wall-clock value to UTC using its first occurrence."""
    return local_time.replace(tzinfo=zone, fold=0).astimezone(timezone.utc)


def build_hourly_grid(local_date: date, timezone_id: str) -> TimeGrid:
    """
    Build the UTC instants for every local hour of a calendar date.

    Hours skipped by a spring-forward transition are left out, hours repeated
    by a fall-back transition appear twice, so the grid holds 23, 24 or 25
    strictly increasing instants.

    Args:
        local_date: Calendar date in the target timezone
        timezone_id: IANA timezone id

    Returns:
        Ordered tuple of aware UTC datetimes

    Raises:
        TimeZoneNotFoundError: If the timezone id is unknown
    """
    zone = resolve_timezone(timezone_id)
    instants: list[datetime] = []

    for hour in range(HOURS_PER_DAY):
        local_time = local_hour(local_date, hour)
        kind = classify_local_time(local_time, zone)

        if kind is HourKind.GAP:
            logger.debug(
                "Skipping local hour missing from the civil clock",
                local_time=local_time.isoformat(),
                timezone=timezone_id,
            )
            continue

        first_utc = to_utc(local_time, zone)
        instants.append(first_utc)

        if kind is HourKind.AMBIGUOUS:
            second_utc = first_utc + dst_delta(local_time, zone)
            instants.append(second_utc)
            logger.debug(
                "Added second occurrence of repeated local hour",
                local_time=local_time.isoformat(),
                first_utc=format_utc_timestamp(first_utc),
                second_utc=format_utc_timestamp(second_utc),
                timezone=timezone_id,
            )

    instants.sort()

    logger.debug(
        "Built hourly time grid",
        date=local_date.isoformat(),
        timezone=timezone_id,
        first_hour=format_utc_timestamp(instants[0]),
        last_hour=format_utc_timestamp(instants[-1]),
        count=len(instants),
    )

    return tuple(instants)


class TimeGridBuilder:
    """Builds hourly UTC grids; holds no state between calls"""

    def build_hourly_grid(self, local_date: date, timezone_id: str) -> TimeGrid:
        """
        Build the hourly grid for a local date

        Args:
            local_date: Calendar date in the target timezone
            timezone_id: IANA timezone id

        Returns:
            Ordered tuple of aware UTC datetimes

        Raises:
            TimeZoneNotFoundError: If the timezone id is unknown
        """
        return build_hourly_grid(local_date, timezone_id)
