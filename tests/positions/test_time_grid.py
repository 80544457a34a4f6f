"""
Tests for hourly time grid construction.

Verifies that local hours are reconciled with daylight-saving transitions:
skipped hours disappear, repeated hours appear twice and the grid stays
strictly increasing in UTC.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch
from zoneinfo import ZoneInfo

from power_position.errors import TimeZoneNotFoundError
from power_position.positions.time_grid import (
    HourKind,
    TimeGridBuilder,
    build_hourly_grid,
    classify_local_time,
    dst_delta,
)

BERLIN = "Europe/Berlin"
ONE_HOUR = timedelta(hours=1)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def assert_hourly_steps(grid) -> None:
    for earlier, later in zip(grid, grid[1:]):
        assert later - earlier == ONE_HOUR


class TestClassifyLocalTime:
    """Test the tri-state wall-clock classifier."""

    def test_regular_summer_hour_is_normal(self):
        zone = ZoneInfo(BERLIN)
        assert classify_local_time(datetime(2023, 7, 2, 12, 0), zone) is HourKind.NORMAL

    def test_spring_forward_hour_is_gap(self):
        zone = ZoneInfo(BERLIN)
        assert classify_local_time(datetime(2024, 3, 31, 2, 0), zone) is HourKind.GAP
        assert classify_local_time(datetime(2024, 3, 31, 2, 30), zone) is HourKind.GAP

    def test_fall_back_hour_is_ambiguous(self):
        zone = ZoneInfo(BERLIN)
        assert classify_local_time(datetime(2024, 10, 27, 2, 0), zone) is HourKind.AMBIGUOUS
        assert classify_local_time(datetime(2024, 10, 27, 2, 30), zone) is HourKind.AMBIGUOUS

    def test_hours_next_to_transitions_are_normal(self):
        zone = ZoneInfo(BERLIN)
        assert classify_local_time(datetime(2024, 3, 31, 1, 0), zone) is HourKind.NORMAL
        assert classify_local_time(datetime(2024, 3, 31, 3, 0), zone) is HourKind.NORMAL
        assert classify_local_time(datetime(2024, 10, 27, 1, 0), zone) is HourKind.NORMAL
        assert classify_local_time(datetime(2024, 10, 27, 3, 0), zone) is HourKind.NORMAL

    def test_utc_never_has_transitions(self):
        zone = ZoneInfo("UTC")
        for hour in range(24):
            assert classify_local_time(datetime(2024, 3, 31, hour), zone) is HourKind.NORMAL

    def test_dst_delta_is_one_hour_in_berlin(self):
        zone = ZoneInfo(BERLIN)
        assert dst_delta(datetime(2024, 10, 27, 2, 0), zone) == ONE_HOUR


class TestBuildHourlyGrid:
    """Test grid construction for regular and transition dates."""

    def test_summer_day_has_24_hourly_entries(self):
        grid = build_hourly_grid(date(2023, 7, 2), BERLIN)

        assert len(grid) == 24
        assert grid[0] == utc(2023, 7, 1, 22, 0)
        assert grid[-1] == utc(2023, 7, 2, 21, 0)
        assert_hourly_steps(grid)

    def test_winter_day_has_24_hourly_entries(self):
        grid = build_hourly_grid(date(2024, 1, 15), BERLIN)

        assert len(grid) == 24
        assert grid[0] == utc(2024, 1, 14, 23, 0)
        assert grid[-1] == utc(2024, 1, 15, 22, 0)
        assert_hourly_steps(grid)

    def test_spring_forward_day_has_23_entries(self):
        grid = build_hourly_grid(date(2024, 3, 31), BERLIN)

        assert len(grid) == 23
        assert grid[0] == utc(2024, 3, 30, 23, 0)
        assert grid[1] == utc(2024, 3, 31, 0, 0)
        assert grid[2] == utc(2024, 3, 31, 1, 0)
        assert grid[-1] == utc(2024, 3, 31, 21, 0)
        assert_hourly_steps(grid)

    def test_spring_forward_local_two_oclock_is_absent(self):
        zone = ZoneInfo(BERLIN)
        grid = build_hourly_grid(date(2024, 3, 31), BERLIN)

        local_hours = [ts.astimezone(zone).hour for ts in grid]
        assert 2 not in local_hours
        assert local_hours[:3] == [0, 1, 3]

    def test_fall_back_day_has_25_entries(self):
        grid = build_hourly_grid(date(2024, 10, 27), BERLIN)

        assert len(grid) == 25
        assert grid[0] == utc(2024, 10, 26, 22, 0)
        assert grid[-1] == utc(2024, 10, 27, 22, 0)
        assert_hourly_steps(grid)

    def test_fall_back_repeated_hour_appears_twice(self):
        zone = ZoneInfo(BERLIN)
        grid = build_hourly_grid(date(2024, 10, 27), BERLIN)

        local_hours = [ts.astimezone(zone).hour for ts in grid]
        assert local_hours.count(2) == 2
        assert grid[2] == utc(2024, 10, 27, 0, 0)
        assert grid[3] == utc(2024, 10, 27, 1, 0)

    @pytest.mark.parametrize("local_date, expected", [
        (date(2024, 3, 10), 23),
        (date(2024, 11, 3), 25),
        (date(2024, 6, 1), 24),
    ])
    def test_new_york_transitions(self, local_date, expected):
        grid = build_hourly_grid(local_date, "America/New_York")

        assert len(grid) == expected
        assert_hourly_steps(grid)

    def test_utc_grid_starts_at_midnight(self):
        grid = build_hourly_grid(date(2024, 3, 31), "UTC")

        assert len(grid) == 24
        assert grid[0] == utc(2024, 3, 31, 0, 0)

    def test_grid_is_strictly_increasing_and_utc(self):
        for local_date in (date(2024, 3, 31), date(2024, 7, 1), date(2024, 10, 27)):
            grid = build_hourly_grid(local_date, BERLIN)
            assert list(grid) == sorted(set(grid))
            assert all(ts.tzinfo is timezone.utc for ts in grid)

    def test_grid_is_immutable(self):
        grid = build_hourly_grid(date(2023, 7, 2), BERLIN)
        assert isinstance(grid, tuple)

    def test_unknown_timezone_raises(self):
        with pytest.raises(TimeZoneNotFoundError) as exc_info:
            build_hourly_grid(date(2023, 7, 2), "Mars/Olympus_Mons")

        assert exc_info.value.timezone_id == "Mars/Olympus_Mons"


class TestTimeGridBuilder:
    """Test the builder wrapper."""

    def test_builder_matches_function(self):
        builder = TimeGridBuilder()
        assert builder.build_hourly_grid(date(2024, 10, 27), BERLIN) == build_hourly_grid(date(2024, 10, 27), BERLIN)

    def test_builder_rebuilds_every_call(self):
        builder = TimeGridBuilder()
        with patch("power_position.positions.time_grid.build_hourly_grid",
                   wraps=build_hourly_grid) as mock_build:
            builder.build_hourly_grid(date(2023, 7, 2), BERLIN)
            builder.build_hourly_grid(date(2023, 7, 2), BERLIN)

        assert mock_build.call_count == 2

    def test_builder_propagates_unknown_timezone(self):
        with pytest.raises(TimeZoneNotFoundError):
            TimeGridBuilder().build_hourly_grid(date(2023, 7, 2), "Not/AZone")
