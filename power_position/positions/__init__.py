"""Time grid construction and hourly position aggregation"""

from .aggregator import PositionAggregator
from .time_grid import HourKind, TimeGridBuilder, build_hourly_grid, classify_local_time

__all__ = [
    "PositionAggregator",
    "TimeGridBuilder",
    "HourKind",
    "build_hourly_grid",
    "classify_local_time",
]
