"""Interval scheduling: clocks, boundary arithmetic and the extraction loop."""

from .calculator import ScheduleCalculator
from .clock import Clock, ManualClock, SystemClock

__all__ = ["Clock", "ManualClock", "ScheduleCalculator", "SystemClock"]
