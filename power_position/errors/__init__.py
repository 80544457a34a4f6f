"""
Error classification system for the position extraction pipeline.

This module provides a structured exception hierarchy separating data quality
issues, system failures and recovery categories used by the scheduler.
"""

from .data_quality import (
    DataQualityError,
    MalformedTradeError,
)
from .system_failures import (
    SystemFailureError,
    TimeZoneNotFoundError,
    TradeSourceError,
    PersistenceError,
    ConfigurationError,
)
from .recovery import (
    UnrecoverableError,
    RetriesExhaustedError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedTradeError",
    # System Failures
    "SystemFailureError",
    "TimeZoneNotFoundError",
    "TradeSourceError",
    "PersistenceError",
    "ConfigurationError",
    # Recovery Categories
    "UnrecoverableError",
    "RetriesExhaustedError",
]
