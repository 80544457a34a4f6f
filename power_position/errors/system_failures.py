"""
System failure error classifications.

These exceptions represent failures that abort the current extraction run.
The scheduler may retry the whole run, but no partial result is ever produced.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for failures that abort the current run."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class TimeZoneNotFoundError(SystemFailureError):
    """Timezone id is not present in the zone database."""

    def __init__(self, message: str, timezone_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.timezone_id = timezone_id


class TradeSourceError(SystemFailureError):
    """Trade source failed to return trades for the requested date."""

    def __init__(self, message: str, local_date: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.local_date = local_date


class PersistenceError(SystemFailureError):
    """File system persistence failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
