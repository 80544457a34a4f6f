"""
Data quality error classifications for trade data.

These exceptions describe trade records that cannot be interpreted at all.
Periods that are well-formed but fall outside the delivery grid are not
errors; the aggregator reports them as discarded periods instead.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedTradeError(DataQualityError):
    """Trade record exists but is in an incorrect format."""

    def __init__(self, message: str, raw_data: Optional[Any] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format
