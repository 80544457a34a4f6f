"""
Recovery strategy classifications for error handling.

These categories mark failures the scheduler will not attempt again and carry
the retry bookkeeping when it gives up.
"""

from typing import Optional


class UnrecoverableError(Exception):
    """Mixin for errors that require human intervention."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.recoverable = False


class RetriesExhaustedError(UnrecoverableError):
    """Extraction kept failing after every configured attempt."""

    def __init__(self, message: str, attempts: int = 0,
                 last_error: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.attempts = attempts
        self.last_error = last_error
