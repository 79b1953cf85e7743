"""
Recovery strategy classifications for error handling.
"""

from typing import Optional


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from automatically."""

    def __init__(self, message: str, retry_count: int = 0,
                 max_retries: int = 3, **kwargs):
        super().__init__(message)
        self.retry_count = retry_count
        self.max_retries = max_retries
        self.recoverable = True


class VersionConflictError(RecoverableError):
    """The ledger changed since the caller last read it."""

    def __init__(self, message: str, expected_version: Optional[int] = None,
                 actual_version: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.expected_version = expected_version
        self.actual_version = actual_version
