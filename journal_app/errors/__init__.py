"""
Error classification for the trading journal.

Exceptions are grouped by how callers are expected to react: data quality
errors reject a single input and leave state untouched, system failures
point at the storage layer, recoverable errors can be retried after a
reload, and access errors come from the login gate.
"""

from .access import (
    AccessError,
    AuthenticationError,
    AuthorizationError,
)
from .data_quality import (
    DataQualityError,
    ValidationError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
)
from .recovery import (
    RecoverableError,
    VersionConflictError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "ValidationError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    # Recovery Categories
    "RecoverableError",
    "VersionConflictError",
    # Access
    "AccessError",
    "AuthenticationError",
    "AuthorizationError",
]
