"""
Access error classifications raised by the login gate.
"""

from typing import Optional


class AccessError(Exception):
    """Base class for login gate failures."""

    def __init__(self, message: str, username: Optional[str] = None):
        super().__init__(message)
        self.username = username
        self.recoverable = True


class AuthenticationError(AccessError):
    """Username or password did not match."""


class AuthorizationError(AccessError):
    """A ledger-mutating action was attempted without a login."""

    def __init__(self, message: str, action: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.action = action
