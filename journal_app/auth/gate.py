"""Static credential login gate."""

import hmac
from dataclasses import dataclass

import structlog

from ..config.defaults import AuthParams
from ..errors import AuthenticationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Who is using the journal."""
    username: str
    is_authenticated: bool = False

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls(username="", is_authenticated=False)


class AuthGate:
    """Compares submitted credentials with the configured pair."""

    def __init__(self, params: AuthParams):
        self._username = params.username
        self._password = params.password

    def check(self, username: str, password: str) -> bool:
        """True if both username and password match."""
        user_ok = hmac.compare_digest(username.encode(), self._username.encode())
        password_ok = hmac.compare_digest(password.encode(), self._password.encode())
        return user_ok and password_ok

    def login(self, username: str, password: str) -> AuthSession:
        """
        Authenticate a user.

        Raises:
            AuthenticationError: If the credentials do not match
        """
        if not self.check(username, password):
            logger.warning("Login rejected", username=username)
            raise AuthenticationError("Invalid username or password", username=username)

        logger.info("Login accepted", username=username)
        return AuthSession(username=username, is_authenticated=True)
