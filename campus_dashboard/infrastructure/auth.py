"""Mock authentication - any non-empty credentials log in as the demo administrator"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Optional

from campus_dashboard.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthUser:
    id: str
    name: str
    email: str
    role: str  # "administrator" | "staff"


MOCK_USER = AuthUser(
    id="auth-user-1",
    name="Alex Johnson",
    email="alex.johnson@example.com",
    role="administrator",
)


class MockAuthenticator:
    """Accepts any non-empty email/password pair after a fixed delay"""

    def __init__(self, delay_seconds: float = 0.6, profile: AuthUser = MOCK_USER):
        self.delay_seconds = delay_seconds
        self.profile = profile

    async def login(self, email: str, password: str) -> AuthUser:
        """
        Raises:
            AuthenticationError: Email or password is empty
        """
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if not email or not email.strip() or not password:
            raise AuthenticationError("Email and password are required.")

        return replace(self.profile, email=email.strip())


class AuthSession:
    """The single signed-in user for this process; nothing survives a restart"""

    def __init__(self):
        self.user: Optional[AuthUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def sign_in(self, user: AuthUser) -> None:
        self.user = user
        logger.info("User signed in", extra={"user_id": user.id, "email": user.email})

    def sign_out(self) -> None:
        if self.user is not None:
            logger.info("User signed out", extra={"user_id": self.user.id})
        self.user = None
