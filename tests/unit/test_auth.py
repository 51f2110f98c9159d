"""Unit tests for mock authentication"""

import asyncio

import pytest

from campus_dashboard.domain.exceptions import AuthenticationError
from campus_dashboard.infrastructure.auth import MOCK_USER, AuthSession, MockAuthenticator


def test_login_returns_profile_with_submitted_email():
    authenticator = MockAuthenticator(delay_seconds=0)

    user = asyncio.run(authenticator.login("  head@school.example  ", "secret"))

    assert user.email == "head@school.example"
    assert user.name == MOCK_USER.name
    assert user.role == "administrator"


@pytest.mark.parametrize("email,password", [("", "secret"), ("   ", "secret"), ("head@school.example", "")])
def test_login_rejects_empty_credentials(email, password):
    authenticator = MockAuthenticator(delay_seconds=0)

    with pytest.raises(AuthenticationError, match="Email and password are required."):
        asyncio.run(authenticator.login(email, password))


def test_session_sign_in_and_out():
    session = AuthSession()
    assert session.is_authenticated is False

    session.sign_in(MOCK_USER)
    assert session.is_authenticated is True
    assert session.user is MOCK_USER

    session.sign_out()
    assert session.user is None
    # Signing out twice is harmless
    session.sign_out()
