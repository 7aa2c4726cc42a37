"""Unit test fixtures with mocked dependencies."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.domain.aggregates import Application, Auth, Organization, User
from iam.domain.value_objects import (
    ApplicationId,
    AuthId,
    ExternalId,
    OrganizationId,
    Provider,
    UserId,
)

# Synthetic 256-bit key, not a real secret.
TEST_ENCRYPTION_KEY = bytes(range(32))
TEST_REALM = "test-realm"


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for expiry checks."""
    return datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def encryption_key() -> bytes:
    return TEST_ENCRYPTION_KEY


@pytest.fixture
def realm() -> str:
    return TEST_REALM


@pytest.fixture
def organization() -> Organization:
    return Organization(
        id=OrganizationId.generate(),
        external_id=ExternalId.generate(),
        name="Acme",
    )


@pytest.fixture
def application(organization) -> Application:
    return Application(
        id=ApplicationId.generate(),
        external_id=ExternalId.generate(),
        org=organization,
        name="acme-web",
        provider=Provider.GOOGLE,
        provider_client_id="client-123.apps.googleusercontent.com",
    )


@pytest.fixture
def user(organization) -> User:
    return User(
        id=UserId.generate(),
        external_id=ExternalId.generate(),
        org_id=organization.id,
        email="alice@example.com",
        first_name="Alice",
        last_name="Liddell",
    )


@pytest.fixture
def auth(user, now) -> Auth:
    """Auth record holding a token valid for another hour."""
    return Auth(
        id=AuthId.generate(),
        user=user,
        provider=Provider.GOOGLE,
        provider_person_id="109876543210",
        provider_client_id="client-123.apps.googleusercontent.com",
        access_token="ya29.stored-token",
        token_expiry=now + timedelta(hours=1),
    )


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose ``begin()`` is an async context manager."""
    session = AsyncMock()
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=transaction)
    return session
