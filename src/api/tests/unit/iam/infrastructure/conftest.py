"""Fixtures building ORM rows for repository tests."""

from datetime import UTC, datetime, timedelta

import pytest

from iam.domain.value_objects import (
    ApplicationId,
    AuthId,
    ExternalId,
    OrganizationId,
    UserId,
)
from iam.infrastructure.models import (
    AppAPIKeyModel,
    ApplicationModel,
    AuthModel,
    OrganizationModel,
    UserModel,
)


@pytest.fixture
def org_model() -> OrganizationModel:
    return OrganizationModel(
        id=OrganizationId.generate().value,
        external_id=ExternalId.generate().value,
        name="Acme",
        description="",
        kind="standard",
    )


@pytest.fixture
def app_model(org_model) -> ApplicationModel:
    return ApplicationModel(
        id=ApplicationId.generate().value,
        external_id=ExternalId.generate().value,
        org_id=org_model.id,
        name="acme-web",
        description="Acme web client",
        auth_provider="google",
        auth_provider_client_id="client-123",
    )


@pytest.fixture
def key_model(app_model) -> AppAPIKeyModel:
    return AppAPIKeyModel(
        api_key="ab" * 40,
        app_id=app_model.id,
        deactivation_at=datetime.now(UTC) + timedelta(days=30),
    )


@pytest.fixture
def user_model(org_model) -> UserModel:
    return UserModel(
        id=UserId.generate().value,
        external_id=ExternalId.generate().value,
        org_id=org_model.id,
        email="alice@example.com",
        first_name="Alice",
        last_name="Liddell",
    )


@pytest.fixture
def auth_model(user_model) -> AuthModel:
    return AuthModel(
        id=AuthId.generate().value,
        user_id=user_model.id,
        provider="google",
        provider_client_id="client-123",
        provider_person_id="109876543210",
        access_token="ya29.stored",
        token_type="Bearer",
        refresh_token=None,
        access_token_expiry=datetime.now(UTC) + timedelta(hours=1),
    )
