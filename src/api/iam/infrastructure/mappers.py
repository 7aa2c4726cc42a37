"""Conversions from ORM rows to IAM domain objects."""

from __future__ import annotations

from iam.domain.aggregates import Application, Auth, Organization, User
from iam.domain.value_objects import (
    ApplicationId,
    AuthId,
    ExternalId,
    OrganizationId,
    OrgKind,
    Provider,
    UserId,
)
from iam.infrastructure.models import (
    ApplicationModel,
    AuthModel,
    OrganizationModel,
    UserModel,
)


def to_organization(model: OrganizationModel) -> Organization:
    """Convert an orgs row to an Organization."""
    return Organization(
        id=OrganizationId(value=model.id),
        external_id=ExternalId(value=model.external_id),
        name=model.name,
        description=model.description,
        kind=OrgKind(model.kind),
    )


def to_application(model: ApplicationModel, org: OrganizationModel) -> Application:
    """Convert an apps row and its org to an Application without keys."""
    return Application(
        id=ApplicationId(value=model.id),
        external_id=ExternalId(value=model.external_id),
        org=to_organization(org),
        name=model.name,
        description=model.description,
        provider=Provider.parse(model.auth_provider),
        provider_client_id=model.auth_provider_client_id,
    )


def to_user(model: UserModel) -> User:
    """Convert a users row to a User."""
    return User(
        id=UserId(value=model.id),
        external_id=ExternalId(value=model.external_id),
        org_id=OrganizationId(value=model.org_id),
        email=model.email,
        first_name=model.first_name,
        last_name=model.last_name,
    )


def to_auth(model: AuthModel, user: UserModel) -> Auth:
    """Convert an auth row and its user to an Auth record."""
    return Auth(
        id=AuthId(value=model.id),
        user=to_user(user),
        provider=Provider.parse(model.provider),
        provider_person_id=model.provider_person_id,
        provider_client_id=model.provider_client_id or "",
        access_token=model.access_token,
        token_type=model.token_type,
        refresh_token=model.refresh_token or "",
        token_expiry=model.access_token_expiry,
    )
