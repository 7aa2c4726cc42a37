"""Dependency injection for request access control.

Wires the four access control stages (application key, identity, tenancy,
authorization) from settings, sessions and per-request observation
context, and exposes ``require_access`` for routes to depend on.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultAccessControlProbe,
    DefaultAPIKeyServiceProbe,
    DefaultAppAuthenticationProbe,
    DefaultAuthorizationProbe,
    DefaultIdentityProbe,
    DefaultTenancyProbe,
)
from iam.application.services import (
    AccessControlService,
    AccessRequest,
    APIKeyService,
    AppAuthenticationService,
    AuthorizationService,
    IdentityService,
    ProviderRegistry,
    TenancyService,
)
from iam.application.value_objects import Audit
from iam.dependencies.credentials import (
    APP_ID_HEADER,
    parse_app_credentials,
    parse_bearer_credentials,
)
from iam.infrastructure.application_repository import ApplicationRepository
from iam.infrastructure.auth_repository import AuthRepository
from iam.infrastructure.authorization_repository import AuthorizationRepository
from iam.infrastructure.observability import (
    DefaultApplicationRepositoryProbe,
    DefaultAuthorizationRepositoryProbe,
    DefaultAuthRepositoryProbe,
)
from iam.infrastructure.providers import GoogleTokenExchanger
from iam.ports.exceptions import UnauthorizedError
from infrastructure.database.dependencies import get_read_session, get_write_session
from infrastructure.observability import ObservationContext
from infrastructure.settings import get_oauth2_settings, get_security_settings

REQUEST_ID_HEADER = "X-Request-ID"


def get_realm() -> str:
    """Get the realm echoed in authentication challenges."""
    return get_security_settings().realm


@lru_cache
def get_api_key_service() -> APIKeyService:
    """Get cached APIKeyService built from the configured encryption key."""
    return APIKeyService(
        encryption_key=get_security_settings().encryption_key_bytes,
        probe=DefaultAPIKeyServiceProbe(),
    )


@lru_cache
def get_provider_registry() -> ProviderRegistry:
    """Get cached registry of OAuth2 token exchangers.

    Uses lru_cache so provider configuration is read once per process.
    """
    settings = get_oauth2_settings()
    return ProviderRegistry(
        [
            GoogleTokenExchanger(
                userinfo_url=settings.google_userinfo_url,
                tokeninfo_url=settings.google_tokeninfo_url,
                timeout=settings.request_timeout_seconds,
            )
        ]
    )


def get_observation_context(request: Request) -> ObservationContext:
    """Build the observation context for the current request."""
    return ObservationContext(
        request_id=request.headers.get(REQUEST_ID_HEADER),
        app_id=request.headers.get(APP_ID_HEADER),
    )


def get_application_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> ApplicationRepository:
    """Get ApplicationRepository instance."""
    return ApplicationRepository(
        session=session,
        probe=DefaultApplicationRepositoryProbe().with_context(context),
    )


def get_authorization_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AuthorizationRepository:
    """Get AuthorizationRepository instance."""
    return AuthorizationRepository(
        session=session,
        probe=DefaultAuthorizationRepositoryProbe().with_context(context),
    )


def get_identity_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    providers: Annotated[ProviderRegistry, Depends(get_provider_registry)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> IdentityService:
    """Get IdentityService instance.

    The Auth repository shares the service's write session so a token
    refresh commits in the service's transaction.
    """
    auth_repository = AuthRepository(
        session=session,
        probe=DefaultAuthRepositoryProbe().with_context(context),
    )
    return IdentityService(
        session=session,
        auth_repository=auth_repository,
        providers=providers,
        probe=DefaultIdentityProbe().with_context(context),
    )


def get_access_control_service(
    application_repository: Annotated[
        ApplicationRepository, Depends(get_application_repository)
    ],
    authorization_repository: Annotated[
        AuthorizationRepository, Depends(get_authorization_repository)
    ],
    identity: Annotated[IdentityService, Depends(get_identity_service)],
    api_key_service: Annotated[APIKeyService, Depends(get_api_key_service)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AccessControlService:
    """Get AccessControlService instance with every stage wired."""
    return AccessControlService(
        app_authentication=AppAuthenticationService(
            application_repository=application_repository,
            api_key_service=api_key_service,
            probe=DefaultAppAuthenticationProbe().with_context(context),
        ),
        identity=identity,
        tenancy=TenancyService(
            application_repository=application_repository,
            probe=DefaultTenancyProbe().with_context(context),
        ),
        authorization=AuthorizationService(
            authorization_repository=authorization_repository,
            probe=DefaultAuthorizationProbe().with_context(context),
        ),
        probe=DefaultAccessControlProbe().with_context(context),
    )


async def require_access(
    request: Request,
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
    realm: Annotated[str, Depends(get_realm)],
) -> Audit:
    """FastAPI dependency authenticating and authorizing the current request.

    The permission is looked up by the matched route template (for example
    ``/v1/orgs/{extl_id}``) and the HTTP method, never by the concrete path.

    Returns:
        Audit of the resolved application and user

    Raises:
        UnauthenticatedError: If credentials are missing or do not check out
        UnauthorizedError: If the user lacks the permission
    """
    app_credentials = parse_app_credentials(request.headers, realm)
    bearer = parse_bearer_credentials(request.headers, realm)

    route = request.scope.get("route")
    resource = getattr(route, "path", None)
    if not resource:
        raise UnauthorizedError("Request did not match a route template")

    return await service.check_access(
        realm,
        AccessRequest(
            bearer=bearer,
            resource=resource,
            operation=request.method,
            app_credentials=app_credentials,
        ),
    )
