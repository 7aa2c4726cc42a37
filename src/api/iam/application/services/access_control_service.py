"""Access control pipeline for IAM bounded context.

Runs the authentication and authorization stages of a request strictly in
order:

    UNAUTHENTICATED -> [APP_KEY_CHECKED] -> USER_IDENTIFIED
        -> APP_CONTEXT_BOUND -> AUTHORIZED | REJECTED

The first failure ends the request in REJECTED and no later stage runs.
Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.application.observability import (
    AccessControlProbe,
    DefaultAccessControlProbe,
)
from iam.application.services.app_authentication_service import (
    AppAuthenticationService,
)
from iam.application.services.authorization_service import AuthorizationService
from iam.application.services.identity_service import IdentityService
from iam.application.services.tenancy_service import TenancyService
from iam.application.value_objects import (
    AppCredentials,
    Audit,
    AuthStage,
    BearerCredentials,
    RequestIdentity,
)


@dataclass(frozen=True)
class AccessRequest:
    """Everything the pipeline needs to know about one request.

    Attributes:
        bearer: Provider and bearer token
        resource: Matched route template, e.g. ``/v1/orgs/{extl_id}``
        operation: HTTP method
        app_credentials: ``X-APP-ID``/``X-API-KEY`` pair, if the request sent one
    """

    bearer: BearerCredentials
    resource: str
    operation: str
    app_credentials: AppCredentials | None = None


class AccessControlService:
    """Composes the four access control stages into one decision."""

    def __init__(
        self,
        app_authentication: AppAuthenticationService,
        identity: IdentityService,
        tenancy: TenancyService,
        authorization: AuthorizationService,
        probe: AccessControlProbe | None = None,
    ):
        self._app_authentication = app_authentication
        self._identity = identity
        self._tenancy = tenancy
        self._authorization = authorization
        self._probe = probe or DefaultAccessControlProbe()

    async def check_access(
        self,
        realm: str,
        request: AccessRequest,
        now: datetime | None = None,
    ) -> Audit:
        """Authenticate and authorize a request.

        Args:
            realm: Realm for authentication challenges
            request: Credentials plus the matched route template and method
            now: Reference time for expiry checks

        Returns:
            The request's Audit (application, user, moment)

        Raises:
            UnauthenticatedError: If any authentication stage fails
            UnauthorizedError: If the user lacks the permission
            DatabaseError: If a lookup outside the permission check fails
        """
        identity = RequestIdentity() if now is None else RequestIdentity(started_at=now)
        try:
            await self._run_stages(realm, request, identity, now)
        except Exception as e:
            failed_after = identity.stage
            identity.advance(AuthStage.REJECTED)
            self._probe.request_rejected(
                stage=failed_after.value, error_type=type(e).__name__
            )
            raise

        audit = identity.to_audit()
        self._probe.request_authorized(
            app_external_id=audit.app.external_id.value, user_id=audit.user.id.value
        )
        return audit

    async def _run_stages(
        self,
        realm: str,
        request: AccessRequest,
        identity: RequestIdentity,
        now: datetime | None,
    ) -> None:
        if request.app_credentials is not None:
            identity.app = await self._app_authentication.authenticate(
                realm, request.app_credentials
            )
            self._advance(identity, AuthStage.APP_KEY_CHECKED)

        identity.auth = await self._identity.resolve(realm, request.bearer, now=now)
        self._advance(identity, AuthStage.USER_IDENTIFIED)

        identity.app = await self._tenancy.determine_app_context(identity, realm)
        self._advance(identity, AuthStage.APP_CONTEXT_BOUND)

        assert identity.user is not None and identity.app is not None
        await self._authorization.authorize(
            identity.user, identity.app, request.resource, request.operation
        )
        self._advance(identity, AuthStage.AUTHORIZED)

    def _advance(self, identity: RequestIdentity, stage: AuthStage) -> None:
        identity.advance(stage)
        self._probe.stage_reached(stage=stage.value)
