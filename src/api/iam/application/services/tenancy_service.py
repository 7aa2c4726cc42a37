"""Tenancy context resolver for IAM bounded context."""

from __future__ import annotations

from iam.application.observability import DefaultTenancyProbe, TenancyProbe
from iam.application.value_objects import RequestIdentity
from iam.domain.aggregates import Application
from iam.ports.exceptions import ApplicationNotResolvedError
from iam.ports.repositories import IApplicationRepository


class TenancyService:
    """Decides which application a request acts on behalf of.

    An application authenticated by API key is authoritative. Otherwise the
    application registered with the user's OAuth2 client id is used.
    """

    def __init__(
        self,
        application_repository: IApplicationRepository,
        probe: TenancyProbe | None = None,
    ):
        self._application_repository = application_repository
        self._probe = probe or DefaultTenancyProbe()

    async def determine_app_context(
        self, identity: RequestIdentity, realm: str
    ) -> Application:
        """Return the application to bind to the request.

        Args:
            identity: The request identity after the user was identified
            realm: Realm for the authentication challenge on failure

        Returns:
            The key-authenticated application if present, else the
            application mapped to the user's OAuth2 client id

        Raises:
            ApplicationNotResolvedError: If neither source yields an application
            DatabaseError: If the client id lookup fails
        """
        if identity.app is not None:
            self._probe.app_context_retained(
                app_external_id=identity.app.external_id.value
            )
            return identity.app

        auth = identity.auth
        if auth is None:
            raise ApplicationNotResolvedError(
                "No authenticated user to derive an application from", realm=realm
            )

        client_id = auth.provider_client_id
        app = None
        if client_id:
            app = await self._application_repository.find_by_provider_client_id(
                auth.provider, client_id
            )
        if app is None:
            self._probe.app_context_unresolved(
                provider=auth.provider.value, client_id=client_id
            )
            raise ApplicationNotResolvedError(
                f"No application mapped to client id {client_id!r} "
                f"for provider {auth.provider.value}",
                realm=realm,
            )

        self._probe.app_context_resolved(
            app_external_id=app.external_id.value,
            provider=auth.provider.value,
            client_id=client_id,
        )
        return app
