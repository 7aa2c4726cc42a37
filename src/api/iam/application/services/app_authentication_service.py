"""Application authenticator for IAM bounded context.

Authenticates the calling application from its external id and one of
its plaintext API keys.
"""

from __future__ import annotations

from dataclasses import replace

from iam.application.observability import (
    AppAuthenticationProbe,
    DefaultAppAuthenticationProbe,
)
from iam.application.services.api_key_service import APIKeyService
from iam.application.value_objects import AppCredentials
from iam.domain.aggregates import Application
from iam.ports.exceptions import InvalidAPIKeyError
from iam.ports.repositories import IApplicationRepository


class AppAuthenticationService:
    """Finds an application by API key.

    Every stored key for the application is decrypted on every call, so a
    deactivation takes effect on the very next request.
    """

    def __init__(
        self,
        application_repository: IApplicationRepository,
        api_key_service: APIKeyService,
        probe: AppAuthenticationProbe | None = None,
    ):
        self._application_repository = application_repository
        self._api_key_service = api_key_service
        self._probe = probe or DefaultAppAuthenticationProbe()

    async def authenticate(
        self, realm: str, credentials: AppCredentials
    ) -> Application:
        """Return the application if the presented key is one of its valid keys.

        Args:
            realm: Realm for the authentication challenge on failure
            credentials: Application external id and plaintext key

        Returns:
            The Application with its decrypted keys attached

        Raises:
            InvalidAPIKeyError: If the application is unknown, a stored key
                cannot be decrypted, or no valid key matches
            DatabaseError: If the key lookup fails
        """
        app_external_id = credentials.app_external_id
        rows = await self._application_repository.find_encrypted_keys_by_app_external_id(
            app_external_id
        )
        if not rows:
            self._probe.api_key_authentication_failed(
                app_external_id=app_external_id, reason="no keys for application"
            )
            raise InvalidAPIKeyError(
                "API key does not match any key for the application", realm=realm
            )

        app = replace(rows[0].app, api_keys=[])
        for row in rows:
            try:
                key = self._api_key_service.load_key_from_ciphertext(
                    row.ciphertext, row.deactivation, realm=realm
                )
            except InvalidAPIKeyError:
                self._probe.api_key_authentication_failed(
                    app_external_id=app_external_id, reason="undecryptable key"
                )
                raise
            # Expired keys stay in the list; validity is judged per match.
            app.api_keys.append(key)

        try:
            app.validate_key(realm, credentials.api_key)
        except InvalidAPIKeyError as e:
            self._probe.api_key_authentication_failed(
                app_external_id=app_external_id, reason=str(e)
            )
            raise

        self._probe.api_key_matched(
            app_external_id=app_external_id, org_id=app.org.id.value
        )
        return app
