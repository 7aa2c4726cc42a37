"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the queries the access control stages need
from the relational store. Not-found is expressed by returning ``None``;
storage failures surface as ``infrastructure.database.DatabaseError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Application, Auth
from iam.domain.value_objects import OrganizationId, Provider, UserId


@dataclass(frozen=True)
class EncryptedAPIKey:
    """One stored key row together with the application that owns it.

    The application is a summary: its ``api_keys`` list is empty until the
    caller decrypts the rows and attaches them.
    """

    ciphertext: str = field(repr=False)
    deactivation: datetime
    app: Application


@runtime_checkable
class IApplicationRepository(Protocol):
    """Read access to applications and their encrypted keys."""

    async def find_encrypted_keys_by_app_external_id(
        self, app_external_id: str
    ) -> list[EncryptedAPIKey]:
        """Load every stored key for an application.

        Args:
            app_external_id: The application's public external id

        Returns:
            All key rows for the application (expired ones included), or an
            empty list if the application is unknown or has no keys
        """
        ...

    async def find_by_provider_client_id(
        self, provider: Provider, client_id: str
    ) -> Application | None:
        """Find the application registered with an OAuth2 client id.

        Args:
            provider: The OAuth2 provider the client id belongs to
            client_id: The OAuth2 client id

        Returns:
            The Application summary, or None if none is registered
        """
        ...


@runtime_checkable
class IAuthRepository(Protocol):
    """Persistence of users' OAuth2 credentials."""

    async def find_by_access_token(self, access_token: str) -> Auth | None:
        """Find the Auth record holding exactly this access token.

        Returns:
            The Auth record with its user loaded, or None if not found
        """
        ...

    async def find_by_provider_person_id(
        self, provider: Provider, provider_person_id: str
    ) -> Auth | None:
        """Find the Auth record for a provider-assigned person id.

        Returns:
            The Auth record with its user loaded, or None if not found
        """
        ...

    async def update_token(self, auth: Auth) -> None:
        """Persist refreshed token fields of an existing Auth record.

        A single UPDATE statement. The caller owns the transaction.
        """
        ...


@runtime_checkable
class IAuthorizationRepository(Protocol):
    """Evaluation of role grants."""

    async def is_authorized(
        self,
        resource: str,
        operation: str,
        user_id: UserId,
        org_id: OrganizationId,
    ) -> bool:
        """Check whether any role assigned to the user grants the permission.

        Only active permissions count, and only role assignments made in
        ``org_id``.

        Args:
            resource: Route template, e.g. ``/v1/movies``
            operation: HTTP method
            user_id: The user to check
            org_id: The organization the assignment must belong to

        Returns:
            True if at least one grant exists
        """
        ...
