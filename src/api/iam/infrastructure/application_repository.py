"""PostgreSQL implementation of IApplicationRepository.

Reads applications together with their owning organization and their
encrypted API keys. Keys are returned still encrypted; decryption is the
application layer's job.
"""

from __future__ import annotations

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Application
from iam.domain.value_objects import Provider
from iam.infrastructure.mappers import to_application
from iam.infrastructure.models import (
    AppAPIKeyModel,
    ApplicationModel,
    OrganizationModel,
)
from iam.infrastructure.observability import (
    ApplicationRepositoryProbe,
    DefaultApplicationRepositoryProbe,
)
from iam.ports.repositories import EncryptedAPIKey, IApplicationRepository
from infrastructure.database.exceptions import QueryError


class ApplicationRepository(IApplicationRepository):
    """Repository for reading applications and their API keys from PostgreSQL."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ApplicationRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultApplicationRepositoryProbe()

    async def find_encrypted_keys_by_app_external_id(
        self, app_external_id: str
    ) -> list[EncryptedAPIKey]:
        """Load every stored key for an application, expired keys included.

        Args:
            app_external_id: The application's public external id

        Returns:
            One entry per key row, each carrying the application summary

        Raises:
            QueryError: If the query fails
        """
        stmt = (
            select(AppAPIKeyModel, ApplicationModel, OrganizationModel)
            .join(ApplicationModel, AppAPIKeyModel.app_id == ApplicationModel.id)
            .join(OrganizationModel, ApplicationModel.org_id == OrganizationModel.id)
            .where(ApplicationModel.external_id == app_external_id)
        )
        try:
            result = await self._session.execute(stmt)
            rows = result.all()
        except SQLAlchemyError as e:
            self._probe.query_failed("find_encrypted_keys_by_app_external_id", str(e))
            raise QueryError(
                "Failed to load API keys", operation="find_encrypted_keys"
            ) from e

        keys = [
            EncryptedAPIKey(
                ciphertext=key_model.api_key,
                deactivation=key_model.deactivation_at,
                app=to_application(app_model, org_model),
            )
            for key_model, app_model, org_model in rows
        ]
        self._probe.api_keys_loaded(app_external_id=app_external_id, count=len(keys))
        return keys

    async def find_by_provider_client_id(
        self, provider: Provider, client_id: str
    ) -> Application | None:
        """Find the application registered with an OAuth2 client id.

        Raises:
            QueryError: If the query fails
        """
        stmt = (
            select(ApplicationModel, OrganizationModel)
            .join(OrganizationModel, ApplicationModel.org_id == OrganizationModel.id)
            .where(
                and_(
                    ApplicationModel.auth_provider == provider.value,
                    ApplicationModel.auth_provider_client_id == client_id,
                )
            )
        )
        try:
            result = await self._session.execute(stmt)
            row = result.first()
        except SQLAlchemyError as e:
            self._probe.query_failed("find_by_provider_client_id", str(e))
            raise QueryError(
                "Failed to find application by client id",
                operation="find_by_provider_client_id",
            ) from e

        if row is None:
            self._probe.application_not_found_by_client_id(
                provider=provider.value, client_id=client_id
            )
            return None

        app_model, org_model = row
        return to_application(app_model, org_model)
