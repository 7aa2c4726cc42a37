"""PostgreSQL implementation of IAuthRepository."""

from __future__ import annotations

from sqlalchemy import and_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Auth
from iam.domain.value_objects import Provider
from iam.infrastructure.mappers import to_auth
from iam.infrastructure.models import AuthModel, UserModel
from iam.infrastructure.observability import (
    AuthRepositoryProbe,
    DefaultAuthRepositoryProbe,
)
from iam.ports.repositories import IAuthRepository
from infrastructure.database.exceptions import QueryError


class AuthRepository(IAuthRepository):
    """Repository for Auth records in PostgreSQL.

    Lookups load the linked user in the same query. The only write is
    :meth:`update_token`; the caller owns the transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: AuthRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultAuthRepositoryProbe()

    async def find_by_access_token(self, access_token: str) -> Auth | None:
        """Find the Auth record holding exactly this access token."""
        return await self._find_one(
            AuthModel.access_token == access_token,
            operation="find_by_access_token",
        )

    async def find_by_provider_person_id(
        self, provider: Provider, provider_person_id: str
    ) -> Auth | None:
        """Find the Auth record for a provider-assigned person id."""
        return await self._find_one(
            and_(
                AuthModel.provider == provider.value,
                AuthModel.provider_person_id == provider_person_id,
            ),
            operation="find_by_provider_person_id",
        )

    async def update_token(self, auth: Auth) -> None:
        """Write the token fields of ``auth`` back to its row.

        Raises:
            QueryError: If the update fails
        """
        stmt = (
            update(AuthModel)
            .where(AuthModel.id == auth.id.value)
            .values(
                access_token=auth.access_token,
                token_type=auth.token_type,
                refresh_token=auth.refresh_token or None,
                access_token_expiry=auth.token_expiry,
                provider_client_id=auth.provider_client_id or None,
            )
        )
        try:
            await self._session.execute(stmt)
        except SQLAlchemyError as e:
            self._probe.query_failed("update_token", str(e))
            raise QueryError("Failed to update auth token", operation="update_token") from e

        self._probe.auth_token_updated(auth.id.value)

    async def _find_one(self, condition, operation: str) -> Auth | None:
        stmt = (
            select(AuthModel, UserModel)
            .join(UserModel, AuthModel.user_id == UserModel.id)
            .where(condition)
        )
        try:
            result = await self._session.execute(stmt)
            row = result.first()
        except SQLAlchemyError as e:
            self._probe.query_failed(operation, str(e))
            raise QueryError(f"Failed to {operation}", operation=operation) from e

        if row is None:
            self._probe.auth_not_found(lookup=operation)
            return None

        auth_model, user_model = row
        return to_auth(auth_model, user_model)
