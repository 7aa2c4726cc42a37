"""PostgreSQL implementation of IAuthorizationRepository."""

from __future__ import annotations

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import OrganizationId, UserId
from iam.infrastructure.models import (
    PermissionModel,
    RoleModel,
    RolePermissionModel,
    UserRoleModel,
)
from iam.infrastructure.observability import (
    AuthorizationRepositoryProbe,
    DefaultAuthorizationRepositoryProbe,
)
from iam.ports.repositories import IAuthorizationRepository
from infrastructure.database.exceptions import QueryError


class AuthorizationRepository(IAuthorizationRepository):
    """Evaluates role grants with a single join query.

    users_roles -> roles -> role_permissions -> permissions, restricted to
    active roles and permissions and to role assignments made in the
    requested organization.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: AuthorizationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultAuthorizationRepositoryProbe()

    async def is_authorized(
        self,
        resource: str,
        operation: str,
        user_id: UserId,
        org_id: OrganizationId,
    ) -> bool:
        """Check whether any role assigned to the user grants the permission.

        Raises:
            QueryError: If the query fails
        """
        stmt = (
            select(PermissionModel.id)
            .select_from(UserRoleModel)
            .join(RoleModel, UserRoleModel.role_id == RoleModel.id)
            .join(RolePermissionModel, RoleModel.id == RolePermissionModel.role_id)
            .join(
                PermissionModel,
                RolePermissionModel.permission_id == PermissionModel.id,
            )
            .where(
                and_(
                    PermissionModel.active.is_(True),
                    RoleModel.active.is_(True),
                    PermissionModel.resource == resource,
                    PermissionModel.operation == operation,
                    UserRoleModel.user_id == user_id.value,
                    UserRoleModel.org_id == org_id.value,
                )
            )
            .limit(1)
        )
        try:
            result = await self._session.execute(stmt)
            row = result.first()
        except SQLAlchemyError as e:
            self._probe.query_failed("is_authorized", str(e))
            raise QueryError(
                "Failed to evaluate permissions", operation="is_authorized"
            ) from e

        return row is not None
