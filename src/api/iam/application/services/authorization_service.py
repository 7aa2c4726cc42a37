"""Role-based access control for IAM bounded context."""

from __future__ import annotations

from iam.application.observability import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from iam.domain.aggregates import Application, User
from iam.ports.exceptions import UnauthorizedError
from iam.ports.repositories import IAuthorizationRepository
from infrastructure.database.exceptions import DatabaseError


class AuthorizationService:
    """Checks a user's role grants for a (resource, operation) pair.

    The resource is the matched route template and the operation the HTTP
    method. Grants are scoped to the organization that owns the application
    bound to the request, not to the user's home organization.
    """

    def __init__(
        self,
        authorization_repository: IAuthorizationRepository,
        probe: AuthorizationProbe | None = None,
    ):
        self._authorization_repository = authorization_repository
        self._probe = probe or DefaultAuthorizationProbe()

    async def authorize(
        self, user: User, app: Application, resource: str, operation: str
    ) -> None:
        """Raise unless a role assigned to ``user`` in ``app``'s org grants it.

        Raises:
            UnauthorizedError: If no active grant exists or the check fails
        """
        operation = operation.upper()
        org_id = app.org.id
        try:
            granted = await self._authorization_repository.is_authorized(
                resource=resource,
                operation=operation,
                user_id=user.id,
                org_id=org_id,
            )
        except DatabaseError as e:
            self._probe.authorization_check_failed(
                user_id=user.id.value,
                resource=resource,
                operation=operation,
                error=str(e),
            )
            raise UnauthorizedError(
                f"Access to {operation} {resource} could not be verified"
            ) from e

        if not granted:
            self._probe.access_denied(
                user_id=user.id.value,
                org_id=org_id.value,
                resource=resource,
                operation=operation,
            )
            raise UnauthorizedError(f"Access to {operation} {resource} is not granted")

        self._probe.access_granted(
            user_id=user.id.value,
            org_id=org_id.value,
            resource=resource,
            operation=operation,
        )
