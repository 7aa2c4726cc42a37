"""Protocol for role-based authorization observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class AuthorizationProbe(Protocol):
    """Domain probe for permission checks."""

    def access_granted(
        self, user_id: str, org_id: str, resource: str, operation: str
    ) -> None:
        """Record that a role grants the requested permission."""
        ...

    def access_denied(
        self, user_id: str, org_id: str, resource: str, operation: str
    ) -> None:
        """Record that no role grants the requested permission."""
        ...

    def authorization_check_failed(
        self, user_id: str, resource: str, operation: str, error: str
    ) -> None:
        """Record that the permission check itself could not complete."""
        ...

    def with_context(self, context: ObservationContext) -> AuthorizationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthorizationProbe:
    """Default implementation of AuthorizationProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAuthorizationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthorizationProbe(logger=self._logger, context=context)

    def access_granted(
        self, user_id: str, org_id: str, resource: str, operation: str
    ) -> None:
        """Record that a role grants the requested permission."""
        self._logger.debug(
            "access_granted",
            user_id=user_id,
            org_id=org_id,
            resource=resource,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def access_denied(
        self, user_id: str, org_id: str, resource: str, operation: str
    ) -> None:
        """Record that no role grants the requested permission."""
        self._logger.warning(
            "access_denied",
            user_id=user_id,
            org_id=org_id,
            resource=resource,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def authorization_check_failed(
        self, user_id: str, resource: str, operation: str, error: str
    ) -> None:
        """Record that the permission check itself could not complete.

        The request is denied; the error is logged for operators only.
        """
        self._logger.error(
            "authorization_check_failed",
            user_id=user_id,
            resource=resource,
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
