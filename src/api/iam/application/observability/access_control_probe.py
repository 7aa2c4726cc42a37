"""Protocol for observing a request's progress through access control."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class AccessControlProbe(Protocol):
    """Domain probe for the access control pipeline."""

    def stage_reached(self, stage: str) -> None:
        """Record that the request advanced to ``stage``."""
        ...

    def request_authorized(self, app_external_id: str, user_id: str) -> None:
        """Record that every stage passed."""
        ...

    def request_rejected(self, stage: str, error_type: str) -> None:
        """Record that the stage after ``stage`` failed and the request stopped."""
        ...

    def with_context(self, context: ObservationContext) -> AccessControlProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessControlProbe:
    """Default implementation of AccessControlProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccessControlProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessControlProbe(logger=self._logger, context=context)

    def stage_reached(self, stage: str) -> None:
        self._logger.debug(
            "access_control_stage_reached",
            stage=stage,
            **self._get_context_kwargs(),
        )

    def request_authorized(self, app_external_id: str, user_id: str) -> None:
        self._logger.info(
            "request_authorized",
            app_external_id=app_external_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def request_rejected(self, stage: str, error_type: str) -> None:
        self._logger.warning(
            "request_rejected",
            stage=stage,
            error_type=error_type,
            **self._get_context_kwargs(),
        )
