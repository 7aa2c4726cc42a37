"""Protocol for OAuth2 identity resolution observability.

Captures which resolution path a bearer token took and why resolution
failed, without ever recording the token itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class IdentityProbe(Protocol):
    """Domain probe for bearer token identity resolution."""

    def auth_found_by_token(self, user_id: str, provider: str) -> None:
        """Record that a stored, unexpired Auth record matched the token."""
        ...

    def stored_token_expired(self, user_id: str, provider: str) -> None:
        """Record that the matching Auth record's token had expired."""
        ...

    def unsupported_provider(self, provider: str) -> None:
        """Record that no token exchanger exists for the declared provider."""
        ...

    def provider_exchange_succeeded(self, provider: str, client_id: str) -> None:
        """Record that the provider accepted the token."""
        ...

    def provider_exchange_failed(self, provider: str, reason: str) -> None:
        """Record that the provider call failed or rejected the token."""
        ...

    def user_not_provisioned(self, provider: str, email: str) -> None:
        """Record that a provider identity has no registered user."""
        ...

    def auth_token_refreshed(self, user_id: str, provider: str) -> None:
        """Record that an Auth record's token fields were updated."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityProbe:
    """Default implementation of IdentityProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIdentityProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityProbe(logger=self._logger, context=context)

    def auth_found_by_token(self, user_id: str, provider: str) -> None:
        """Record that a stored, unexpired Auth record matched the token."""
        self._logger.debug(
            "auth_found_by_token",
            user_id=user_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def stored_token_expired(self, user_id: str, provider: str) -> None:
        """Record that the matching Auth record's token had expired."""
        self._logger.info(
            "stored_token_expired",
            user_id=user_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def unsupported_provider(self, provider: str) -> None:
        """Record that no token exchanger exists for the declared provider."""
        self._logger.warning(
            "unsupported_provider",
            provider=provider,
            **self._get_context_kwargs(),
        )

    def provider_exchange_succeeded(self, provider: str, client_id: str) -> None:
        """Record that the provider accepted the token."""
        self._logger.info(
            "provider_exchange_succeeded",
            provider=provider,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def provider_exchange_failed(self, provider: str, reason: str) -> None:
        """Record that the provider call failed or rejected the token."""
        self._logger.warning(
            "provider_exchange_failed",
            provider=provider,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def user_not_provisioned(self, provider: str, email: str) -> None:
        """Record that a provider identity has no registered user."""
        self._logger.warning(
            "user_not_provisioned",
            provider=provider,
            email=email,
            **self._get_context_kwargs(),
        )

    def auth_token_refreshed(self, user_id: str, provider: str) -> None:
        """Record that an Auth record's token fields were updated."""
        self._logger.info(
            "auth_token_refreshed",
            user_id=user_id,
            provider=provider,
            **self._get_context_kwargs(),
        )
