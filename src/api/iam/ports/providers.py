"""OAuth2 provider gateway protocol (port) for IAM bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.value_objects import Provider, ProviderInfo


@runtime_checkable
class ITokenExchanger(Protocol):
    """Exchanges a bearer token for the identity behind it.

    One implementation exists per provider. Network failures and non-2xx
    responses are raised as ``ProviderExchangeError``.
    """

    provider: Provider

    async def exchange(self, realm: str, access_token: str) -> ProviderInfo:
        """Ask the provider who owns ``access_token``.

        Args:
            realm: Realm for the authentication challenge on failure
            access_token: The caller's bearer token

        Returns:
            Token and profile information reported by the provider

        Raises:
            ProviderExchangeError: If the provider call fails
        """
        ...
