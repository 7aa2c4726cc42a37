"""OAuth2 identity resolver for IAM bounded context.

Resolves a bearer token to a provisioned user, either from a stored Auth
record holding that exact token or by asking the token's provider who
owns it.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultIdentityProbe, IdentityProbe
from iam.application.value_objects import BearerCredentials
from iam.domain.aggregates import Auth
from iam.domain.value_objects import Provider
from iam.ports.exceptions import (
    ProviderExchangeError,
    TokenExpiredError,
    UnsupportedProviderError,
    UserNotProvisionedError,
)
from iam.ports.providers import ITokenExchanger
from iam.ports.repositories import IAuthRepository


class ProviderRegistry:
    """Token exchangers keyed by the provider they serve."""

    def __init__(self, exchangers: Iterable[ITokenExchanger] = ()):
        self._exchangers: dict[Provider, ITokenExchanger] = {}
        for exchanger in exchangers:
            self.register(exchanger)

    def register(self, exchanger: ITokenExchanger) -> None:
        """Add or replace the exchanger for ``exchanger.provider``."""
        if exchanger.provider is Provider.UNKNOWN:
            raise ValueError("Cannot register an exchanger for an unknown provider")
        self._exchangers[exchanger.provider] = exchanger

    def get(self, provider: Provider) -> ITokenExchanger | None:
        return self._exchangers.get(provider)

    def __contains__(self, provider: object) -> bool:
        return provider in self._exchangers


class IdentityService:
    """Application service resolving bearer tokens to users.

    Users are never created here; an identity the provider vouches for but
    that has no Auth record is rejected as not provisioned.
    """

    def __init__(
        self,
        session: AsyncSession,
        auth_repository: IAuthRepository,
        providers: ProviderRegistry,
        probe: IdentityProbe | None = None,
    ):
        """Initialize IdentityService with dependencies.

        Args:
            session: Database session owning the token refresh transaction
            auth_repository: Repository for Auth records
            providers: Token exchangers for the supported providers
            probe: Optional domain probe for observability
        """
        self._session = session
        self._auth_repository = auth_repository
        self._providers = providers
        self._probe = probe or DefaultIdentityProbe()

    async def resolve(
        self,
        realm: str,
        credentials: BearerCredentials,
        now: datetime | None = None,
    ) -> Auth:
        """Resolve the Auth record (and so the user) behind a bearer token.

        Args:
            realm: Realm for the authentication challenge on failure
            credentials: The provider and bearer token from the request
            now: Reference time for token expiry checks

        Returns:
            The Auth record with its user loaded

        Raises:
            UnsupportedProviderError: If the provider has no exchanger
            ProviderExchangeError: If the provider call fails
            UserNotProvisionedError: If no user is registered for the identity
            TokenExpiredError: If the provider reports an expired token
            DatabaseError: If a lookup or the token update fails
        """
        provider = credentials.provider
        exchanger = self._providers.get(provider)
        if exchanger is None:
            self._probe.unsupported_provider(provider=provider.value)
            raise UnsupportedProviderError(
                f"Unsupported authentication provider: {provider.value}", realm=realm
            )

        now = now or datetime.now(UTC)
        async with self._session.begin():
            auth = await self._auth_repository.find_by_access_token(
                credentials.access_token
            )
            if auth is not None:
                if auth.token_is_valid(now):
                    self._probe.auth_found_by_token(
                        user_id=auth.user.id.value, provider=auth.provider.value
                    )
                    return auth
                self._probe.stored_token_expired(
                    user_id=auth.user.id.value, provider=auth.provider.value
                )

            return await self._exchange_and_refresh(
                realm, exchanger, credentials.access_token, now
            )

    async def _exchange_and_refresh(
        self,
        realm: str,
        exchanger: ITokenExchanger,
        access_token: str,
        now: datetime,
    ) -> Auth:
        provider = exchanger.provider
        try:
            info = await exchanger.exchange(realm, access_token)
        except ProviderExchangeError as e:
            self._probe.provider_exchange_failed(provider=provider.value, reason=str(e))
            raise
        self._probe.provider_exchange_succeeded(
            provider=provider.value, client_id=info.token_info.client_id
        )

        auth = await self._auth_repository.find_by_provider_person_id(
            provider, info.user_info.external_id
        )
        if auth is None:
            self._probe.user_not_provisioned(
                provider=provider.value, email=info.user_info.email
            )
            raise UserNotProvisionedError(
                f"No user registered for {provider.value} identity", realm=realm
            )

        auth.refresh(
            access_token=access_token,
            token_expiry=info.token_info.expiration,
            provider_client_id=info.token_info.client_id,
        )
        if not auth.token_is_valid(now):
            raise TokenExpiredError("Access token is no longer valid", realm=realm)

        await self._auth_repository.update_token(auth)
        self._probe.auth_token_refreshed(
            user_id=auth.user.id.value, provider=provider.value
        )
        return auth
