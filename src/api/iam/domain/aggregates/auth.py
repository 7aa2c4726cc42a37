"""Auth aggregate linking a user to an OAuth2 provider identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from iam.domain.aggregates.user import User
from iam.domain.value_objects import AuthId, Provider

# Tokens are treated as expired this long before their reported expiry.
TOKEN_EXPIRY_SKEW = timedelta(seconds=10)


@dataclass
class Auth:
    """A user's OAuth2 credentials with one provider.

    A user may authenticate through several providers, but holds at most
    one Auth record per provider, and a provider person id maps to at most
    one Auth record.
    """

    id: AuthId
    user: User
    provider: Provider
    provider_person_id: str
    provider_client_id: str = ""
    access_token: str = field(default="", repr=False)
    token_type: str = "Bearer"
    refresh_token: str = field(default="", repr=False)
    token_expiry: datetime | None = None

    def token_is_valid(self, now: datetime | None = None) -> bool:
        """Check whether the stored access token can still be trusted.

        A token is valid when it is non-empty and its expiry is either
        unknown or more than the expiry skew in the future.
        """
        if not self.access_token:
            return False
        if self.token_expiry is None:
            return True
        now = now or datetime.now(UTC)
        return self.token_expiry - TOKEN_EXPIRY_SKEW > now

    def refresh(
        self,
        access_token: str,
        token_expiry: datetime | None,
        provider_client_id: str,
        refresh_token: str | None = None,
    ) -> None:
        """Replace the token fields after a new provider exchange.

        The refresh token is only replaced when the provider issued one.
        """
        self.access_token = access_token
        self.token_expiry = token_expiry
        self.provider_client_id = provider_client_id
        if refresh_token:
            self.refresh_token = refresh_token
