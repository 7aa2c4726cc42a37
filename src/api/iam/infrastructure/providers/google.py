"""Google implementation of ITokenExchanger.

Asks Google's tokeninfo endpoint about the access token (client id, scope,
remaining lifetime) and its userinfo endpoint about the person behind it.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

from iam.domain.value_objects import (
    Provider,
    ProviderInfo,
    ProviderTokenInfo,
    ProviderUserInfo,
)
from iam.ports.exceptions import ProviderExchangeError
from iam.ports.providers import ITokenExchanger

DEFAULT_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
DEFAULT_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"


class GoogleTokenExchanger(ITokenExchanger):
    """Exchanges Google OAuth2 access tokens for identity information.

    Any network failure, non-2xx response or unusable payload is raised as
    ProviderExchangeError, so the caller always sees an authentication
    failure. No call is retried.
    """

    provider = Provider.GOOGLE

    def __init__(
        self,
        userinfo_url: str = DEFAULT_USERINFO_URL,
        tokeninfo_url: str = DEFAULT_TOKENINFO_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the exchanger.

        Args:
            userinfo_url: Google userinfo endpoint
            tokeninfo_url: Google tokeninfo endpoint
            timeout: Per-request timeout in seconds
            client: Optional shared client; a short-lived one is created per
                exchange otherwise
        """
        self._userinfo_url = userinfo_url
        self._tokeninfo_url = tokeninfo_url
        self._timeout = timeout
        self._client = client

    async def exchange(self, realm: str, access_token: str) -> ProviderInfo:
        """Resolve ``access_token`` to Google token and profile information.

        Raises:
            ProviderExchangeError: If Google cannot be reached, rejects the
                token, or returns inconsistent data
        """
        if self._client is not None:
            return await self._exchange(self._client, realm, access_token)

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._exchange(client, realm, access_token)

    async def _exchange(
        self, client: httpx.AsyncClient, realm: str, access_token: str
    ) -> ProviderInfo:
        try:
            token_response = await client.get(
                self._tokeninfo_url, params={"access_token": access_token}
            )
            token_response.raise_for_status()
            token_payload = token_response.json()

            userinfo_response = await client.get(
                self._userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            userinfo_response.raise_for_status()
            userinfo_payload = userinfo_response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderExchangeError(
                f"Google rejected the access token: HTTP {e.response.status_code}",
                realm=realm,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderExchangeError(
                f"Google token exchange failed: {e}", realm=realm
            ) from e
        except ValueError as e:
            raise ProviderExchangeError(
                "Google returned a malformed response", realm=realm
            ) from e

        token_info = self._to_token_info(token_payload)
        user_info = self._to_user_info(userinfo_payload)

        if not user_info.external_id:
            raise ProviderExchangeError(
                "Google userinfo response has no user id", realm=realm
            )

        # Both endpoints must describe the same Google account.
        token_user_id = token_payload.get("sub") or token_payload.get("user_id")
        if token_user_id and str(token_user_id) != user_info.external_id:
            raise ProviderExchangeError(
                "Google tokeninfo and userinfo disagree on the user id", realm=realm
            )

        return ProviderInfo(
            provider=Provider.GOOGLE, token_info=token_info, user_info=user_info
        )

    @staticmethod
    def _to_token_info(payload: dict[str, Any]) -> ProviderTokenInfo:
        expiration = None
        expires_in = payload.get("expires_in")
        if expires_in is not None:
            try:
                expiration = datetime.now(UTC) + timedelta(seconds=int(expires_in))
            except (TypeError, ValueError):
                expiration = None

        return ProviderTokenInfo(
            expiration=expiration,
            client_id=str(payload.get("azp") or payload.get("issued_to") or ""),
            scope=str(payload.get("scope") or ""),
        )

    @staticmethod
    def _to_user_info(payload: dict[str, Any]) -> ProviderUserInfo:
        return ProviderUserInfo(
            external_id=str(payload.get("id") or payload.get("sub") or ""),
            email=payload.get("email", ""),
            first_name=payload.get("given_name", ""),
            last_name=payload.get("family_name", ""),
            full_name=payload.get("name", ""),
            hosted_domain=payload.get("hd", ""),
            profile_link=payload.get("link", ""),
            locale=payload.get("locale", ""),
            picture=payload.get("picture", ""),
        )
