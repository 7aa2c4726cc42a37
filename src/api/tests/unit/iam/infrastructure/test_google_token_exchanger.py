"""Unit tests for GoogleTokenExchanger.

Google is replaced with an httpx.MockTransport so no network is used.
"""

from datetime import UTC, datetime, timedelta

import httpx
import pytest

from iam.domain.value_objects import Provider
from iam.infrastructure.providers import GoogleTokenExchanger
from iam.ports.exceptions import ProviderExchangeError
from iam.ports.providers import ITokenExchanger

TOKENINFO_URL = "https://google.test/tokeninfo"
USERINFO_URL = "https://google.test/userinfo"

TOKENINFO = {
    "azp": "client-123.apps.googleusercontent.com",
    "sub": "109876543210",
    "scope": "openid email",
    "expires_in": "3599",
}
USERINFO = {
    "id": "109876543210",
    "email": "alice@example.com",
    "given_name": "Alice",
    "family_name": "Liddell",
    "name": "Alice Liddell",
    "hd": "example.com",
    "locale": "en",
}


def _exchanger(handler) -> GoogleTokenExchanger:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleTokenExchanger(
        userinfo_url=USERINFO_URL, tokeninfo_url=TOKENINFO_URL, client=client
    )


def _google(tokeninfo=TOKENINFO, userinfo=USERINFO, status_code=200):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/tokeninfo":
            return httpx.Response(status_code, json=tokeninfo)
        return httpx.Response(200, json=userinfo)

    return handler, seen


class TestExchange:
    def test_implements_protocol(self):
        exchanger = GoogleTokenExchanger()

        assert isinstance(exchanger, ITokenExchanger)
        assert exchanger.provider is Provider.GOOGLE

    @pytest.mark.asyncio
    async def test_maps_token_and_user_info(self):
        handler, _ = _google()
        before = datetime.now(UTC)

        info = await _exchanger(handler).exchange("realm", "ya29.token")

        assert info.provider is Provider.GOOGLE
        assert info.token_info.client_id == "client-123.apps.googleusercontent.com"
        assert info.token_info.scope == "openid email"
        assert info.token_info.expiration is not None
        assert info.token_info.expiration >= before + timedelta(seconds=3599)
        assert info.user_info.external_id == "109876543210"
        assert info.user_info.email == "alice@example.com"
        assert info.user_info.first_name == "Alice"
        assert info.user_info.hosted_domain == "example.com"

    @pytest.mark.asyncio
    async def test_sends_token_to_both_endpoints(self):
        handler, seen = _google()

        await _exchanger(handler).exchange("realm", "ya29.token")

        tokeninfo_request, userinfo_request = seen
        assert tokeninfo_request.url.params["access_token"] == "ya29.token"
        assert userinfo_request.headers["Authorization"] == "Bearer ya29.token"

    @pytest.mark.asyncio
    async def test_legacy_issued_to_is_client_id(self):
        tokeninfo = {"issued_to": "legacy-client", "user_id": "109876543210"}
        handler, _ = _google(tokeninfo=tokeninfo)

        info = await _exchanger(handler).exchange("realm", "t")

        assert info.token_info.client_id == "legacy-client"
        assert info.token_info.expiration is None

    @pytest.mark.asyncio
    async def test_rejected_token(self):
        handler, _ = _google(tokeninfo={"error": "invalid_token"}, status_code=400)

        with pytest.raises(ProviderExchangeError) as exc_info:
            await _exchanger(handler).exchange("realm", "bad")

        assert exc_info.value.realm == "realm"

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(ProviderExchangeError):
            await _exchanger(handler).exchange("realm", "t")

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        def handler(request):
            return httpx.Response(200, content=b"not json")

        with pytest.raises(ProviderExchangeError):
            await _exchanger(handler).exchange("realm", "t")

    @pytest.mark.asyncio
    async def test_mismatched_user_ids(self):
        handler, _ = _google(tokeninfo={**TOKENINFO, "sub": "someone-else"})

        with pytest.raises(ProviderExchangeError, match="disagree"):
            await _exchanger(handler).exchange("realm", "t")

    @pytest.mark.asyncio
    async def test_missing_user_id(self):
        handler, _ = _google(userinfo={"email": "alice@example.com"})

        with pytest.raises(ProviderExchangeError, match="no user id"):
            await _exchanger(handler).exchange("realm", "t")
