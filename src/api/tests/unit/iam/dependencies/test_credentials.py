"""Unit tests for credential header parsing."""

import pytest
from starlette.datastructures import Headers

from iam.dependencies.credentials import (
    parse_app_credentials,
    parse_bearer_credentials,
    parse_single_header,
)
from iam.domain.value_objects import Provider
from iam.ports.exceptions import MissingCredentialsError


def _headers(*pairs: tuple[str, str]) -> Headers:
    return Headers(raw=[(k.lower().encode(), v.encode()) for k, v in pairs])


class TestParseSingleHeader:
    def test_absent_header_is_none(self):
        assert parse_single_header(_headers(), "X-APP-ID", "realm") is None

    def test_value_is_trimmed(self):
        headers = _headers(("X-APP-ID", "  app123 "))

        assert parse_single_header(headers, "X-APP-ID", "realm") == "app123"

    def test_lookup_is_case_insensitive(self):
        headers = _headers(("x-app-id", "app123"))

        assert parse_single_header(headers, "X-APP-ID", "realm") == "app123"

    def test_duplicate_header_is_rejected(self):
        headers = _headers(("X-APP-ID", "a"), ("X-APP-ID", "b"))

        with pytest.raises(MissingCredentialsError) as exc_info:
            parse_single_header(headers, "X-APP-ID", "realm")

        assert exc_info.value.realm == "realm"

    def test_blank_header_is_rejected(self):
        with pytest.raises(MissingCredentialsError):
            parse_single_header(_headers(("X-APP-ID", "   ")), "X-APP-ID", "realm")


class TestParseAppCredentials:
    def test_neither_header_skips_app_check(self):
        assert parse_app_credentials(_headers(), "realm") is None

    def test_both_headers(self):
        credentials = parse_app_credentials(
            _headers(("X-APP-ID", "app123"), ("X-API-KEY", "k")), "realm"
        )

        assert credentials is not None
        assert credentials.app_external_id == "app123"
        assert credentials.api_key == "k"

    @pytest.mark.parametrize("present", ["X-APP-ID", "X-API-KEY"])
    def test_only_one_header_is_rejected(self, present):
        with pytest.raises(MissingCredentialsError):
            parse_app_credentials(_headers((present, "value")), "realm")


class TestParseBearerCredentials:
    def test_parses_provider_and_token(self):
        credentials = parse_bearer_credentials(
            _headers(("X-AUTH-PROVIDER", "Google"), ("Authorization", "Bearer tok1")),
            "realm",
        )

        assert credentials.provider is Provider.GOOGLE
        assert credentials.access_token == "tok1"

    def test_unknown_provider_parses_as_unknown(self):
        credentials = parse_bearer_credentials(
            _headers(("X-AUTH-PROVIDER", "github"), ("Authorization", "Bearer t")),
            "realm",
        )

        assert credentials.provider is Provider.UNKNOWN

    def test_missing_provider_is_rejected(self):
        with pytest.raises(MissingCredentialsError):
            parse_bearer_credentials(_headers(("Authorization", "Bearer t")), "realm")

    def test_missing_authorization_is_rejected(self):
        with pytest.raises(MissingCredentialsError):
            parse_bearer_credentials(_headers(("X-AUTH-PROVIDER", "google")), "realm")

    @pytest.mark.parametrize("value", ["Basic abc", "Bearer", "Bearer    ", "tok1"])
    def test_malformed_authorization_is_rejected(self, value):
        with pytest.raises(MissingCredentialsError):
            parse_bearer_credentials(
                _headers(("X-AUTH-PROVIDER", "google"), ("Authorization", value)),
                "realm",
            )
