"""Unit tests for infrastructure settings."""

import pytest
from pydantic import SecretStr, ValidationError

from infrastructure.settings import DatabaseSettings, OAuth2Settings, SecuritySettings


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        settings = DatabaseSettings()
        assert 1 <= settings.pool_min_connections <= settings.pool_max_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        with pytest.raises(ValidationError, match="pool_max_connections"):
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(password=SecretStr("hunter2"))
        assert "hunter2" not in settings.connection_string

    def test_statement_timeout_is_bounded(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(statement_timeout_ms=0)

    def test_timeouts_from_environment(self, monkeypatch):
        monkeypatch.setenv("MARQUEE_DB_STATEMENT_TIMEOUT_MS", "2500")
        monkeypatch.setenv("MARQUEE_DB_POOL_TIMEOUT_SECONDS", "1.5")

        settings = DatabaseSettings()

        assert settings.statement_timeout_ms == 2500
        assert settings.pool_timeout_seconds == 1.5


class TestDatabaseSettingsEnvironment:
    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("MARQUEE_DB_HOST", "db.internal")
        monkeypatch.setenv("MARQUEE_DB_PORT", "6543")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543


class TestSecuritySettings:
    """Tests for encryption key and realm settings."""

    def test_empty_key_is_allowed(self, monkeypatch):
        monkeypatch.delenv("MARQUEE_SECURITY_ENCRYPTION_KEY", raising=False)

        settings = SecuritySettings(encryption_key=SecretStr(""))

        assert settings.encryption_key_bytes == b""

    def test_hex_key_decodes_to_32_bytes(self):
        settings = SecuritySettings(encryption_key=SecretStr("ab" * 32))

        assert settings.encryption_key_bytes == bytes([0xAB] * 32)

    def test_non_hex_key_is_rejected(self):
        with pytest.raises(ValidationError, match="hex"):
            SecuritySettings(encryption_key=SecretStr("not-hex"))

    def test_short_key_is_rejected(self):
        with pytest.raises(ValidationError, match="32 bytes"):
            SecuritySettings(encryption_key=SecretStr("ab" * 16))

    def test_key_is_not_shown_in_repr(self):
        settings = SecuritySettings(encryption_key=SecretStr("ab" * 32))

        assert "ab" * 32 not in repr(settings)

    def test_realm_from_environment(self, monkeypatch):
        monkeypatch.setenv("MARQUEE_SECURITY_REALM", "movies")

        assert SecuritySettings().realm == "movies"


class TestOAuth2Settings:
    def test_google_defaults(self):
        settings = OAuth2Settings()

        assert settings.google_userinfo_url.startswith("https://")
        assert settings.google_tokeninfo_url.startswith("https://")
        assert settings.request_timeout_seconds > 0

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            OAuth2Settings(request_timeout_seconds=0)
