"""Unit tests for APIKeyService."""

from datetime import timedelta
from unittest.mock import create_autospec

import pytest

from iam.application.observability import APIKeyServiceProbe
from iam.application.security import decrypt, encrypt
from iam.application.services.api_key_service import APIKeyService
from iam.ports.exceptions import CryptoError, DomainValidationError, InvalidAPIKeyError


@pytest.fixture
def mock_probe():
    return create_autospec(APIKeyServiceProbe, instance=True)


@pytest.fixture
def service(encryption_key, mock_probe):
    return APIKeyService(encryption_key=encryption_key, probe=mock_probe)


class TestGenerateKey:
    """Tests for generate_key."""

    def test_ciphertext_decrypts_to_plaintext(self, service, encryption_key, now):
        key = service.generate_key(now + timedelta(days=30))

        assert decrypt(key.ciphertext, encryption_key) == key.key.encode()

    def test_plaintext_is_128_bits_base64(self, service, now):
        key = service.generate_key(now + timedelta(days=30))

        assert len(key.key) == 24

    def test_keys_are_unique(self, service, now):
        keys = {service.generate_key(now + timedelta(days=1)).key for _ in range(50)}
        assert len(keys) == 50

    def test_records_generation(self, service, mock_probe, now):
        deactivation = now + timedelta(days=30)

        service.generate_key(deactivation)

        mock_probe.api_key_generated.assert_called_once_with(deactivation=deactivation)

    def test_requires_configured_key(self, mock_probe, now):
        service = APIKeyService(encryption_key=b"", probe=mock_probe)

        with pytest.raises(CryptoError):
            service.generate_key(now + timedelta(days=1))


class TestLoadKeyFromCiphertext:
    """Tests for load_key_from_ciphertext."""

    def test_recovers_plaintext(self, service, encryption_key, now):
        sealed = encrypt(b"plain-key", encryption_key)

        key = service.load_key_from_ciphertext(sealed.hex(), now, realm="r")

        assert key.key == "plain-key"
        assert key.ciphertext == sealed
        assert key.deactivation == now

    def test_tampered_ciphertext_is_invalid_api_key(
        self, service, encryption_key, mock_probe, now
    ):
        sealed = bytearray(encrypt(b"plain-key", encryption_key))
        sealed[0] ^= 0xFF

        with pytest.raises(InvalidAPIKeyError) as exc_info:
            service.load_key_from_ciphertext(bytes(sealed).hex(), now, realm="r")

        assert exc_info.value.realm == "r"
        mock_probe.api_key_decryption_failed.assert_called_once()

    def test_non_hex_ciphertext_is_invalid_api_key(self, service, now):
        with pytest.raises(InvalidAPIKeyError):
            service.load_key_from_ciphertext("not-hex", now)

    def test_truncated_ciphertext_is_invalid_api_key(self, service, now):
        with pytest.raises(InvalidAPIKeyError):
            service.load_key_from_ciphertext("00" * 4, now)


class TestAddNewKey:
    """Tests for add_new_key."""

    def test_attaches_key_to_application(self, service, application):
        from datetime import UTC, datetime

        deactivation = datetime.now(UTC) + timedelta(days=30)

        key = service.add_new_key(application, deactivation)

        assert application.api_keys == [key]

    def test_rejects_past_deactivation(self, service, application):
        from datetime import UTC, datetime

        with pytest.raises(DomainValidationError):
            service.add_new_key(application, datetime.now(UTC) - timedelta(seconds=1))

        assert application.api_keys == []
