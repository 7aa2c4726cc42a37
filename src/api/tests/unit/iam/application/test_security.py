"""Unit tests for AES-GCM key encryption and secure random generation.

Note: Keys in this file are synthetic test data, not real secrets.
"""
# gitleaks:allow

import base64
import secrets

import pytest

from iam.application.security import (
    ENCRYPTION_KEY_LENGTH,
    NONCE_LENGTH,
    TAG_LENGTH,
    CryptoRandomGenerator,
    decrypt,
    encrypt,
    new_encryption_key,
    parse_encryption_key,
)
from iam.ports.exceptions import CryptoError

KEY_PLAINTEXT_LENGTH = 16
SEALED_KEY_LENGTH = NONCE_LENGTH + KEY_PLAINTEXT_LENGTH + TAG_LENGTH

# Random 16-byte plaintexts, the size of a generated API key.
RANDOM_PLAINTEXTS = [secrets.token_bytes(KEY_PLAINTEXT_LENGTH) for _ in range(64)]


class TestEncryptionKeys:
    """Tests for encryption key generation and parsing."""

    def test_new_key_is_32_bytes(self):
        assert len(new_encryption_key()) == ENCRYPTION_KEY_LENGTH

    def test_new_keys_are_unique(self):
        keys = {new_encryption_key() for _ in range(20)}
        assert len(keys) == 20

    def test_parse_accepts_64_hex_characters(self, encryption_key):
        assert parse_encryption_key(encryption_key.hex()) == encryption_key

    def test_parse_rejects_non_hex(self):
        with pytest.raises(CryptoError, match="hex"):
            parse_encryption_key("zz" * 32)

    def test_parse_rejects_wrong_length(self):
        with pytest.raises(CryptoError, match="32 bytes"):
            parse_encryption_key("ab" * 16)


class TestEncryptDecrypt:
    """Tests for encrypt and decrypt."""

    @pytest.mark.parametrize("plaintext", RANDOM_PLAINTEXTS)
    def test_round_trip(self, encryption_key, plaintext):
        sealed = encrypt(plaintext, encryption_key)

        assert decrypt(sealed, encryption_key) == plaintext

    @pytest.mark.parametrize("plaintext", RANDOM_PLAINTEXTS[:8])
    def test_round_trip_under_fresh_keys(self, plaintext):
        key = new_encryption_key()

        assert decrypt(encrypt(plaintext, key), key) == plaintext

    def test_output_is_nonce_ciphertext_tag(self, encryption_key):
        sealed = encrypt(b"hello", encryption_key)

        assert len(sealed) == NONCE_LENGTH + len(b"hello") + TAG_LENGTH

    def test_fresh_nonce_per_call(self, encryption_key):
        """Encrypting the same plaintext twice should not repeat output."""
        first = encrypt(b"same", encryption_key)
        second = encrypt(b"same", encryption_key)

        assert first != second
        assert first[:NONCE_LENGTH] != second[:NONCE_LENGTH]

    @pytest.mark.parametrize("mask", [0x01, 0x80, 0xFF])
    @pytest.mark.parametrize("index", range(SEALED_KEY_LENGTH))
    def test_flipped_byte_fails_authentication(self, encryption_key, index, mask):
        """Any change to nonce, body or tag is detected, never decrypted."""
        sealed = bytearray(
            encrypt(secrets.token_bytes(KEY_PLAINTEXT_LENGTH), encryption_key)
        )
        assert len(sealed) == SEALED_KEY_LENGTH
        sealed[index] ^= mask

        with pytest.raises(CryptoError):
            decrypt(bytes(sealed), encryption_key)

    def test_wrong_key_fails(self, encryption_key):
        sealed = encrypt(b"hello", encryption_key)
        other_key = bytes(reversed(encryption_key))

        with pytest.raises(CryptoError):
            decrypt(sealed, other_key)

    def test_input_shorter_than_nonce_is_malformed(self, encryption_key):
        with pytest.raises(CryptoError, match="malformed ciphertext"):
            decrypt(b"\x00" * (NONCE_LENGTH - 1), encryption_key)

    def test_invalid_key_length_rejected(self):
        with pytest.raises(CryptoError):
            encrypt(b"hello", b"short")


class TestCryptoRandomGenerator:
    """Tests for CryptoRandomGenerator."""

    def test_random_bytes_length(self):
        assert len(CryptoRandomGenerator().random_bytes(16)) == 16

    def test_random_string_is_padded_urlsafe_base64(self):
        value = CryptoRandomGenerator().random_string(16)

        # 16 bytes encode to 24 characters including padding
        assert len(value) == 24
        assert value.endswith("==")
        assert len(base64.urlsafe_b64decode(value)) == 16

    def test_random_strings_are_unique(self):
        generator = CryptoRandomGenerator()
        values = {generator.random_string(16) for _ in range(100)}
        assert len(values) == 100
