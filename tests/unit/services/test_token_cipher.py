"""Unit tests for AesCbcTokenCipher"""

import pytest

from src.adapter.services.token_cipher import AesCbcTokenCipher, generate_oauth_state
from src.app.services.token_cipher import TokenDecryptionError


class TestAesCbcTokenCipher:
    """Test token encryption"""

    def test_decrypt_returns_original_token(self):
        """Test encrypted token decrypts with the same secret"""
        cipher = AesCbcTokenCipher("test-secret")

        encrypted = cipher.encrypt("oa_sand_access_token")

        assert cipher.decrypt(encrypted) == "oa_sand_access_token"

    def test_stored_format_is_iv_and_ciphertext_hex(self):
        """Test stored value is '<32 hex iv>:<hex ciphertext>' and hides the token"""
        encrypted = AesCbcTokenCipher("test-secret").encrypt("token")

        iv_hex, ciphertext_hex = encrypted.split(":")
        assert len(iv_hex) == 32
        assert len(ciphertext_hex) % 32 == 0
        assert "token" not in encrypted

    def test_same_token_encrypts_differently(self):
        """Test a fresh IV is used for every encryption"""
        cipher = AesCbcTokenCipher("test-secret")

        assert cipher.encrypt("token") != cipher.encrypt("token")

    def test_wrong_secret_fails(self):
        """Test decrypting with another secret raises or yields a different value"""
        encrypted = AesCbcTokenCipher("secret-a").encrypt("token")

        try:
            decrypted = AesCbcTokenCipher("secret-b").decrypt(encrypted)
        except TokenDecryptionError:
            return
        assert decrypted != "token"

    def test_malformed_value_raises(self):
        """Test value without separator is rejected"""
        with pytest.raises(TokenDecryptionError):
            AesCbcTokenCipher("test-secret").decrypt("not-encrypted")

    def test_non_hex_value_raises(self):
        """Test non-hex parts are rejected"""
        with pytest.raises(TokenDecryptionError):
            AesCbcTokenCipher("test-secret").decrypt("zz:zz")

    def test_empty_secret_is_rejected(self):
        """Test cipher cannot be built without a key"""
        with pytest.raises(ValueError):
            AesCbcTokenCipher("")


class TestRandomIdentifiers:
    """Test OAuth state generation"""

    def test_oauth_state_is_64_hex_chars(self):
        state = generate_oauth_state()
        assert len(state) == 64
        int(state, 16)

    def test_states_are_unique(self):
        assert generate_oauth_state() != generate_oauth_state()
