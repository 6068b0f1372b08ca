"""AES Token Cipher

AES-256-CBC encryption of OAuth tokens. Stored values look like
"<iv hex>:<ciphertext hex>"; the key is the SHA-256 digest of the
configured secret.
"""

import hashlib
import os
import secrets
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from src.app.services.token_cipher import TokenCipher, TokenDecryptionError

IV_LENGTH = 16


class AesCbcTokenCipher(TokenCipher):

    def __init__(self, secret: str):
        """
        Args:
            secret: Encryption secret (REVOLUT_ENCRYPTION_KEY)

        Raises:
            ValueError: If the secret is empty
        """
        if not secret:
            raise ValueError("Encryption key is not configured")
        self.key = hashlib.sha256(secret.encode("utf-8")).digest()

    def encrypt(self, plaintext: str) -> str:
        iv = os.urandom(IV_LENGTH)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self.key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return f"{iv.hex()}:{ciphertext.hex()}"

    def decrypt(self, ciphertext: str) -> str:
        iv_hex, _, data_hex = (ciphertext or "").partition(":")
        if not iv_hex or not data_hex:
            raise TokenDecryptionError("Invalid encrypted text format")

        try:
            iv = bytes.fromhex(iv_hex)
            data = bytes.fromhex(data_hex)

            decryptor = Cipher(algorithms.AES(self.key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(data) + decryptor.finalize()

            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()
            return plaintext.decode("utf-8")
        except ValueError as e:
            raise TokenDecryptionError(f"Failed to decrypt token: {e}") from e


def generate_oauth_state() -> str:
    """Random state for the OAuth authorization request (64 hex chars)"""
    return secrets.token_hex(32)

