"""Token Cipher Interface

Symmetric encryption of OAuth tokens stored at rest.
"""

from abc import ABC, abstractmethod


class TokenDecryptionError(Exception):
    """Raised when a stored token cannot be decrypted"""
    pass


class TokenCipher(ABC):

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a token for storage

        Args:
            plaintext: Token in clear text

        Returns:
            Encrypted, text-safe representation
        """
        pass

    @abstractmethod
    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a stored token

        Raises:
            TokenDecryptionError: If the value is malformed or the key is wrong
        """
        pass
