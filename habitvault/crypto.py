"""
Cryptographic operations for the habit vault.

Keys are derived from the user's password with Argon2id and used for
AES-256-GCM. Every save generates a new salt, so every save encrypts under
a fresh key with a fresh random nonce.
"""

import os
import logging
from typing import Optional, Tuple, Union

from argon2 import Type
from argon2.exceptions import HashingError
from argon2.low_level import hash_secret_raw
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from . import config
from .exceptions import AuthenticationError, EncryptionError, KeyDerivationError

logger = logging.getLogger(__name__)

Password = Union[str, bytes]


class CipherHandle:
    """An AES-256-GCM cipher bound to one derived key.

    Handles are short-lived: the vault builds one per save or load and drops
    it when the call returns.
    """

    def __init__(self, key: bytes):
        self._aead = AESGCM(key)

    def encrypt(self, plaintext: bytes) -> Tuple[bytes, bytes]:
        """
        Encrypt data using AES-256-GCM.

        Args:
            plaintext: Data to encrypt

        Returns:
            Tuple of (ciphertext with appended tag, nonce)
        """
        nonce = os.urandom(config.NONCE_SIZE)
        try:
            ciphertext = self._aead.encrypt(nonce, plaintext, None)
        except (OverflowError, ValueError, TypeError) as e:
            raise EncryptionError(f"Encryption failed: {e}") from e
        return ciphertext, nonce

    def decrypt(self, ciphertext: bytes, nonce: bytes) -> bytes:
        """
        Decrypt and authenticate data using AES-256-GCM.

        Raises:
            AuthenticationError: If the key is wrong or the data was altered.
                Both cases produce the same error.
        """
        try:
            return self._aead.decrypt(nonce, ciphertext, None)
        except (InvalidTag, ValueError):
            raise AuthenticationError() from None


class CryptoManager:
    """Derives keys from passwords and builds cipher handles."""

    def __init__(self, time_cost: int = config.ARGON2_TIME_COST,
                 memory_cost: int = config.ARGON2_MEMORY_COST,
                 parallelism: int = config.ARGON2_PARALLELISM):
        """Initialize the crypto manager with Argon2id cost parameters."""
        self.time_cost = time_cost
        self.memory_cost = memory_cost
        self.parallelism = parallelism

    def generate_salt(self) -> bytes:
        """Generate a cryptographically secure random salt."""
        return os.urandom(config.SALT_SIZE)

    def derive_key(self, password: Password, salt: bytes) -> bytes:
        """
        Derive an encryption key from a password using Argon2id.

        Args:
            password: The user's password
            salt: Random salt for key derivation

        Returns:
            32-byte encryption key

        Raises:
            KeyDerivationError: If the salt has the wrong size or hashing fails
        """
        if isinstance(password, str):
            password = password.encode('utf-8')
        if len(salt) != config.SALT_SIZE:
            raise KeyDerivationError(
                f"Salt must be {config.SALT_SIZE} bytes, got {len(salt)}")
        try:
            return hash_secret_raw(
                secret=password,
                salt=salt,
                time_cost=self.time_cost,
                memory_cost=self.memory_cost,
                parallelism=self.parallelism,
                hash_len=config.KEY_SIZE,
                type=Type.ID
            )
        except HashingError as e:
            logger.error(f"Argon2id key derivation failed: {e}")
            raise KeyDerivationError(f"Password hashing failed: {e}") from e

    def derive_and_build(self, password: Password, salt: bytes) -> CipherHandle:
        """Derive a key from password and salt and wrap it in a cipher."""
        return CipherHandle(self.derive_key(password, salt))


_default_manager: Optional[CryptoManager] = None


def _get_default_manager() -> CryptoManager:
    global _default_manager
    if _default_manager is None:
        _default_manager = CryptoManager()
    return _default_manager


def generate_salt() -> bytes:
    return _get_default_manager().generate_salt()


def derive_and_build(password: Password, salt: bytes) -> CipherHandle:
    """Build a cipher using the default Argon2id parameters."""
    return _get_default_manager().derive_and_build(password, salt)


def encrypt(handle: CipherHandle, plaintext: bytes) -> Tuple[bytes, bytes]:
    return handle.encrypt(plaintext)


def decrypt(handle: CipherHandle, ciphertext: bytes, nonce: bytes) -> bytes:
    return handle.decrypt(ciphertext, nonce)
