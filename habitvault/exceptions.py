"""
Error types raised by the HabitVault core.

Filesystem failures are not wrapped: they propagate as the builtin
``OSError`` subclasses raised by the operating system.
"""

from . import config


class VaultError(Exception):
    """Base class for every error raised by the vault core."""


class KeyDerivationError(VaultError):
    """Password hashing failed (bad salt length, allocation failure)."""


class EncryptionError(VaultError):
    """The cipher failed while encrypting."""


class VaultOpenError(VaultError):
    """A vault or backup file could not be opened.

    Callers should present every subclass as a single "cannot open vault"
    condition and must not retry automatically.
    """


class AuthenticationError(VaultOpenError):
    """Wrong password, or ciphertext that was tampered with or truncated."""

    def __init__(self, message: str = config.AUTH_FAILURE_MESSAGE):
        super().__init__(message)


class FormatError(VaultOpenError):
    """The envelope or the decrypted plaintext is malformed."""
