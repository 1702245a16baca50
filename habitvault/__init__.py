"""
HabitVault
Copyright (c) 2026

Habit tracking with all persisted data encrypted at rest under a
user-chosen password (Argon2id key derivation, AES-256-GCM).
"""
from . import config
from .exceptions import (
    AuthenticationError,
    EncryptionError,
    FormatError,
    KeyDerivationError,
    VaultError,
    VaultOpenError,
)
from .habit import Habit, HabitCompletion, HabitLedger, streak_tier
from .storage import EncryptedPayload, Vault

__version__ = config.APP_VERSION
