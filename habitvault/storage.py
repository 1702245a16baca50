"""
Encrypted storage for the habit ledger.

A vault is a single file holding one encrypted envelope. Every save derives
a new key from a fresh salt, re-encrypts the whole ledger and atomically
replaces the file; there is no incremental mode. The vault never keeps a
password, key or ledger between calls.
"""

import io
import os
import json
import struct
import logging
import tempfile
from dataclasses import dataclass
from typing import Optional

from . import config
from .crypto import CryptoManager, Password
from .exceptions import AuthenticationError, FormatError
from .habit import HabitLedger
from .utils import get_app_data_dir, set_owner_only_permissions

logger = logging.getLogger(__name__)


@dataclass
class EncryptedPayload:
    """The persisted envelope: ciphertext (with GCM tag), nonce and salt."""
    ciphertext: bytes
    nonce: bytes
    salt: bytes

    def to_bytes(self) -> bytes:
        """Serialize to the binary file layout."""
        out = io.BytesIO()
        out.write(config.ENVELOPE_MAGIC)
        out.write(struct.pack('<I', config.ENVELOPE_VERSION))
        for value in (self.salt, self.nonce, self.ciphertext):
            out.write(struct.pack('<I', len(value)))
            out.write(value)
        return out.getvalue()

    @classmethod
    def from_bytes(cls, raw: bytes) -> 'EncryptedPayload':
        """
        Parse the binary file layout.

        Raises:
            FormatError: On bad magic, unsupported version, truncated or
                trailing data, or salt/nonce of the wrong size.
        """
        stream = io.BytesIO(raw)
        magic = stream.read(len(config.ENVELOPE_MAGIC))
        if magic != config.ENVELOPE_MAGIC:
            raise FormatError("Not a HabitVault file (magic bytes mismatch)")

        version = _read_uint32(stream)
        if version != config.ENVELOPE_VERSION:
            raise FormatError(f"Unsupported file version {version}")

        salt = _read_field(stream)
        nonce = _read_field(stream)
        ciphertext = _read_field(stream)
        if stream.read(1):
            raise FormatError("Unexpected trailing data after ciphertext")
        if len(salt) != config.SALT_SIZE:
            raise FormatError(f"Invalid salt size {len(salt)}")
        if len(nonce) != config.NONCE_SIZE:
            raise FormatError(f"Invalid nonce size {len(nonce)}")
        return cls(ciphertext=ciphertext, nonce=nonce, salt=salt)


def _read_uint32(stream: io.BytesIO) -> int:
    data = stream.read(4)
    if len(data) != 4:
        raise FormatError("Truncated file header")
    return struct.unpack('<I', data)[0]


def _read_field(stream: io.BytesIO) -> bytes:
    size = _read_uint32(stream)
    value = stream.read(size)
    if len(value) != size:
        raise FormatError("Truncated field")
    return value


def serialize_ledger(ledger: HabitLedger) -> bytes:
    """Canonical UTF-8 JSON encoding of a ledger."""
    data = ledger.to_dict()
    data['metadata'] = {'version': config.DATA_FORMAT_VERSION}
    return json.dumps(data, sort_keys=True, separators=(',', ':')).encode('utf-8')


def deserialize_ledger(plaintext: bytes) -> HabitLedger:
    """
    Decode a ledger from its JSON encoding.

    Raises:
        FormatError: If the data is not valid JSON or misses required fields.
    """
    try:
        data = json.loads(plaintext.decode('utf-8'))
        version = data.get('metadata', {}).get('version', config.DATA_FORMAT_VERSION)
        if version != config.DATA_FORMAT_VERSION:
            raise FormatError(f"Unsupported data version {version}")
        return HabitLedger.from_dict(data)
    except FormatError:
        raise
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise FormatError(f"Malformed vault contents: {e}") from e


def _check_password(password: Password) -> None:
    if not password:
        raise ValueError("Password must not be empty")


class Vault:
    """Owns one encrypted vault file and its save/load lifecycle."""

    def __init__(self, filepath: Optional[str] = None,
                 crypto: Optional[CryptoManager] = None):
        """
        Initialize the vault.

        Args:
            filepath: Path to the encrypted file. Defaults to the vault file
                inside the platform application data directory.
            crypto: Key derivation settings; defaults to the standard
                Argon2id parameters.
        """
        if filepath is None:
            filepath = os.path.join(get_app_data_dir(), config.DEFAULT_VAULT_FILE)
        self.filepath = filepath
        self.crypto = crypto or CryptoManager()

        directory = os.path.dirname(os.path.abspath(self.filepath))
        os.makedirs(directory, exist_ok=True)

    def exists(self) -> bool:
        return os.path.exists(self.filepath)

    def load(self, password: Password) -> HabitLedger:
        """
        Load and decrypt the ledger.

        Returns an empty ledger without touching the filesystem when the
        vault file does not exist yet.

        Raises:
            AuthenticationError: Wrong password or tampered data.
            FormatError: Malformed envelope or plaintext.
        """
        _check_password(password)
        if not self.exists():
            logger.info(f"No vault at {self.filepath}, starting with an empty ledger")
            return HabitLedger()
        ledger = self._read_ledger(self.filepath, password)
        logger.info(f"Loaded vault {self.filepath} ({len(ledger.habits)} habits)")
        return ledger

    def save(self, ledger: HabitLedger, password: Password) -> None:
        """Encrypt the whole ledger under a fresh salt and replace the file."""
        _check_password(password)
        self._write_ledger(self.filepath, ledger, password)
        logger.info(f"Saved vault {self.filepath}")

    def export_backup(self, current_password: Password, backup_password: Password,
                      destination_path: str) -> None:
        """
        Write an independent encrypted copy of the vault.

        The backup gets its own salt and nonce and is encrypted under
        backup_password, unrelated to the live vault's password.
        """
        _check_password(backup_password)
        ledger = self.load(current_password)
        self._write_ledger(destination_path, ledger, backup_password)
        logger.info(f"Exported backup of {self.filepath} to {destination_path}")

    def import_backup(self, backup_path: str, backup_password: Password,
                      new_password: Password) -> None:
        """
        Replace the live vault with the contents of a backup file.

        This discards everything currently stored in the vault. Callers must
        get explicit confirmation from the user first.

        Raises:
            FileNotFoundError: If backup_path does not exist.
        """
        _check_password(new_password)
        _check_password(backup_password)
        ledger = self._read_ledger(backup_path, backup_password)
        self.save(ledger, new_password)
        logger.info(f"Imported backup {backup_path} into {self.filepath}")

    def change_password(self, old_password: Password, new_password: Password) -> None:
        """Re-encrypt the vault under a new password."""
        _check_password(new_password)
        ledger = self.load(old_password)
        self.save(ledger, new_password)
        logger.info(f"Changed password for vault {self.filepath}")

    def delete_all_data(self) -> None:
        """
        Delete the vault file if present.

        In-memory state is untouched; callers must reset their ledger and
        forget the password themselves.
        """
        if self.exists():
            os.remove(self.filepath)
            logger.info(f"Deleted vault {self.filepath}")

    def _read_ledger(self, path: str, password: Password) -> HabitLedger:
        with open(path, 'rb') as f:
            raw = f.read()
        payload = EncryptedPayload.from_bytes(raw)
        cipher = self.crypto.derive_and_build(password, payload.salt)
        try:
            plaintext = cipher.decrypt(payload.ciphertext, payload.nonce)
        except AuthenticationError:
            logger.warning(f"Failed to open {path}: {config.AUTH_FAILURE_MESSAGE}")
            raise
        return deserialize_ledger(plaintext)

    def _write_ledger(self, path: str, ledger: HabitLedger, password: Password) -> None:
        salt = self.crypto.generate_salt()
        cipher = self.crypto.derive_and_build(password, salt)
        ciphertext, nonce = cipher.encrypt(serialize_ledger(ledger))
        payload = EncryptedPayload(ciphertext=ciphertext, nonce=nonce, salt=salt)
        self._atomic_write(path, payload.to_bytes())

    def _atomic_write(self, path: str, data: bytes) -> None:
        """Write to a temporary file next to path, fsync, then rename over path."""
        directory = os.path.dirname(os.path.abspath(path))
        fd, tmp_path = tempfile.mkstemp(
            dir=directory,
            prefix=os.path.basename(path) + '.',
            suffix=config.TEMP_FILE_SUFFIX,
        )
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except Exception as e:
            logger.error(f"Error saving vault file {path}: {e}", exc_info=True)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        if not set_owner_only_permissions(path):
            logger.warning(f"Failed to set secure file permissions for {path}.")
