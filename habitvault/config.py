"""
Configuration constants for the HabitVault application.
"""

# Application Metadata
APP_VERSION = "0.1.0"  # Use: Current version of the library. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "HabitVault"  # Use: Full name of the application. Type: str. Range: Any valid string.

# Security Settings
SALT_SIZE = 32  # Use: Size of the random salt in bytes, regenerated on every save. Type: int. Range: 32 bytes (256 bits); the envelope parser rejects any other size.
KEY_SIZE = 32  # Use: Size of the derived encryption key in bytes. Corresponds to AES-256. Type: int. Range: 32 bytes.
NONCE_SIZE = 12  # Use: Size of the Nonce (Number used once) in bytes for AES-GCM. Type: int. Range: 12 bytes (96 bits) is the recommended size for GCM.
TAG_SIZE = 16  # Use: Size of the authentication tag appended to the ciphertext by AES-GCM. Type: int. Range: 16 bytes (128 bits).
ARGON2_TIME_COST = 2  # Use: Argon2id time cost parameter. Controls the number of iterations. Type: int. Range: Typically 1 to 10. Higher values increase security but also computation time.
ARGON2_MEMORY_COST = 65536  # Use: Argon2id memory cost parameter in KiB. Type: int. Range: Recommended to be at least 65536 (64 MB).
ARGON2_PARALLELISM = 4  # Use: Argon2id parallelism parameter. Controls the number of threads/lanes. Type: int. Range: Typically 1 to 8.

# Envelope Format
ENVELOPE_MAGIC = b'HBVT'  # Use: Magic bytes at the start of every encrypted vault or backup file. Type: bytes. Range: Exactly 4 bytes.
ENVELOPE_VERSION = 1  # Use: Version of the binary envelope layout. Type: int. Range: Positive integer; files with another version are rejected.
DATA_FORMAT_VERSION = 1  # Use: Version of the JSON plaintext stored inside the envelope. Type: int. Range: Positive integer.
AUTH_FAILURE_MESSAGE = "incorrect password or corrupted data"  # Use: The single message reported for every authentication failure. Type: str. Range: Any string; must not distinguish wrong passwords from tampering.

# File and Directory Names
DATA_DIR_NAME = "habitvault"  # Use: Name of the directory inside the platform application data directory holding the vault. Type: str. Range: Any valid directory name.
DEFAULT_VAULT_FILE = "habits.encrypted"  # Use: Filename of the live encrypted vault. Type: str. Range: Any valid filename.
DEFAULT_BACKUP_FILE = "habits_backup.encrypted"  # Use: Suggested filename for exported backups. Type: str. Range: Any valid filename.
TEMP_FILE_SUFFIX = ".tmp"  # Use: Suffix of the temporary file written before atomically replacing a vault. Type: str. Range: Any string.

# Habit Settings
DEFAULT_TARGET_DAYS_PER_WEEK = 7  # Use: Target completions per week assigned to new habits. Stored only, never enforced. Type: int. Range: 1 to 7.
HABIT_ID_PREFIX = "habit_"  # Use: Prefix of generated habit identifiers, followed by a unix timestamp. Type: str. Range: Any string.
STREAK_TIER_BUILDING = 3  # Use: Minimum streak length (days) classified as "building". Type: int. Range: Positive integer below STREAK_TIER_ON_FIRE.
STREAK_TIER_ON_FIRE = 7  # Use: Minimum streak length (days) classified as "on_fire". Type: int. Range: Positive integer.
