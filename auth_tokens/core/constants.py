"""Token format constants."""

# Token layout: <prefix><separator><sample><checksum>
DEFAULT_AUTH_TOKEN_CHAR_LENGTH: int = 255
PREFIX_SEPARATOR: str = "_"
CHECKSUM_CHAR_LENGTH: int = 6  # base-62 digits; 62**6 > 2**32

# Checksum
CHECKSUM_BITS: int = 32
CHECKSUM_MAX: int = (1 << CHECKSUM_BITS) - 1

# Base-62 digits, also used as the sample alphabet
BASE62_ALPHABET: str = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
)
BASE62: int = len(BASE62_ALPHABET)

# Entropy seeding
SEED_LENGTH_BYTES: int = 32
