"""Self-checking authentication tokens.

Tokens look like ``<prefix>_<random sample><6-char base-62 CRC-32>``. The
embedded checksum lets services reject corrupted or mistyped tokens before
any expensive lookup, and the random sample is drawn from a ChaCha20
generator seeded with 32 bytes from a trusted entropy provider.

Examples
--------
>>> from auth_tokens import make_token_with_value, verify_token
>>> token = make_token_with_value("abc", "yzBdc2BoUJhBY13n2nv8k5FXq9fYC0")
>>> token.value
'abc_yzBdc2BoUJhBY13n2nv8k5FXq9fYC00R8GcS'
>>> verify_token(token, "abc")
True

Issuing from an entropy provider:

>>> token = await generate_token(OsEntropyProvider(), "session", 64)  # doctest: +SKIP
"""

from auth_tokens.core import (
    DEFAULT_AUTH_TOKEN_CHAR_LENGTH,
    AuthToken,
    ParsedToken,
    Prefix,
    TokenIssuer,
    check_token,
    make_token,
    make_token_with_value,
    parse_token,
    sample_length_for,
    verify_token,
)
from auth_tokens.auth.exceptions import (
    ChecksumMismatchError,
    EntropySourceError,
    IntegrityError,
    InvalidPrefixError,
    LengthBudgetError,
    MalformedTokenError,
    SecurityError,
    TokenError,
)
from auth_tokens.checksum import (
    Base62EncodedChecksum,
    Checksum,
    compute_checksum,
    compute_checksum_with_crc,
    decode_checksum,
    encode_checksum,
)
from auth_tokens.configs import TokenSettings, load_token_settings
from auth_tokens.entropy import (
    ChaCha20Rng,
    EntropyProvider,
    OsEntropyProvider,
    generate_token,
    seed_rng,
)

__version__ = "0.1.0"

__all__ = [
    # Tokens
    "DEFAULT_AUTH_TOKEN_CHAR_LENGTH",
    "AuthToken",
    "ParsedToken",
    "Prefix",
    "TokenIssuer",
    "make_token",
    "make_token_with_value",
    "sample_length_for",
    "parse_token",
    "check_token",
    "verify_token",
    # Checksums
    "Checksum",
    "Base62EncodedChecksum",
    "compute_checksum",
    "compute_checksum_with_crc",
    "encode_checksum",
    "decode_checksum",
    # Entropy
    "ChaCha20Rng",
    "EntropyProvider",
    "OsEntropyProvider",
    "seed_rng",
    "generate_token",
    # Configuration
    "TokenSettings",
    "load_token_settings",
    # Exceptions
    "TokenError",
    "LengthBudgetError",
    "InvalidPrefixError",
    "MalformedTokenError",
    "SecurityError",
    "EntropySourceError",
    "IntegrityError",
    "ChecksumMismatchError",
]
