"""Core package initialization."""

from auth_tokens.core.constants import (
    BASE62_ALPHABET,
    CHECKSUM_CHAR_LENGTH,
    DEFAULT_AUTH_TOKEN_CHAR_LENGTH,
    PREFIX_SEPARATOR,
    SEED_LENGTH_BYTES,
)
from auth_tokens.core.token import (
    AuthToken,
    ParsedToken,
    Prefix,
    RandomSource,
    check_token,
    make_token,
    make_token_with_value,
    minimum_token_length,
    parse_token,
    sample_alphanumeric,
    sample_length_for,
    verify_token,
)
from auth_tokens.core.issuer import TokenIssuer

__all__ = [
    # Constants
    "BASE62_ALPHABET",
    "CHECKSUM_CHAR_LENGTH",
    "DEFAULT_AUTH_TOKEN_CHAR_LENGTH",
    "PREFIX_SEPARATOR",
    "SEED_LENGTH_BYTES",
    # Value types
    "AuthToken",
    "ParsedToken",
    "Prefix",
    "RandomSource",
    # Formatter
    "make_token",
    "make_token_with_value",
    "minimum_token_length",
    "sample_alphanumeric",
    "sample_length_for",
    # Verification
    "parse_token",
    "check_token",
    "verify_token",
    # Issuer
    "TokenIssuer",
]
