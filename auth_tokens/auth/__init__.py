"""Error types for auth token issuance and validation.

Modules
-------
exceptions
    Exception hierarchy shared by the checksum, token and entropy packages.

Classes
-------
TokenError
    Base exception for every failure raised by this package.
LengthBudgetError
    Requested token length cannot fit prefix, separator and checksum.
InvalidPrefixError
    Prefix is empty or contains the separator.
MalformedTokenError
    Token string cannot be split into prefix, sample and checksum.
SecurityError
    Base exception for security failures.
EntropySourceError
    Entropy provider failed or returned the wrong number of bytes.
IntegrityError
    Base exception for integrity check failures.
ChecksumMismatchError
    Embedded checksum does not match the token sample.
"""

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

__all__ = [
    "TokenError",
    "LengthBudgetError",
    "InvalidPrefixError",
    "MalformedTokenError",
    "SecurityError",
    "EntropySourceError",
    "IntegrityError",
    "ChecksumMismatchError",
]
