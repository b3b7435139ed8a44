"""Exceptions raised while issuing and checking auth tokens.

The hierarchy separates caller mistakes (bad prefix, impossible length
budget, structurally broken token) from security failures (untrusted
entropy, checksum mismatch). Security failures must never be downgraded:
callers reject the request rather than retrying with weaker inputs.
"""

from typing import Optional


class TokenError(Exception):
    """Base class for all auth token errors."""


class LengthBudgetError(TokenError, ValueError):
    """Requested total length leaves no room for the random sample.

    Parameters
    ----------
    total_length : int
        Requested token length in characters.
    prefix : str
        Namespace prefix the token was requested for.
    minimum : int
        Smallest total length that yields a one-character sample.
    """

    def __init__(self, total_length: int, prefix: str, minimum: int) -> None:
        self.total_length = total_length
        self.prefix = prefix
        self.minimum = minimum
        super().__init__(
            f"token length {total_length} is too small for prefix {prefix!r}: "
            f"need at least {minimum} characters"
        )


class InvalidPrefixError(TokenError, ValueError):
    """Prefix is empty or contains the separator character."""


class MalformedTokenError(TokenError, ValueError):
    """Token string does not have the ``<prefix>_<sample><checksum>`` shape."""


class SecurityError(TokenError):
    """Base exception for security-relevant failures."""


class EntropySourceError(SecurityError):
    """External entropy could not be obtained or was malformed.

    Parameters
    ----------
    message : str
        Diagnostic message.
    expected : int, optional
        Expected payload length in bytes, when a length mismatch occurred.
    actual : int, optional
        Received payload length in bytes, when a length mismatch occurred.
    """

    def __init__(
        self,
        message: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class IntegrityError(SecurityError):
    """Integrity check on a presented value failed."""


class ChecksumMismatchError(IntegrityError):
    """Embedded token checksum does not match the recomputed one.

    Parameters
    ----------
    expected : str
        Checksum recomputed from the token sample.
    actual : str
        Checksum found at the end of the token.
    """

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"token checksum mismatch: embedded {actual!r}, computed {expected!r}"
        )
