"""Auth token construction and checksum verification.

A token has the layout

    <prefix>_<sample><checksum>

where ``sample`` is random text over the 62 alphanumeric symbols and
``checksum`` is the six-character base-62 CRC-32 of the sample. Because the
prefix may not contain ``_`` and neither the sample nor the checksum can,
the first ``_`` always ends the prefix and the last six characters are
always the checksum.

Verification recomputes the checksum locally, without touching any stored
state, so corrupted or mistyped tokens are rejected before any expensive
lookup or password-hash comparison.
"""

import hmac
from dataclasses import dataclass
from typing import List, Optional, Protocol, Union

import numpy as np

from auth_tokens.auth.exceptions import (
    ChecksumMismatchError,
    InvalidPrefixError,
    LengthBudgetError,
    MalformedTokenError,
)
from auth_tokens.checksum.engine import compute_checksum, encode_checksum
from auth_tokens.core.constants import (
    BASE62,
    BASE62_ALPHABET,
    CHECKSUM_CHAR_LENGTH,
    DEFAULT_AUTH_TOKEN_CHAR_LENGTH,
    PREFIX_SEPARATOR,
)
from auth_tokens.utils.logging import get_logger

logger = get_logger(__name__)

_ALPHABET_BYTES = np.frombuffer(BASE62_ALPHABET.encode("ascii"), dtype=np.uint8)
_ALPHABET_SET = frozenset(BASE62_ALPHABET)


class RandomSource(Protocol):
    """Anything that hands out cryptographically secure random bytes."""

    def random_bytes(self, length: int) -> bytes:
        ...


@dataclass(frozen=True)
class Prefix:
    """Namespace marker placed at the start of every token.

    Attributes
    ----------
    value : str
        Non-empty prefix text without the separator character.

    Raises
    ------
    InvalidPrefixError
        If the prefix is empty or contains the separator.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise InvalidPrefixError("prefix must be a non-empty string")
        if PREFIX_SEPARATOR in self.value:
            raise InvalidPrefixError(
                f"prefix {self.value!r} must not contain the separator {PREFIX_SEPARATOR!r}"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AuthToken:
    """Issued token value. Compared by exact string equality."""

    value: str

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True)
class ParsedToken:
    """A token split into its positional parts.

    Attributes
    ----------
    prefix : str
        Text before the first separator.
    sample : str
        Random alphanumeric payload.
    checksum : str
        Trailing six base-62 characters.
    """

    prefix: str
    sample: str
    checksum: str


def _as_prefix(prefix: Union[Prefix, str]) -> Prefix:
    if isinstance(prefix, Prefix):
        return prefix
    return Prefix(prefix)


def minimum_token_length(prefix: Union[Prefix, str]) -> int:
    """Smallest total length that leaves room for a one-character sample."""
    return len(_as_prefix(prefix).value) + len(PREFIX_SEPARATOR) + CHECKSUM_CHAR_LENGTH + 1


def sample_length_for(
    prefix: Union[Prefix, str],
    total_length: int = DEFAULT_AUTH_TOKEN_CHAR_LENGTH,
) -> int:
    """Number of random characters a token of ``total_length`` carries.

    Parameters
    ----------
    prefix : Prefix or str
        Token namespace.
    total_length : int, optional
        Final token length in characters (default 255).

    Returns
    -------
    int
        ``total_length - len(prefix) - 1 - 6``, always at least 1.

    Raises
    ------
    LengthBudgetError
        If the sample would be empty or negative.
    """
    prefix = _as_prefix(prefix)
    if isinstance(total_length, bool) or not isinstance(total_length, int):
        raise TypeError(f"total_length must be an int, got {type(total_length).__name__}")

    sample_length = (
        total_length - len(prefix.value) - len(PREFIX_SEPARATOR) - CHECKSUM_CHAR_LENGTH
    )
    if sample_length <= 0:
        raise LengthBudgetError(total_length, prefix.value, minimum_token_length(prefix))
    return sample_length


def sample_alphanumeric(rng: RandomSource, length: int) -> str:
    """Draw ``length`` characters uniformly from the 62-symbol alphabet.

    Each random byte is reduced to its top six bits (0-63); values 62 and 63
    are rejected, so every accepted symbol is equally likely. Bytes are
    pulled from ``rng`` in forward-only chunks and never reused.

    Parameters
    ----------
    rng : RandomSource
        Cryptographically secure byte source.
    length : int
        Number of characters to draw.

    Returns
    -------
    str
        Random alphanumeric string.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")

    parts: List[np.ndarray] = []
    remaining = length
    while remaining > 0:
        # 62 of 64 values are accepted; over-draw slightly to usually finish in one round.
        draw = remaining + remaining // 16 + 8
        candidates = np.frombuffer(rng.random_bytes(draw), dtype=np.uint8) >> 2
        accepted = candidates[candidates < BASE62][:remaining]
        parts.append(accepted)
        remaining -= accepted.size

    if not parts:
        return ""
    return _ALPHABET_BYTES[np.concatenate(parts)].tobytes().decode("ascii")


def make_token_with_value(prefix: Union[Prefix, str], sample: str) -> AuthToken:
    """Assemble a token from a known sample.

    Parameters
    ----------
    prefix : Prefix or str
        Token namespace.
    sample : str
        Non-empty payload over the 62 alphanumeric symbols; the checksum is
        computed over its bytes.

    Returns
    -------
    AuthToken
        ``prefix + "_" + sample + encode_checksum(compute_checksum(sample))``.

    Raises
    ------
    MalformedTokenError
        If the sample is empty or contains characters ``parse_token`` would
        reject.

    Examples
    --------
    >>> make_token_with_value("abc", "yzBdc2BoUJhBY13n2nv8k5FXq9fYC0").value
    'abc_yzBdc2BoUJhBY13n2nv8k5FXq9fYC00R8GcS'
    """
    prefix = _as_prefix(prefix)
    if not sample:
        raise MalformedTokenError("token sample must not be empty")
    if not _ALPHABET_SET.issuperset(sample):
        raise MalformedTokenError("token sample contains non-alphanumeric characters")
    encoded = encode_checksum(compute_checksum(sample))
    return AuthToken(f"{prefix.value}{PREFIX_SEPARATOR}{sample}{encoded.value}")


def make_token(
    rng: RandomSource,
    prefix: Union[Prefix, str],
    total_length: int = DEFAULT_AUTH_TOKEN_CHAR_LENGTH,
) -> AuthToken:
    """Generate a random checksummed token of exactly ``total_length`` characters.

    Parameters
    ----------
    rng : RandomSource
        Freshly seeded CSPRNG (see ``auth_tokens.entropy.seed_rng``).
    prefix : Prefix or str
        Token namespace.
    total_length : int, optional
        Final token length in characters (default 255).

    Returns
    -------
    AuthToken
        New token.

    Raises
    ------
    LengthBudgetError
        If ``total_length`` leaves no room for the sample.
    InvalidPrefixError
        If the prefix is empty or contains ``_``.
    """
    prefix = _as_prefix(prefix)
    sample_length = sample_length_for(prefix, total_length)
    sample = sample_alphanumeric(rng, sample_length)
    token = make_token_with_value(prefix, sample)
    logger.debug(
        "Made %d-character token for prefix %r", len(token.value), prefix.value
    )
    return token


def parse_token(
    token: Union[AuthToken, str],
    prefix: Optional[Union[Prefix, str]] = None,
) -> ParsedToken:
    """Split a token into prefix, sample and checksum without checking the checksum.

    Parameters
    ----------
    token : AuthToken or str
        Presented token.
    prefix : Prefix or str, optional
        Expected namespace. If given, the token's prefix must equal it.

    Returns
    -------
    ParsedToken
        Positional parts of the token.

    Raises
    ------
    MalformedTokenError
        If the token has no separator, an unexpected prefix, an empty
        sample, or characters outside the alphanumeric alphabet.
    """
    text = str(token)
    head, separator, body = text.partition(PREFIX_SEPARATOR)
    if not separator or not head:
        raise MalformedTokenError("token has no prefix separator")

    if prefix is not None and head != _as_prefix(prefix).value:
        raise MalformedTokenError("token prefix does not match")

    if len(body) <= CHECKSUM_CHAR_LENGTH:
        raise MalformedTokenError(
            f"token body must be longer than {CHECKSUM_CHAR_LENGTH} characters"
        )
    if not _ALPHABET_SET.issuperset(body):
        raise MalformedTokenError("token body contains non-alphanumeric characters")

    return ParsedToken(
        prefix=head,
        sample=body[:-CHECKSUM_CHAR_LENGTH],
        checksum=body[-CHECKSUM_CHAR_LENGTH:],
    )


def check_token(
    token: Union[AuthToken, str],
    prefix: Optional[Union[Prefix, str]] = None,
) -> ParsedToken:
    """Parse a token and verify its embedded checksum.

    Raises
    ------
    MalformedTokenError
        If the token cannot be parsed (see ``parse_token``).
    ChecksumMismatchError
        If the recomputed checksum differs from the embedded one.
    """
    parsed = parse_token(token, prefix)
    expected = encode_checksum(compute_checksum(parsed.sample)).value
    if not hmac.compare_digest(expected, parsed.checksum):
        raise ChecksumMismatchError(expected=expected, actual=parsed.checksum)
    return parsed


def verify_token(token: Union[AuthToken, str], prefix: Union[Prefix, str]) -> bool:
    """Check a token's structure and checksum.

    Local and side-effect free. Run it before any expensive verification of
    the token (hash comparison, database lookup).

    Parameters
    ----------
    token : AuthToken or str
        Presented token.
    prefix : Prefix or str
        Namespace the token must belong to.

    Returns
    -------
    bool
        True if the token is well-formed and its checksum matches.
    """
    try:
        check_token(token, prefix)
    except (MalformedTokenError, ChecksumMismatchError):
        return False
    return True
