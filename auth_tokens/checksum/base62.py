"""Base-62 integer codec.

Digits are ``0-9``, then ``A-Z``, then ``a-z``; the digit value is the
position in that string. The order is part of the token wire format: it
decides which characters a checksum renders to.
"""

from auth_tokens.core.constants import (
    BASE62,
    BASE62_ALPHABET,
    CHECKSUM_CHAR_LENGTH,
    CHECKSUM_MAX,
)


_DIGIT_VALUES = {char: value for value, char in enumerate(BASE62_ALPHABET)}


def min_width(max_value: int, base: int = BASE62) -> int:
    """Number of base-``base`` digits needed to write every value up to ``max_value``.

    Parameters
    ----------
    max_value : int
        Largest value that must be representable (non-negative).
    base : int, optional
        Radix (default 62).

    Returns
    -------
    int
        Smallest ``w`` with ``base**w > max_value``.

    Examples
    --------
    >>> min_width(2**32 - 1)
    6
    """
    if max_value < 0:
        raise ValueError("max_value must be non-negative")
    width = 1
    while base ** width <= max_value:
        width += 1
    return width


# 62**5 = 916_132_832 < 2**32 <= 62**6 = 56_800_235_584
if min_width(CHECKSUM_MAX) > CHECKSUM_CHAR_LENGTH:
    raise RuntimeError(
        f"{CHECKSUM_CHAR_LENGTH} base-62 digits cannot hold a 32-bit checksum"
    )


def base62_encode(value: int) -> str:
    """Encode a non-negative integer without padding.

    Parameters
    ----------
    value : int
        Integer to encode.

    Returns
    -------
    str
        Base-62 digits, most significant first. Zero encodes to ``"0"``.

    Raises
    ------
    ValueError
        If ``value`` is negative.
    """
    if value < 0:
        raise ValueError(f"cannot base-62 encode negative value {value}")
    if value == 0:
        return BASE62_ALPHABET[0]

    digits = []
    while value:
        value, remainder = divmod(value, BASE62)
        digits.append(BASE62_ALPHABET[remainder])
    return "".join(reversed(digits))


def base62_encode_padded(value: int, width: int) -> str:
    """Encode and left-pad with the zero digit to exactly ``width`` characters.

    Raises
    ------
    ValueError
        If the natural encoding is already longer than ``width``. Values are
        never truncated.
    """
    encoded = base62_encode(value)
    if len(encoded) > width:
        raise ValueError(
            f"value {value} needs {len(encoded)} base-62 digits, width is {width}"
        )
    return encoded.rjust(width, BASE62_ALPHABET[0])


def base62_decode(text: str) -> int:
    """Decode base-62 digits to an integer.

    Leading zero digits are accepted, so padded strings decode as well.

    Raises
    ------
    ValueError
        If ``text`` is empty or contains a character outside the alphabet.
    """
    if not text:
        raise ValueError("cannot base-62 decode an empty string")

    value = 0
    for char in text:
        try:
            digit = _DIGIT_VALUES[char]
        except KeyError:
            raise ValueError(f"invalid base-62 digit {char!r}") from None
        value = value * BASE62 + digit
    return value
