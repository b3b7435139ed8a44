"""Token checksum computation and fixed-width encoding.

The checksum of a token is CRC-32/ISO-HDLC over the UTF-8 bytes of its
random sample, rendered as exactly six base-62 digits. The fixed width
keeps tokens of one configuration at a constant length and lets the
checksum be sliced off the end without a delimiter.
"""

import zlib
from dataclasses import dataclass
from typing import Union

from crc import Configuration

from auth_tokens.checksum.base62 import base62_decode, base62_encode_padded
from auth_tokens.checksum.crc import compute_crc
from auth_tokens.core.constants import CHECKSUM_CHAR_LENGTH, CHECKSUM_MAX


@dataclass(frozen=True)
class Checksum:
    """Unsigned 32-bit checksum value.

    Attributes
    ----------
    value : int
        Checksum in ``[0, 2**32)``.
    """

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= CHECKSUM_MAX:
            raise ValueError(f"checksum {self.value} is not a 32-bit unsigned value")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Base62EncodedChecksum:
    """Checksum rendered as six zero-padded base-62 digits."""

    value: str

    def __str__(self) -> str:
        return self.value


def _as_bytes(payload: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)


def compute_checksum_with_crc(
    payload: Union[bytes, bytearray, memoryview, str],
    configuration: Configuration,
) -> Checksum:
    """Compute a checksum with an explicit CRC configuration.

    Parameters
    ----------
    payload : bytes-like or str
        Data to checksum. Strings are UTF-8 encoded.
    configuration : crc.Configuration
        32-bit CRC algorithm, e.g. one of ``auth_tokens.checksum.CRC_PRESETS``.

    Returns
    -------
    Checksum
        CRC of ``payload``.
    """
    return Checksum(compute_crc(_as_bytes(payload), configuration))


def compute_checksum(payload: Union[bytes, bytearray, memoryview, str]) -> Checksum:
    """Compute the CRC-32/ISO-HDLC checksum of ``payload``.

    This is ``zlib.crc32``, so any zlib binding reproduces it.

    Examples
    --------
    >>> compute_checksum("yzBdc2BoUJhBY13n2nv8k5FXq9fYC0").value
    400931584
    """
    return Checksum(zlib.crc32(_as_bytes(payload)))


def encode_checksum(checksum: Checksum) -> Base62EncodedChecksum:
    """Render a checksum as exactly six base-62 characters.

    Examples
    --------
    >>> encode_checksum(Checksum(0)).value
    '000000'
    >>> encode_checksum(compute_checksum("yzBdc2BoUJhBY13n2nv8k5FXq9fYC0")).value
    '0R8GcS'
    """
    return Base62EncodedChecksum(
        base62_encode_padded(checksum.value, CHECKSUM_CHAR_LENGTH)
    )


def decode_checksum(encoded: Union[Base62EncodedChecksum, str]) -> Checksum:
    """Parse a six-character base-62 checksum.

    Raises
    ------
    ValueError
        If the text is not six base-62 digits or exceeds 32 bits.
    """
    text = str(encoded)
    if len(text) != CHECKSUM_CHAR_LENGTH:
        raise ValueError(
            f"encoded checksum must be {CHECKSUM_CHAR_LENGTH} characters, got {len(text)}"
        )
    return Checksum(base62_decode(text))
