"""Checksum engine for auth tokens.

Modules
-------
crc
    32-bit CRC presets and digests on top of the ``crc`` package.
base62
    Base-62 integer codec.
engine
    Token checksum (CRC-32/ISO-HDLC) and its six-character encoding.

Examples
--------
>>> from auth_tokens.checksum import compute_checksum, encode_checksum
>>> encode_checksum(compute_checksum("yzBdc2BoUJhBY13n2nv8k5FXq9fYC0")).value
'0R8GcS'
"""

from auth_tokens.checksum.base62 import (
    base62_decode,
    base62_encode,
    base62_encode_padded,
    min_width,
)
from auth_tokens.checksum.crc import (
    CRC_32_BZIP2,
    CRC_32_CKSUM,
    CRC_32_ISCSI,
    CRC_32_ISO_HDLC,
    CRC_32_MPEG_2,
    CRC_PRESETS,
    CrcDigest,
    compute_crc,
)
from auth_tokens.checksum.engine import (
    Base62EncodedChecksum,
    Checksum,
    compute_checksum,
    compute_checksum_with_crc,
    decode_checksum,
    encode_checksum,
)

__all__ = [
    # Base-62
    "base62_encode",
    "base62_encode_padded",
    "base62_decode",
    "min_width",
    # CRC
    "CrcDigest",
    "CRC_32_ISO_HDLC",
    "CRC_32_ISCSI",
    "CRC_32_BZIP2",
    "CRC_32_MPEG_2",
    "CRC_32_CKSUM",
    "CRC_PRESETS",
    "compute_crc",
    # Token checksum
    "Checksum",
    "Base62EncodedChecksum",
    "compute_checksum",
    "compute_checksum_with_crc",
    "encode_checksum",
    "decode_checksum",
]
