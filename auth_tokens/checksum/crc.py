"""32-bit CRC algorithms backed by the ``crc`` package.

Token checksums use CRC-32/ISO-HDLC, the CRC found in zlib, gzip, PNG and
Ethernet, so any third-party implementation can reproduce them. The other
32-bit catalogue algorithms are exposed as ``crc.Configuration`` presets for
callers that need a different CRC over their own payloads.

Reference:
- reveng CRC catalogue (parameter model: width, poly, init, refin/refout,
  xorout, check)
"""

from typing import Dict, Union

from crc import Calculator, Configuration

from auth_tokens.core.constants import CHECKSUM_BITS


CRC_32_ISO_HDLC = Configuration(
    width=32,
    polynomial=0x04C11DB7,
    init_value=0xFFFFFFFF,
    final_xor_value=0xFFFFFFFF,
    reverse_input=True,
    reverse_output=True,
)
CRC_32_ISCSI = Configuration(
    width=32,
    polynomial=0x1EDC6F41,
    init_value=0xFFFFFFFF,
    final_xor_value=0xFFFFFFFF,
    reverse_input=True,
    reverse_output=True,
)
CRC_32_BZIP2 = Configuration(
    width=32,
    polynomial=0x04C11DB7,
    init_value=0xFFFFFFFF,
    final_xor_value=0xFFFFFFFF,
    reverse_input=False,
    reverse_output=False,
)
CRC_32_MPEG_2 = Configuration(
    width=32,
    polynomial=0x04C11DB7,
    init_value=0xFFFFFFFF,
    final_xor_value=0x00000000,
    reverse_input=False,
    reverse_output=False,
)
CRC_32_CKSUM = Configuration(
    width=32,
    polynomial=0x04C11DB7,
    init_value=0x00000000,
    final_xor_value=0xFFFFFFFF,
    reverse_input=False,
    reverse_output=False,
)

CRC_PRESETS: Dict[str, Configuration] = {
    "CRC-32/ISO-HDLC": CRC_32_ISO_HDLC,
    "CRC-32/ISCSI": CRC_32_ISCSI,
    "CRC-32/BZIP2": CRC_32_BZIP2,
    "CRC-32/MPEG-2": CRC_32_MPEG_2,
    "CRC-32/CKSUM": CRC_32_CKSUM,
}


def _calculator(configuration: Configuration) -> Calculator:
    if configuration.width != CHECKSUM_BITS:
        raise ValueError(
            f"expected a {CHECKSUM_BITS}-bit CRC configuration, "
            f"got width {configuration.width}"
        )
    return Calculator(configuration, optimized=True)


def compute_crc(
    data: Union[bytes, bytearray, memoryview],
    configuration: Configuration = CRC_32_ISO_HDLC,
) -> int:
    """Compute a 32-bit CRC over ``data``.

    Parameters
    ----------
    data : bytes-like
        Input bytes.
    configuration : crc.Configuration, optional
        32-bit CRC algorithm (default CRC-32/ISO-HDLC).

    Returns
    -------
    int
        CRC value in ``[0, 2**32)``.

    Raises
    ------
    ValueError
        If ``configuration`` is not 32 bits wide.
    """
    return _calculator(configuration).checksum(bytes(data))


class CrcDigest:
    """Incremental CRC computation.

    Parameters
    ----------
    configuration : crc.Configuration, optional
        32-bit CRC algorithm (default CRC-32/ISO-HDLC).

    Examples
    --------
    >>> digest = CrcDigest()
    >>> digest.update(b"1234")
    >>> digest.update(b"56789")
    >>> hex(digest.finalize())
    '0xcbf43926'
    """

    def __init__(self, configuration: Configuration = CRC_32_ISO_HDLC) -> None:
        self._calculator = _calculator(configuration)
        self._data = bytearray()

    def update(self, data: Union[bytes, bytearray, memoryview]) -> None:
        """Feed more bytes into the digest."""
        self._data += data

    def finalize(self) -> int:
        """Return the CRC of all bytes fed so far.

        The digest can keep receiving data afterwards.
        """
        return self._calculator.checksum(bytes(self._data))
