"""ChaCha20-based cryptographically secure random generator.

The generator is the ChaCha20 keystream (RFC 8439 block function) under a
32-byte key, with an all-zero nonce and the block counter starting at 0.
It holds no entropy of its own: all of its unpredictability comes from the
seed, which must be obtained from a trusted entropy provider (see
``auth_tokens.entropy.seeding``).

Reference:
- Bernstein, "ChaCha, a variant of Salsa20" (2008)
- RFC 8439 §2.3-2.4
"""

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from auth_tokens.core.constants import SEED_LENGTH_BYTES


# cryptography takes a 16-byte nonce: 4-byte little-endian block counter
# followed by the 12-byte IETF nonce.
_INITIAL_COUNTER_AND_NONCE = bytes(16)


class ChaCha20Rng:
    """Deterministic CSPRNG over the ChaCha20 keystream.

    Instances are single-use per request and are not safe to share between
    concurrent requests. Every call consumes fresh keystream; bytes are
    never handed out twice.

    Parameters
    ----------
    seed : bytes
        Exactly 32 bytes of seed material, used verbatim as the ChaCha20 key.

    Raises
    ------
    ValueError
        If the seed is not exactly 32 bytes.

    Examples
    --------
    >>> rng = ChaCha20Rng.from_seed(bytes(32))
    >>> hex(rng.next_u32())
    '0xade0b876'
    """

    def __init__(self, seed: bytes) -> None:
        seed = bytes(seed)
        if len(seed) != SEED_LENGTH_BYTES:
            raise ValueError(
                f"ChaCha20 seed must be {SEED_LENGTH_BYTES} bytes, got {len(seed)}"
            )
        cipher = Cipher(algorithms.ChaCha20(seed, _INITIAL_COUNTER_AND_NONCE), mode=None)
        self._keystream = cipher.encryptor()
        self._bytes_drawn = 0

    @classmethod
    def from_seed(cls, seed: bytes) -> "ChaCha20Rng":
        """Create a generator from a 32-byte seed."""
        return cls(seed)

    @property
    def bytes_drawn(self) -> int:
        """Total keystream bytes consumed so far."""
        return self._bytes_drawn

    def random_bytes(self, length: int) -> bytes:
        """Return the next ``length`` keystream bytes."""
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        # Encrypting zeros yields the raw keystream.
        block = self._keystream.update(bytes(length))
        self._bytes_drawn += length
        return block

    def next_u32(self) -> int:
        """Next little-endian 32-bit word of keystream."""
        return int.from_bytes(self.random_bytes(4), "little")

    def next_u64(self) -> int:
        """Next little-endian 64-bit word of keystream."""
        return int.from_bytes(self.random_bytes(8), "little")
