"""Unit tests for the ChaCha20 generator."""

import pytest

from auth_tokens.entropy.chacha import ChaCha20Rng


# ChaCha20 keystream, all-zero key and nonce (RFC 8439 A.1, test vectors #1, #2).
BLOCK0_PREFIX = bytes.fromhex(
    "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
)
BLOCK1_PREFIX = bytes.fromhex("9f07e7be5551387a98ba977c732d080d")


class TestChaCha20Rng:
    """Tests for keystream generation."""

    def test_zero_seed_keystream(self, rng):
        assert rng.random_bytes(32) == BLOCK0_PREFIX

    def test_zero_seed_words(self, rng):
        assert rng.next_u32() == 0xADE0B876
        assert rng.next_u32() == 0x903DF1A0
        assert rng.next_u32() == 0xE56A5D40
        assert rng.next_u32() == 0x28BD8653

    def test_next_u64_is_little_endian(self, rng):
        assert rng.next_u64() == 0x903DF1A0ADE0B876

    def test_stream_continues_across_calls(self, rng):
        rng.random_bytes(10)
        rng.random_bytes(54)
        assert rng.random_bytes(16) == BLOCK1_PREFIX

    def test_chunking_does_not_change_stream(self, seed):
        whole = ChaCha20Rng.from_seed(seed).random_bytes(200)
        pieces = ChaCha20Rng.from_seed(seed)
        chunked = b"".join(pieces.random_bytes(n) for n in (1, 63, 64, 7, 65))
        assert chunked == whole

    def test_bytes_drawn(self, rng):
        rng.random_bytes(5)
        rng.next_u32()
        rng.next_u64()
        assert rng.bytes_drawn == 17

    def test_different_seeds_differ(self):
        a = ChaCha20Rng.from_seed(bytes(32)).random_bytes(32)
        b = ChaCha20Rng.from_seed(bytes([1]) + bytes(31)).random_bytes(32)
        assert a != b

    def test_zero_length(self, rng):
        assert rng.random_bytes(0) == b""
        assert rng.bytes_drawn == 0

    def test_negative_length_raises(self, rng):
        with pytest.raises(ValueError):
            rng.random_bytes(-1)

    @pytest.mark.parametrize("length", [0, 16, 31, 33, 64])
    def test_seed_must_be_32_bytes(self, length):
        with pytest.raises(ValueError, match="32 bytes"):
            ChaCha20Rng.from_seed(bytes(length))

    def test_accepts_bytearray_seed(self):
        rng = ChaCha20Rng.from_seed(bytearray(32))
        assert rng.random_bytes(32) == BLOCK0_PREFIX
