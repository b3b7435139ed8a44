"""Shared fixtures for auth token tests."""

from typing import Callable, List

import pytest

from auth_tokens.entropy.chacha import ChaCha20Rng


SEED = bytes(32)


class StaticEntropyProvider:
    """Async provider returning a fixed payload and counting calls."""

    def __init__(self, payload: bytes) -> None:
        self.payload = payload
        self.calls = 0

    async def __call__(self) -> bytes:
        self.calls += 1
        return self.payload


class SequenceEntropyProvider:
    """Async provider returning a distinct 32-byte seed on every call."""

    def __init__(self) -> None:
        self.calls = 0
        self.seeds: List[bytes] = []

    async def __call__(self) -> bytes:
        self.calls += 1
        seed = bytes([self.calls]) * 32
        self.seeds.append(seed)
        return seed


@pytest.fixture
def seed() -> bytes:
    """All-zero 32-byte seed."""
    return SEED


@pytest.fixture
def rng(seed) -> ChaCha20Rng:
    """ChaCha20 generator with the all-zero seed."""
    return ChaCha20Rng.from_seed(seed)


@pytest.fixture
def static_provider() -> Callable[[bytes], StaticEntropyProvider]:
    """Factory for providers returning a fixed payload."""
    return StaticEntropyProvider


@pytest.fixture
def sequence_provider() -> SequenceEntropyProvider:
    """Provider handing out a new seed per call."""
    return SequenceEntropyProvider()
