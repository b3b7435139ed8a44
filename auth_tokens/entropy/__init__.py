"""Entropy seeding for token generation.

Modules
-------
chacha
    ChaCha20 keystream generator accepting a 32-byte seed.
seeding
    Fail-fast seeding protocol against an external entropy provider.

Classes
-------
ChaCha20Rng
    Seeded CSPRNG consumed by the token formatter.
OsEntropyProvider
    Provider returning bytes from the operating system CSPRNG.

Functions
---------
seed_rng
    Await one provider call and seed a fresh generator.
generate_token
    Seed a fresh generator and issue one token.
"""

from auth_tokens.entropy.chacha import ChaCha20Rng
from auth_tokens.entropy.seeding import (
    EntropyProvider,
    OsEntropyProvider,
    generate_token,
    seed_rng,
)

__all__ = [
    "ChaCha20Rng",
    "EntropyProvider",
    "OsEntropyProvider",
    "seed_rng",
    "generate_token",
]
