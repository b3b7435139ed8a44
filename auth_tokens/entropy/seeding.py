"""Seeding a CSPRNG from a trusted external entropy provider.

The provider is any zero-argument coroutine function that returns raw bytes,
for example a call to a platform randomness service. Seeding is a trust
boundary with fail-fast semantics:

1. Exactly one provider call is awaited per seeded generator.
2. The payload must be exactly 32 bytes and is used verbatim as the seed.
3. Any failure (provider error, timeout, wrong type or length) raises
   ``EntropySourceError``. There is no retry, no cache, and no fallback to
   a locally seeded generator.
4. Cancellation propagates unchanged; no partial token is ever produced.

Reference:
- NIST SP 800-90A §8.6 (seed material must come from an approved source)
"""

import asyncio
import secrets
from typing import Awaitable, Callable, Optional, TypeVar, Union

from auth_tokens.auth.exceptions import EntropySourceError
from auth_tokens.core.constants import DEFAULT_AUTH_TOKEN_CHAR_LENGTH, SEED_LENGTH_BYTES
from auth_tokens.core.token import AuthToken, Prefix, make_token, sample_length_for
from auth_tokens.entropy.chacha import ChaCha20Rng
from auth_tokens.utils.logging import get_logger

logger = get_logger(__name__)

EntropyProvider = Callable[[], Awaitable[bytes]]
RngT = TypeVar("RngT")


class OsEntropyProvider:
    """Entropy provider backed by the operating system CSPRNG.

    Suitable for deployments where the local kernel is the trusted source.

    Parameters
    ----------
    length : int, optional
        Number of bytes returned per call (default 32).
    """

    def __init__(self, length: int = SEED_LENGTH_BYTES) -> None:
        self.length = length

    async def __call__(self) -> bytes:
        return secrets.token_bytes(self.length)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(length={self.length})"


async def _fetch_entropy(provider: EntropyProvider, timeout: Optional[float]) -> bytes:
    try:
        if timeout is None:
            return await provider()
        return await asyncio.wait_for(provider(), timeout)
    except asyncio.CancelledError:
        raise
    except asyncio.TimeoutError as exc:
        raise EntropySourceError(
            f"failed to get seed: entropy provider did not answer within {timeout}s"
        ) from exc
    except Exception as exc:
        raise EntropySourceError(f"failed to get seed: {exc}") from exc


async def seed_rng(
    provider: EntropyProvider,
    rng_factory: Callable[[bytes], RngT] = ChaCha20Rng.from_seed,
    timeout: Optional[float] = None,
) -> RngT:
    """Build a freshly seeded CSPRNG from one call to ``provider``.

    Parameters
    ----------
    provider : EntropyProvider
        Coroutine function returning raw random bytes.
    rng_factory : Callable[[bytes], RngT], optional
        Constructor taking the 32-byte seed. Defaults to ``ChaCha20Rng``.
    timeout : float, optional
        Seconds to wait for the provider. Waits indefinitely if None.

    Returns
    -------
    RngT
        Generator seeded with the provider's bytes.

    Raises
    ------
    EntropySourceError
        If the provider fails, times out, or does not return exactly 32 bytes.
    asyncio.CancelledError
        If the awaiting task is cancelled.

    Examples
    --------
    >>> rng = await seed_rng(OsEntropyProvider())  # doctest: +SKIP
    """
    raw: Union[bytes, bytearray, memoryview] = await _fetch_entropy(provider, timeout)

    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise EntropySourceError(
            f"when creating seed from raw randomness, expected bytes, "
            f"got {type(raw).__name__}"
        )

    seed = bytes(raw)
    if len(seed) != SEED_LENGTH_BYTES:
        raise EntropySourceError(
            f"when creating seed from raw randomness, expected raw randomness "
            f"to be of length {SEED_LENGTH_BYTES}, got {len(seed)}",
            expected=SEED_LENGTH_BYTES,
            actual=len(seed),
        )

    rng = rng_factory(seed)
    logger.debug("Seeded %s from %d bytes of external entropy", type(rng).__name__, len(seed))
    return rng


async def generate_token(
    provider: EntropyProvider,
    prefix: Union[Prefix, str],
    total_length: int = DEFAULT_AUTH_TOKEN_CHAR_LENGTH,
    timeout: Optional[float] = None,
) -> AuthToken:
    """Issue one token from a freshly seeded generator.

    The length budget is validated before the provider is called, so an
    impossible configuration never spends entropy. The generator is
    discarded after this token.

    Parameters
    ----------
    provider : EntropyProvider
        Trusted entropy source.
    prefix : Prefix or str
        Token namespace.
    total_length : int, optional
        Final token length (default 255).
    timeout : float, optional
        Seconds to wait for the provider.

    Returns
    -------
    AuthToken
        New token.

    Raises
    ------
    LengthBudgetError
        If ``total_length`` is too small for the prefix.
    EntropySourceError
        If seeding fails.
    """
    sample_length_for(prefix, total_length)
    rng = await seed_rng(provider, timeout=timeout)
    return make_token(rng, prefix, total_length)
