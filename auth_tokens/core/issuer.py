"""Configured token issuer for a single namespace."""

from pathlib import Path
from typing import Optional, Union

from auth_tokens.configs import TokenSettings, load_token_settings
from auth_tokens.core.token import (
    AuthToken,
    ParsedToken,
    Prefix,
    check_token,
    sample_length_for,
    verify_token,
)
from auth_tokens.entropy.seeding import EntropyProvider, generate_token
from auth_tokens.utils.logging import get_logger, set_log_level

logger = get_logger(__name__)


class TokenIssuer:
    """Issue and checksum-verify tokens for one prefix.

    Every call to ``issue`` seeds a new generator from one provider call;
    the issuer keeps no generator or entropy between calls.

    Parameters
    ----------
    provider : EntropyProvider
        Trusted entropy source.
    settings : TokenSettings
        Prefix, length and entropy timeout.

    Raises
    ------
    InvalidPrefixError
        If the configured prefix is invalid.
    LengthBudgetError
        If the configured length cannot hold the prefix and checksum.

    Examples
    --------
    >>> issuer = TokenIssuer(OsEntropyProvider(), TokenSettings(prefix="abc", length=40))  # doctest: +SKIP
    >>> token = await issuer.issue()  # doctest: +SKIP
    >>> issuer.verify(token)  # doctest: +SKIP
    True
    """

    def __init__(self, provider: EntropyProvider, settings: TokenSettings) -> None:
        self.provider = provider
        self.settings = settings
        self.prefix = Prefix(settings.prefix)
        self.sample_length = sample_length_for(self.prefix, settings.length)

    @classmethod
    def from_config(
        cls,
        provider: EntropyProvider,
        profile: Optional[str] = None,
        configs_dir: Optional[Path] = None,
    ) -> "TokenIssuer":
        """Create an issuer from YAML configuration and apply its log level."""
        settings = load_token_settings(profile, configs_dir)
        set_log_level(settings.log_level)
        logger.debug(
            "Configured issuer for prefix %r (length %d)", settings.prefix, settings.length
        )
        return cls(provider, settings)

    async def issue(self) -> AuthToken:
        """Issue a new token from freshly seeded randomness."""
        return await generate_token(
            self.provider,
            self.prefix,
            self.settings.length,
            timeout=self.settings.entropy_timeout,
        )

    def check(self, token: Union[AuthToken, str]) -> ParsedToken:
        """Parse and checksum-verify a token, raising on failure."""
        return check_token(token, self.prefix)

    def verify(self, token: Union[AuthToken, str]) -> bool:
        """Return True if the token belongs to this prefix and its checksum matches."""
        return verify_token(token, self.prefix)
