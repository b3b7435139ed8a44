#!/usr/bin/env python3
"""Issue and verify auth tokens from the command line.

Demonstrates the intended consumer flow: a token is issued from freshly
seeded randomness, only an argon2 hash of it is kept, and presented tokens
are checksum-verified before the (expensive) hash comparison runs.

Usage:
    issue-token                                # Issue one token (base config)
    issue-token --profile session              # Use a config profile
    issue-token --prefix abc --length 40       # Override settings
    issue-token --prefix abc --check abc_...   # Checksum-verify an abc_ token
    issue-token --check tok_...                # Verify against the configured prefix
    issue-token --list                         # List config profiles

Examples:
    # Issue a token, then verify it against the stored hash
    issue-token --profile apikey --roundtrip --log-level DEBUG
"""

import argparse
import asyncio
import sys
from dataclasses import replace
from typing import Dict, List, Optional

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

from auth_tokens.auth.exceptions import TokenError
from auth_tokens.configs import list_profiles, load_token_settings
from auth_tokens.core.issuer import TokenIssuer
from auth_tokens.core.token import AuthToken
from auth_tokens.entropy.seeding import EntropyProvider, OsEntropyProvider
from auth_tokens.utils.logging import get_logger, set_log_level

logger = get_logger(__name__)


class HashedTokenStore:
    """Keeps only argon2 hashes of issued tokens, keyed by name.

    Parameters
    ----------
    issuer : TokenIssuer
        Issuer whose checksum check gates every hash comparison.
    hasher : PasswordHasher, optional
        argon2 hasher (library defaults if omitted).
    """

    def __init__(self, issuer: TokenIssuer, hasher: Optional[PasswordHasher] = None) -> None:
        self.issuer = issuer
        self.hasher = hasher or PasswordHasher()
        self._hashes: Dict[str, str] = {}

    async def issue(self, name: str) -> AuthToken:
        """Issue a token for ``name`` and store its hash."""
        token = await self.issuer.issue()
        self._hashes[name] = self.hasher.hash(token.value)
        logger.info("Stored hash for token %r", name)
        return token

    def verify(self, name: str, presented: str) -> bool:
        """Verify a presented token: checksum first, then the stored hash."""
        if not self.issuer.verify(presented):
            logger.info("Rejected token for %r: checksum check failed", name)
            return False

        stored = self._hashes.get(name)
        if stored is None:
            return False
        try:
            return self.hasher.verify(stored, presented)
        except VerificationError:
            return False


def build_issuer(args: argparse.Namespace, provider: EntropyProvider) -> TokenIssuer:
    """Create an issuer from config, applying command line overrides."""
    settings = load_token_settings(args.profile)
    if args.prefix is not None:
        settings = replace(settings, prefix=args.prefix)
    if args.length is not None:
        settings = replace(settings, length=args.length)
    set_log_level(args.log_level or settings.log_level)
    return TokenIssuer(provider, settings)


async def run(args: argparse.Namespace, provider: Optional[EntropyProvider] = None) -> int:
    """Execute the requested action.

    Returns
    -------
    int
        Process exit code.
    """
    if args.list:
        for name in list_profiles():
            print(name)
        return 0

    issuer = build_issuer(args, provider or OsEntropyProvider())

    if args.check is not None:
        valid = issuer.verify(args.check)
        print("valid" if valid else "invalid")
        return 0 if valid else 1

    store = HashedTokenStore(issuer)
    token = await store.issue("cli")
    print(token.value)

    if args.roundtrip:
        ok = store.verify("cli", token.value)
        print("roundtrip: " + ("ok" if ok else "FAILED"))
        return 0 if ok else 1
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Issue and verify checksummed auth tokens",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--profile", "-p",
        type=str,
        default=None,
        help="Configuration profile (name without .yaml)",
    )
    parser.add_argument(
        "--prefix",
        type=str,
        default=None,
        help="Override the token prefix",
    )
    parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Override the total token length",
    )
    parser.add_argument(
        "--check", "-c",
        type=str,
        default=None,
        metavar="TOKEN",
        help="Checksum-verify TOKEN against the configured prefix instead of issuing one",
    )
    parser.add_argument(
        "--roundtrip",
        action="store_true",
        help="Verify the issued token against its stored hash",
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="List available profiles",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default from config)",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    try:
        return asyncio.run(run(args))
    except TokenError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
