"""Configuration package for token issuance.

Usage:
    from auth_tokens.configs import load_profile, load_token_settings

    # List available profiles
    profiles = list_profiles()

    # Load a merged configuration dict
    config = load_profile("session")

    # Load typed settings (base only, or base + profile)
    settings = load_token_settings("session")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from auth_tokens.core.constants import DEFAULT_AUTH_TOKEN_CHAR_LENGTH
from auth_tokens.utils.logging import get_logger

logger = get_logger(__name__)

CONFIGS_DIR = Path(__file__).parent
PROFILES_DIR = CONFIGS_DIR / "profiles"


@dataclass(frozen=True)
class TokenSettings:
    """Settings for issuing tokens in one namespace.

    Attributes
    ----------
    prefix : str
        Token namespace prefix.
    length : int
        Total token length in characters.
    entropy_timeout : Optional[float]
        Seconds to wait for the entropy provider (None waits indefinitely).
    log_level : str
        Level applied to package loggers.
    """

    prefix: str
    length: int = DEFAULT_AUTH_TOKEN_CHAR_LENGTH
    entropy_timeout: Optional[float] = None
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "TokenSettings":
        """Build settings from a (merged) configuration dict."""
        token = config.get("token") or {}
        entropy = config.get("entropy") or {}
        logging_cfg = config.get("logging") or {}

        if "prefix" not in token:
            raise KeyError("configuration is missing token.prefix")

        timeout = entropy.get("timeout_seconds")
        return cls(
            prefix=str(token["prefix"]),
            length=int(token.get("length", DEFAULT_AUTH_TOKEN_CHAR_LENGTH)),
            entropy_timeout=float(timeout) if timeout is not None else None,
            log_level=str(logging_cfg.get("level", "WARNING")),
        )


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_base_config(configs_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load the base configuration.

    Parameters
    ----------
    configs_dir : Path, optional
        Directory holding ``base.yaml``. Defaults to this package.

    Returns
    -------
    Dict[str, Any]
        Base configuration dictionary (empty if the file is missing).
    """
    base_path = (configs_dir or CONFIGS_DIR) / "base.yaml"
    if not base_path.exists():
        return {}
    return _read_yaml(base_path)


def load_profile(name: str, configs_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load a profile configuration with base inheritance.

    Parameters
    ----------
    name : str
        Profile name (without .yaml extension).
    configs_dir : Path, optional
        Directory holding ``base.yaml`` and ``profiles/``.

    Returns
    -------
    Dict[str, Any]
        Merged configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If the profile file doesn't exist.
    """
    root = configs_dir or CONFIGS_DIR
    profile_path = root / "profiles" / f"{name}.yaml"
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    config = load_base_config(root)
    profile = _read_yaml(profile_path)
    logger.debug("Loaded token profile %r from %s", name, profile_path)
    return _deep_merge(config, profile)


def list_profiles(configs_dir: Optional[Path] = None) -> List[str]:
    """List available profiles.

    Returns
    -------
    List[str]
        Sorted profile names.
    """
    profiles_dir = (configs_dir or CONFIGS_DIR) / "profiles"
    if not profiles_dir.exists():
        return []
    return sorted(f.stem for f in profiles_dir.glob("*.yaml"))


def load_token_settings(
    profile: Optional[str] = None, configs_dir: Optional[Path] = None
) -> TokenSettings:
    """Load typed token settings from base config and an optional profile."""
    if profile is None:
        config = load_base_config(configs_dir)
    else:
        config = load_profile(profile, configs_dir)
    return TokenSettings.from_dict(config)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries.

    Parameters
    ----------
    base : Dict
        Base dictionary.
    override : Dict
        Override dictionary (values take precedence).

    Returns
    -------
    Dict
        Merged dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


__all__ = [
    "TokenSettings",
    "load_base_config",
    "load_profile",
    "list_profiles",
    "load_token_settings",
    "CONFIGS_DIR",
    "PROFILES_DIR",
]
