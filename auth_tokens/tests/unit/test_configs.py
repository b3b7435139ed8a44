"""Unit tests for YAML configuration loading and logging setup."""

import logging

import pytest

from auth_tokens.configs import (
    TokenSettings,
    list_profiles,
    load_base_config,
    load_profile,
    load_token_settings,
)
from auth_tokens.utils.logging import get_logger, set_log_level


@pytest.fixture
def configs_dir(tmp_path):
    """Temporary config tree with a base file and one profile."""
    (tmp_path / "profiles").mkdir()
    (tmp_path / "base.yaml").write_text(
        "token:\n"
        "  prefix: base\n"
        "  length: 100\n"
        "entropy:\n"
        "  timeout_seconds: null\n"
        "logging:\n"
        "  level: ERROR\n"
    )
    (tmp_path / "profiles" / "short.yaml").write_text(
        "token:\n"
        "  length: 20\n"
        "entropy:\n"
        "  timeout_seconds: 2\n"
    )
    return tmp_path


class TestBundledConfig:
    """Tests against the configuration shipped with the package."""

    def test_base_defaults(self):
        settings = load_token_settings()
        assert settings.prefix == "tok"
        assert settings.length == 255
        assert settings.entropy_timeout is None

    def test_bundled_profiles(self):
        assert {"apikey", "session"} <= set(list_profiles())

    def test_session_profile(self):
        settings = load_token_settings("session")
        assert settings == TokenSettings(
            prefix="session", length=64, entropy_timeout=5.0, log_level="WARNING"
        )

    def test_unknown_profile_raises(self):
        with pytest.raises(FileNotFoundError, match="Profile not found"):
            load_profile("does-not-exist")


class TestConfigLoading:
    """Tests for merging and parsing."""

    def test_profile_deep_merges_over_base(self, configs_dir):
        config = load_profile("short", configs_dir)
        assert config["token"] == {"prefix": "base", "length": 20}
        assert config["entropy"]["timeout_seconds"] == 2
        assert config["logging"]["level"] == "ERROR"

    def test_base_config_missing_is_empty(self, tmp_path):
        assert load_base_config(tmp_path) == {}

    def test_list_profiles_without_dir(self, tmp_path):
        assert list_profiles(tmp_path) == []

    def test_settings_from_profile(self, configs_dir):
        settings = load_token_settings("short", configs_dir)
        assert settings.prefix == "base"
        assert settings.length == 20
        assert settings.entropy_timeout == 2.0
        assert settings.log_level == "ERROR"

    def test_missing_prefix_raises(self):
        with pytest.raises(KeyError, match="token.prefix"):
            TokenSettings.from_dict({"token": {"length": 40}})

    def test_defaults_for_missing_sections(self):
        settings = TokenSettings.from_dict({"token": {"prefix": "abc"}})
        assert settings.length == 255
        assert settings.entropy_timeout is None
        assert settings.log_level == "WARNING"


class TestLogging:
    """Tests for the logger factory."""

    def test_logger_namespace(self):
        assert get_logger("example").name == "auth_tokens.example"
        assert get_logger("auth_tokens.core.token").name == "auth_tokens.core.token"

    def test_single_handler(self):
        logger = get_logger("handlers")
        get_logger("handlers")
        assert len(logger.handlers) == 1

    def test_set_log_level(self):
        logger = get_logger("levels")
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("not-a-level", logger)
        assert logger.level == logging.INFO
        set_log_level("WARNING")
