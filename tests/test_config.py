"""
Tests for configuration loading and validation.
"""
import os
from unittest.mock import patch

import pytest
from breakdown_resolver.config import ResolverConfig
from breakdown_resolver.config_loader import load_config_from_env
from breakdown_resolver.config_validator import (
    get_optional_env,
    parse_bool,
    parse_int,
    parse_share,
    validate_share,
)
from breakdown_resolver.exceptions import ConfigurationError, ResolverError


def load_with(env):
    with patch.dict(os.environ, env, clear=True), \
            patch("breakdown_resolver.config_loader.load_dotenv"):
        return load_config_from_env()


class TestResolverConfig:
    """Tests for ResolverConfig defaults."""

    def test_defaults(self):
        """Test the named tuning constants."""
        config = ResolverConfig()

        assert config.min_owner_cooccurrence == 2
        assert config.min_owner_share == 0.34
        assert config.strict_family_tables is True
        assert config.title_case_categories == ("props", "vehicles", "wardrobe")
        assert config.fanout_batch_size == 5
        assert config.id_strategy == "uuid"


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env."""

    def test_empty_env_gives_defaults(self):
        """Test that no variables yields the default config."""
        assert load_with({}) == ResolverConfig()

    def test_reads_overrides(self):
        """Test that every variable is read."""
        config = load_with({
            "RESOLVER_MIN_OWNER_COOCCURRENCE": "3",
            "RESOLVER_MIN_OWNER_SHARE": "0.5",
            "RESOLVER_STRICT_FAMILY_TABLES": "false",
            "RESOLVER_TITLE_CASE_CATEGORIES": "Props, wardrobe",
            "RESOLVER_FANOUT_BATCH_SIZE": "10",
            "RESOLVER_ID_STRATEGY": "Sequential",
        })

        assert config.min_owner_cooccurrence == 3
        assert config.min_owner_share == 0.5
        assert config.strict_family_tables is False
        assert config.title_case_categories == ("props", "wardrobe")
        assert config.fanout_batch_size == 10
        assert config.id_strategy == "sequential"

    @pytest.mark.parametrize(
        "env",
        [
            {"RESOLVER_MIN_OWNER_COOCCURRENCE": "0"},
            {"RESOLVER_MIN_OWNER_COOCCURRENCE": "two"},
            {"RESOLVER_MIN_OWNER_SHARE": "1.5"},
            {"RESOLVER_MIN_OWNER_SHARE": "0"},
            {"RESOLVER_STRICT_FAMILY_TABLES": "maybe"},
            {"RESOLVER_FANOUT_BATCH_SIZE": "-1"},
            {"RESOLVER_ID_STRATEGY": "random"},
        ],
    )
    def test_invalid_values_raise(self, env):
        """Test that malformed or out-of-range values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            load_with(env)

    def test_loads_dotenv(self):
        """Test that a local .env file is loaded."""
        with patch.dict(os.environ, {}, clear=True), \
                patch("breakdown_resolver.config_loader.load_dotenv") as mock_load:
            load_config_from_env()

        mock_load.assert_called_once()


class TestValidators:
    """Tests for config_validator helpers."""

    def test_placeholder_ignored(self):
        """Test that placeholder values fall back to the default with a warning."""
        with patch.dict(os.environ, {"RESOLVER_ID_STRATEGY": "your_strategy_here"}):
            with pytest.warns(UserWarning):
                assert get_optional_env("RESOLVER_ID_STRATEGY", default="uuid") == "uuid"

    def test_parse_bool(self):
        """Test boolean parsing."""
        assert parse_bool("KEY", "YES") is True
        assert parse_bool("KEY", "off") is False
        assert parse_bool("KEY", None) is False

    def test_parse_int_minimum(self):
        """Test the lower bound on integers."""
        assert parse_int("KEY", "0", minimum=0) == 0
        with pytest.raises(ConfigurationError):
            parse_int("KEY", "0")

    def test_share_bounds(self):
        """Test that a share must lie in (0, 1]."""
        assert validate_share("KEY", 1.0) == 1.0
        assert parse_share("KEY", "0.34") == 0.34
        with pytest.raises(ConfigurationError):
            validate_share("KEY", 0.0)

    def test_error_hierarchy(self):
        """Test that configuration errors are resolver errors."""
        assert issubclass(ConfigurationError, ResolverError)
