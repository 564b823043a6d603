"""
Tests for host settings and component factories.
"""

import pytest
from unittest.mock import patch

from config.settings import Settings
from core.configs import BANANAS_LYRIC, EnvConfig, SingleSlotConfig, StaticConfig
from di.factories import HostFactory
from plugins.registry import ModuleRegistry


class TestSettings:
    """Test settings validation."""

    def test_defaults_are_valid(self):
        Settings.validate()

    @pytest.mark.parametrize("attr, value", [
        ("HOST_VARIANT", "dog"),
        ("CONFIG_VERSION", "v3"),
        ("MODULE_NAME", ""),
        ("INIT_TIMEOUT", -1.0),
    ])
    def test_invalid_values(self, attr, value):
        with patch.object(Settings, attr, value):
            with pytest.raises(ValueError, match="Invalid settings"):
                Settings.validate()


class TestHostFactory:
    """Test wiring of host components."""

    def test_loader_shares_registry(self):
        registry = ModuleRegistry()
        factory = HostFactory(registry=registry)

        assert factory.registry is registry
        assert factory.create_loader().registry is registry

    def test_v1_config_carries_lyric(self):
        config = HostFactory().create_config("v1")

        assert isinstance(config, StaticConfig)
        assert config.get(None, "bananas") == BANANAS_LYRIC

    def test_v2_config(self):
        assert isinstance(HostFactory().create_config("v2"), SingleSlotConfig)

    def test_env_config_uses_prefix(self):
        with patch.object(Settings, "ENV_PREFIX", "TEST_"):
            config = HostFactory().create_config("env")

        assert isinstance(config, EnvConfig)
        assert config.prefix == "TEST_"

    def test_unknown_config_version(self):
        with pytest.raises(ValueError):
            HostFactory().create_config("v9")

    def test_context_without_timeout(self):
        with patch.object(Settings, "INIT_TIMEOUT", 0.0):
            assert HostFactory().create_context().deadline is None

    def test_context_with_timeout(self):
        with patch.object(Settings, "INIT_TIMEOUT", 30.0):
            ctx = HostFactory().create_context()

        assert 0 < ctx.remaining() <= 30.0
