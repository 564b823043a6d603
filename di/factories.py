"""
Component factories for wiring the plugin host.
"""

import logging
from typing import Any, Optional

from config.settings import Settings, settings as default_settings
from core.configs import BANANAS_KEY, BANANAS_LYRIC, EnvConfig, SingleSlotConfig, StaticConfig
from core.context import Context
from plugins.loader import PluginLoader
from plugins.registry import ModuleRegistry

logger = logging.getLogger(__name__)


class HostFactory:
    """Factory for creating the host's registry, loader, config and context."""

    def __init__(self, settings: Optional[Settings] = None,
                 registry: Optional[ModuleRegistry] = None):
        """
        Initialize host factory.

        Args:
            settings: Settings to read, the global settings when None
            registry: Registry to share, a new one when None
        """
        self.settings = settings if settings is not None else default_settings
        self.registry = registry if registry is not None else ModuleRegistry()

    def create_loader(self) -> PluginLoader:
        """Create a plugin loader bound to the shared registry."""
        return PluginLoader(registry=self.registry)

    def create_config(self, version: Optional[str] = None) -> Any:
        """
        Create the config injected into Module.init.

        Args:
            version: 'v1', 'v2' or 'env', defaults to settings.CONFIG_VERSION

        Returns:
            Config provider
        """
        version = (version or self.settings.CONFIG_VERSION).lower()
        if version == "v1":
            return StaticConfig({BANANAS_KEY: BANANAS_LYRIC})
        if version == "v2":
            return SingleSlotConfig()
        if version == "env":
            return EnvConfig(prefix=self.settings.ENV_PREFIX)
        raise ValueError(f"Unsupported config version: {version}")

    def create_context(self) -> Context:
        """Create the context passed to Module.init, honouring INIT_TIMEOUT."""
        ctx = Context.background()
        if self.settings.INIT_TIMEOUT > 0:
            return ctx.with_timeout(self.settings.INIT_TIMEOUT)
        return ctx
