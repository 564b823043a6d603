"""
Lifecycle glue between instantiated modules and the configs they consume.
"""

import logging
from enum import Enum
from typing import Any, Optional

from core.configs import ReadOnlyView
from core.context import Context
from core.errors import ContractViolation, GPDError, ModuleInitFailed
from interfaces.iconfig import ConfigLevel, config_level, require_level

logger = logging.getLogger(__name__)


class ModuleState(Enum):
    """States of a module instance."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


def required_level(instance: Any) -> ConfigLevel:
    """
    Read the config capability level a module instance declares.

    Args:
        instance: Module instance

    Returns:
        Declared level, ConfigLevel.V1 when the module declares none
    """
    declared = getattr(instance, "config_level", ConfigLevel.V1)
    try:
        return ConfigLevel(declared)
    except ValueError:
        raise ContractViolation(
            f"{type(instance).__name__} declares unknown config level {declared!r}")


class ManagedModule:
    """A module instance together with its lifecycle state."""

    def __init__(self, name: str, instance: Any):
        """
        Wrap a freshly instantiated module.

        Args:
            name: Name the module was registered under
            instance: Uninitialized module instance
        """
        self.name = name
        self.instance = instance
        self.state = ModuleState.UNINITIALIZED
        self.init_count = 0

    @property
    def required_level(self) -> ConfigLevel:
        return required_level(self.instance)

    def initialize(self, ctx: Optional[Context], config: Any) -> None:
        """
        Run the module's ``init`` with the given context and config.

        Each call runs ``init`` again; how often is up to the caller.

        Args:
            ctx: Context, a background context is used when None
            config: Config provider

        Raises:
            UnsupportedConfig: config lacks the module's required capability
            Cancelled: ctx is already done
            ModuleInitFailed: init raised something other than a GPDError
        """
        ctx = ctx if ctx is not None else Context.background()
        require_level(config, self.required_level)
        ctx.check()

        # v1 providers reach init behind a set that raises UnsupportedConfig
        if config_level(config) is ConfigLevel.V1 and not getattr(config, "read_only", False):
            config = ReadOnlyView(config)

        logger.debug(f"Initializing module '{self.name}' (call {self.init_count + 1})")
        try:
            self.instance.init(ctx, config)
        except GPDError:
            raise
        except Exception as e:
            raise ModuleInitFailed(f"{self.name}: {type(e).__name__}: {e}") from e

        self.init_count += 1
        self.state = ModuleState.INITIALIZED

    @property
    def initialized(self) -> bool:
        return self.state is ModuleState.INITIALIZED

    def __repr__(self) -> str:
        return f"ManagedModule(name={self.name!r}, state={self.state.value}, init_count={self.init_count})"
