#!/usr/bin/env python3
"""
Plugin host for the gpd system.
Opens a plugin unit, validates what it exports and drives the modules it provides.

Usage: gpd <plugin-path>
"""

import logging
import sys
from enum import Enum
from typing import Any, List, Optional

from config.settings import settings
from core.context import Context
from core.errors import GPDError, InvalidArgs
from core.lifecycle import ManagedModule
from di.factories import HostFactory
from plugins.validator import assert_command, assert_type_table
from utils.helpers import setup_logging

logger = logging.getLogger(__name__)

COMMAND_SYMBOL = "Command"
TYPES_SYMBOL = "Types"

PLACEHOLDER = (
    "Yes, we have no bananas,",
    "We have no bananas today.",
)


class HostVariant(str, Enum):
    """How the host expects a plugin to hand over its functionality."""
    COMMAND = "command"    # exports Command(dog)
    TYPES = "types"        # exports a Types table the host registers
    REGISTER = "register"  # registers its modules from an on_load hook


class Lucy:
    """A dog, answering to Lucy."""

    def name(self) -> str:
        return "Lucy"


class PluginHost:
    """Opens plugin units and runs them according to a host variant."""

    def __init__(self, factory: Optional[HostFactory] = None):
        """
        Initialize the host.

        Args:
            factory: Component factory, a default one when None
        """
        self.factory = factory if factory is not None else HostFactory()
        self.registry = self.factory.registry
        self.loader = self.factory.create_loader()

    def run(self, plugin_path: str, variant: HostVariant,
            module_name: Optional[str] = None) -> Optional[ManagedModule]:
        """
        Open a plugin and run it.

        Args:
            plugin_path: Path to the plugin unit
            variant: Export convention the plugin follows
            module_name: Module to drive for the types/register variants

        Returns:
            The initialized module, None for the command variant
        """
        variant = HostVariant(variant)
        if variant is HostVariant.COMMAND:
            self.run_command(plugin_path)
            return None
        if variant is HostVariant.TYPES:
            self.register_types(plugin_path)
        else:
            self.loader.open(plugin_path)
        return self.init_module(module_name or self.factory.settings.MODULE_NAME)

    def run_command(self, plugin_path: str) -> None:
        """Look up the plugin's Command and issue it to Lucy."""
        handle = self.loader.open(plugin_path)
        raw = self.loader.lookup(handle, COMMAND_SYMBOL)
        command = assert_command(raw)
        command(Lucy())

    def register_types(self, plugin_path: str) -> List[str]:
        """
        Register every module from the plugin's Types table.

        Args:
            plugin_path: Path to the plugin unit

        Returns:
            Registered module names
        """
        handle = self.loader.open(plugin_path)
        raw = self.loader.lookup(handle, TYPES_SYMBOL)
        table = assert_type_table(raw)
        return self.registry.register_all(table)

    def init_module(self, name: str, config: Any = None,
                    ctx: Optional[Context] = None) -> ManagedModule:
        """
        Instantiate a registered module and initialize it.

        Args:
            name: Registered module name
            config: Config to inject, the configured one when None
            ctx: Context, a fresh one from the factory when None

        Returns:
            The initialized module
        """
        module = ManagedModule(name, self.registry.instantiate(name))
        if config is None:
            config = self.factory.create_config()
        module.initialize(ctx if ctx is not None else self.factory.create_context(), config)
        logger.info(f"Initialized module {name}")
        return module


def main(argv: Optional[List[str]] = None, variant: Optional[str] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Arguments without the program name, sys.argv[1:] when None
        variant: Host variant, settings.HOST_VARIANT when None

    Returns:
        Process exit code
    """
    setup_logging()
    args = sys.argv[1:] if argv is None else argv

    if not args:
        for line in PLACEHOLDER:
            print(line)
        return 0

    try:
        settings.validate()
    except ValueError as e:
        print(f"error: configuration: {e}", file=sys.stderr)
        return 1

    try:
        if len(args) != 1:
            raise InvalidArgs(f"expected a single plugin path, got {len(args)} arguments")
        PluginHost().run(args[0], HostVariant(variant or settings.HOST_VARIANT))
    except GPDError as e:
        print(e.diagnostic(), file=sys.stderr)
        return e.exit_code

    return 0


def dog_main() -> int:
    """Entry point for the host that issues a plugin's Command."""
    return main(variant=HostVariant.COMMAND.value)


def mod_main() -> int:
    """Entry point for the host that registers a plugin's Types table."""
    return main(variant=HostVariant.TYPES.value)


def mod_push_main() -> int:
    """Entry point for the host whose plugins register themselves."""
    return main(variant=HostVariant.REGISTER.value)


if __name__ == "__main__":
    sys.exit(main())
