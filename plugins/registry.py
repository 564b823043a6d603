"""
Module registry mapping module names to constructors.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from core.errors import ContractViolation, ModuleNotRegistered
from .validator import assert_module

logger = logging.getLogger(__name__)

ModuleConstructor = Callable[[], Any]


class ModuleRegistry:
    """Registry of module constructors, keyed by module name.

    A host builds one registry and hands it to the loader (so plugins can
    register themselves from their on-load hook) and to whoever instantiates
    modules. Registering a name that is already present replaces the
    previous constructor: last writer wins.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._constructors: Dict[str, ModuleConstructor] = {}
        self._lock = threading.Lock()

    def register(self, name: str, constructor: ModuleConstructor) -> None:
        """
        Register a module constructor.

        Args:
            name: Module name
            constructor: Zero-argument callable returning a new,
                uninitialized module instance
        """
        if not callable(constructor):
            raise ContractViolation(
                f"{type(constructor).__name__} is not callable", cause=f"invalid constructor for {name}")

        with self._lock:
            replaced = name in self._constructors
            self._constructors[name] = constructor

        if replaced:
            logger.debug(f"Replaced module constructor: {name}")
        else:
            logger.debug(f"Registered module: {name}")

    def register_all(self, table: Mapping[str, ModuleConstructor],
                     source: str = "type table") -> List[str]:
        """
        Register every entry of a validated type table.

        Args:
            table: Module names mapped to constructors
            source: Where the table came from, for the log line

        Returns:
            Names registered, in table order
        """
        names = []
        for name, constructor in table.items():
            self.register(name, constructor)
            names.append(name)
        logger.info(f"Registered {len(names)} module(s) from {source}")
        return names

    def get_constructor(self, name: str) -> Optional[ModuleConstructor]:
        """
        Get the constructor registered for a name.

        Args:
            name: Module name

        Returns:
            Constructor or None
        """
        with self._lock:
            return self._constructors.get(name)

    def instantiate(self, name: str) -> Any:
        """
        Instantiate a new, uninitialized instance of a registered module.

        Args:
            name: Module name

        Returns:
            Module instance

        Raises:
            ModuleNotRegistered: nothing is registered under ``name``
            ContractViolation: the constructor did not produce a module
        """
        constructor = self.get_constructor(name)
        if constructor is None:
            raise ModuleNotRegistered(f"no module registered as {name!r}")

        instance = constructor()
        return assert_module(instance, name)

    def snapshot(self) -> Dict[str, ModuleConstructor]:
        """Copy of the name to constructor map, in registration order."""
        with self._lock:
            return dict(self._constructors)

    def names(self) -> List[str]:
        """
        List registered module names.

        Returns:
            Names in registration order
        """
        with self._lock:
            return list(self._constructors)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._constructors

    def __len__(self) -> int:
        with self._lock:
            return len(self._constructors)
