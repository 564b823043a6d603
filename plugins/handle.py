"""
Handles to opened plugin units and the raw symbols looked up in them.
"""

import inspect
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, List

from core.errors import SymbolNotFound


@dataclass(frozen=True)
class RawSymbol:
    """An exported value of not yet validated shape."""
    name: str
    value: Any
    handle: "PluginHandle" = field(repr=False)

    @property
    def kind(self) -> str:
        """Describe the runtime shape of the value for diagnostics."""
        value = self.value
        if inspect.isroutine(value):
            try:
                return f"function{inspect.signature(value)}"
            except (TypeError, ValueError):
                return "function(...)"
        return type(value).__name__


class PluginHandle:
    """An opened plugin unit. Lives for the rest of the process."""

    def __init__(self, path: Path, module: ModuleType):
        self._path = path
        self._module = module

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return self._module.__name__

    @property
    def module(self) -> ModuleType:
        return self._module

    def symbols(self) -> List[str]:
        """
        List the public names the unit exports.

        Returns:
            Sorted exported names
        """
        exported = getattr(self._module, "__all__", None)
        if exported is not None:
            return sorted(exported)
        return sorted(n for n in vars(self._module) if not n.startswith("_"))

    def lookup(self, name: str) -> RawSymbol:
        """
        Look up an exported symbol by name.

        Args:
            name: Symbol name

        Returns:
            The raw symbol

        Raises:
            SymbolNotFound: the unit does not export ``name``
        """
        try:
            value = vars(self._module)[name]
        except KeyError:
            raise SymbolNotFound(
                f"plugin: symbol {name} not found in plugin {self._path}",
                cause=f"failed to lookup {name}",
            ) from None
        return RawSymbol(name=name, value=value, handle=self)

    def __repr__(self) -> str:
        return f"PluginHandle(name={self.name!r}, path='{self._path}')"
