"""
Plugin loader for opening plugin units from file paths.

A plugin unit is anything the import machinery can execute from a path:
Python source, bytecode, or a compiled extension module. Opening a unit
executes its module body once. If the unit defines an ``on_load`` hook the
loader calls it right after, with the host's module registry. That hook is
plugin code running with full host privileges; the host and its plugins are
expected to come from the same trusted build.
"""

import hashlib
import importlib.machinery
import importlib.util
import logging
import sys
import threading
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional, Union

from core.errors import PluginNotFound, PluginOpenFailed
from .handle import PluginHandle, RawSymbol
from .registry import ModuleRegistry

logger = logging.getLogger(__name__)

ON_LOAD_HOOK = "on_load"


def plugin_suffixes() -> List[str]:
    """File suffixes the loader can open."""
    return (importlib.machinery.SOURCE_SUFFIXES
            + importlib.machinery.BYTECODE_SUFFIXES
            + importlib.machinery.EXTENSION_SUFFIXES)


def file_exists(path: Union[str, Path]) -> bool:
    """
    Check whether a plugin path exists.

    Args:
        path: Path to check

    Returns:
        True if something exists at the path
    """
    return Path(path).exists()


class PluginLoader:
    """Opens plugin units, once per path for the life of the process."""

    def __init__(self, registry: Optional[ModuleRegistry] = None):
        """
        Initialize plugin loader.

        Args:
            registry: Registry passed to plugins' on-load hooks. Without
                one, on-load hooks are not run.
        """
        self.registry = registry
        self._handles: Dict[Path, PluginHandle] = {}
        self._lock = threading.RLock()

    def open(self, path: Union[str, Path]) -> PluginHandle:
        """
        Open a plugin unit, running its initialization the first time.

        Args:
            path: Path to the plugin unit

        Returns:
            Handle for symbol lookup

        Raises:
            PluginNotFound: nothing exists at ``path``
            PluginOpenFailed: the unit exists but could not be loaded
        """
        if not file_exists(path):
            raise PluginNotFound(str(path))

        resolved = Path(path).resolve()
        with self._lock:
            handle = self._handles.get(resolved)
            if handle is not None:
                logger.debug(f"Plugin already open: {resolved}")
                return handle

            module = self._load_module(resolved)
            handle = PluginHandle(resolved, module)
            self._run_on_load_hook(handle)

            self._handles[resolved] = handle

        logger.info(f"Opened plugin {handle.name} from {resolved}")
        return handle

    def lookup(self, handle: PluginHandle, name: str) -> RawSymbol:
        """
        Look up an exported symbol in an opened unit.

        Args:
            handle: Handle returned by ``open``
            name: Symbol name

        Returns:
            The raw symbol, shape not yet validated
        """
        return handle.lookup(name)

    def handles(self) -> List[PluginHandle]:
        """
        List opened plugin units.

        Returns:
            Handles in the order they were opened
        """
        with self._lock:
            return list(self._handles.values())

    @staticmethod
    def _is_extension(path: Path) -> bool:
        return any(str(path).endswith(s) for s in importlib.machinery.EXTENSION_SUFFIXES)

    def _module_name(self, path: Path) -> str:
        # Extension modules must keep the name their init function was built for
        if self._is_extension(path):
            return path.name.split(".", 1)[0]
        digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
        return f"gpd_plugin_{path.stem}_{digest}"

    def _load_module(self, path: Path) -> ModuleType:
        if path.is_dir():
            raise PluginOpenFailed(f"plugin.Open({path}): is a directory")

        name = self._module_name(path)
        if self._is_extension(path) and name in sys.modules:
            raise PluginOpenFailed(f"plugin.Open({path}): module name {name!r} is already imported")
        try:
            spec = importlib.util.spec_from_file_location(name, path)
        except Exception as e:
            raise PluginOpenFailed(f"plugin.Open({path}): {e}") from e
        if spec is None or spec.loader is None:
            raise PluginOpenFailed(
                f"plugin.Open({path}): not a plugin unit (expected one of {', '.join(plugin_suffixes())})")

        try:
            module = importlib.util.module_from_spec(spec)
            sys.modules[name] = module
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(name, None)
            raise PluginOpenFailed(f"plugin.Open({path}): {type(e).__name__}: {e}") from e

        return module

    def _run_on_load_hook(self, handle: PluginHandle) -> None:
        hook = vars(handle.module).get(ON_LOAD_HOOK)
        if hook is None:
            return
        if not callable(hook):
            sys.modules.pop(handle.name, None)
            raise PluginOpenFailed(
                f"plugin.Open({handle.path}): {ON_LOAD_HOOK} is {type(hook).__name__}, not callable")
        if self.registry is None:
            logger.warning(f"Plugin {handle.name} has an {ON_LOAD_HOOK} hook but no registry was given; skipping it")
            return

        logger.info(f"Running {ON_LOAD_HOOK} hook of plugin {handle.name} with host privileges")
        # Registrations only reach the shared registry if the hook completes
        staging = ModuleRegistry()
        try:
            hook(staging)
        except Exception as e:
            sys.modules.pop(handle.name, None)
            raise PluginOpenFailed(f"plugin.Open({handle.path}): {ON_LOAD_HOOK}: {type(e).__name__}: {e}") from e
        self.registry.register_all(staging.snapshot(), source=f"{ON_LOAD_HOOK} hook of {handle.name}")
