"""
Configuration providers the host can inject into Module.init.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from core.errors import UnsupportedConfig

logger = logging.getLogger(__name__)

BANANAS_KEY = "bananas"
BANANAS_DEFAULT = "Yes, we have no bananas today."
BANANAS_LYRIC = "Yes there were thirty, thousand, pounds...\nOf...bananas."

# Built-in defaults for recognized keys
DEFAULTS: Dict[str, Any] = {
    BANANAS_KEY: BANANAS_DEFAULT,
}


class ReadOnlyConfig:
    """Base for v1 configuration providers.

    A v1 provider only reads. Its ``set`` exists so that a module writing to
    it fails with UnsupportedConfig instead of an AttributeError; capability
    checks treat it as absent.
    """

    read_only = True

    def get(self, ctx: Any, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, ctx: Any, key: str, value: Any) -> None:
        raise UnsupportedConfig(f"{type(self).__name__} is read-only (V1), cannot set {key!r}")


class ReadOnlyView(ReadOnlyConfig):
    """Wraps any v1 provider so that writes to it raise UnsupportedConfig."""

    def __init__(self, config: Any):
        self._config = config

    def get(self, ctx: Any, key: str) -> Optional[Any]:
        return self._config.get(ctx, key)

    def set(self, ctx: Any, key: str, value: Any) -> None:
        raise UnsupportedConfig(f"{type(self._config).__name__} is read-only (V1), cannot set {key!r}")

    def __repr__(self) -> str:
        return f"ReadOnlyView({self._config!r})"


class StaticConfig(ReadOnlyConfig):
    """Read-only (v1) configuration backed by a fixed mapping."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get(self, ctx: Any, key: str) -> Optional[Any]:
        return self._values.get(key)

    def __repr__(self) -> str:
        return f"StaticConfig(keys={sorted(self._values)})"


class EnvConfig(ReadOnlyConfig):
    """Read-only (v1) configuration read from environment variables.

    The key ``bananas`` with prefix ``GPD_CFG_`` maps to ``GPD_CFG_BANANAS``.
    Variables from a ``.env`` file are visible once settings were imported.
    """

    def __init__(self, prefix: str = "GPD_CFG_", environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the environment config.

        Args:
            prefix: Prefix prepended to every upper-cased key
            environ: Mapping to read from, defaults to ``os.environ``
        """
        self.prefix = prefix
        self._environ = environ if environ is not None else os.environ

    def env_name(self, key: str) -> str:
        return f"{self.prefix}{key.upper()}"

    def get(self, ctx: Any, key: str) -> Optional[str]:
        return self._environ.get(self.env_name(key))


class SingleSlotConfig:
    """Reference read/write (v2) configuration.

    Before any ``set``, ``get`` returns the built-in default for recognized
    keys and None otherwise. ``set`` fills a single slot: afterwards ``get``
    returns that value for every key until the next ``set``.
    """

    _UNSET = object()

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None):
        self._defaults = dict(DEFAULTS if defaults is None else defaults)
        self._slot: Any = self._UNSET

    def get(self, ctx: Any, key: str) -> Optional[Any]:
        if self._slot is not self._UNSET:
            return self._slot
        return self._defaults.get(key)

    def set(self, ctx: Any, key: str, value: Any) -> None:
        logger.debug(f"Config slot set via key '{key}'")
        self._slot = value

    @property
    def is_set(self) -> bool:
        return self._slot is not self._UNSET
