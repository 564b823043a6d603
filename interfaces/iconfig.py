"""
Configuration provider interfaces, in two generations.

v1 is read-only. v2 adds ``set`` and is a strict capability superset of v1,
so any v2 provider is usable wherever v1 is expected. Whether a value
satisfies a level is decided by a runtime capability check, not by
inheritance.
"""

from enum import IntEnum
from typing import Any, Optional, Protocol, runtime_checkable

from core.errors import UnsupportedConfig


class ConfigLevel(IntEnum):
    """Capability level of a configuration provider."""
    V1 = 1
    V2 = 2


@runtime_checkable
class IConfigV1(Protocol):
    """Read-only configuration provider."""

    def get(self, ctx: Any, key: str) -> Optional[Any]:
        """
        Return the value for the specified key.

        Args:
            ctx: Request context
            key: Configuration key

        Returns:
            The value, or None when the key has no value
        """
        ...


@runtime_checkable
class IConfigV2(Protocol):
    """Read/write configuration provider."""

    def get(self, ctx: Any, key: str) -> Optional[Any]:
        ...

    def set(self, ctx: Any, key: str, value: Any) -> None:
        """
        Store a value for the specified key.

        Args:
            ctx: Request context
            key: Configuration key
            value: Value to store
        """
        ...


def _has_method(obj: Any, name: str) -> bool:
    return callable(getattr(obj, name, None))


def config_level(config: Any) -> Optional[ConfigLevel]:
    """
    Determine the highest capability level a config value satisfies.

    Args:
        config: Candidate configuration provider

    Returns:
        ConfigLevel.V2, ConfigLevel.V1, or None when it is not a config at all
    """
    if config is None or not _has_method(config, "get"):
        return None
    # v1 providers may define a set that only raises UnsupportedConfig
    if _has_method(config, "set") and not getattr(config, "read_only", False):
        return ConfigLevel.V2
    return ConfigLevel.V1


def require_level(config: Any, level: ConfigLevel) -> Any:
    """Return ``config`` if it satisfies ``level``, else raise UnsupportedConfig."""
    actual = config_level(config)
    if actual is None:
        raise UnsupportedConfig(f"{type(config).__name__} is not a config provider")
    if actual < level:
        raise UnsupportedConfig(
            f"{type(config).__name__} provides {actual.name} but {level.name} is required")
    return config


def require_v1(config: Any) -> IConfigV1:
    return require_level(config, ConfigLevel.V1)


def require_v2(config: Any) -> IConfigV2:
    return require_level(config, ConfigLevel.V2)
