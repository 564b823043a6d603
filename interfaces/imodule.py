"""
Abstract interface for modules registered by plugins.
"""

from abc import ABC, abstractmethod
from typing import Any

from .iconfig import ConfigLevel


class IModule(ABC):
    """Abstract interface implemented by types that register as modular plug-ins.

    Plugins built independently of the host may implement ``init`` without
    subclassing; the host only relies on the method being present.
    """

    # Capability level the module needs from the config passed to ``init``
    config_level: ConfigLevel = ConfigLevel.V1

    @abstractmethod
    def init(self, ctx: Any, config: Any) -> None:
        """
        Initialize the module.

        May be called more than once, e.g. after the configuration changed.

        Args:
            ctx: Cancellation/deadline carrying context
            config: Configuration provider of at least ``config_level``
        """
        pass
