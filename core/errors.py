"""
Error types raised at the host/plugin boundary.

Every failure carries a short ``cause`` label and a ``detail`` string so the
host can report it uniformly as ``error: <cause>: <detail>``.
"""

from typing import Optional


class GPDError(Exception):
    """Base error for the plugin host."""

    cause: str = "error"
    exit_code: int = 1

    def __init__(self, detail: str, cause: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if cause is not None:
            self.cause = cause

    def diagnostic(self) -> str:
        """Format the error the way the host writes it to stderr."""
        return f"error: {self.cause}: {self.detail}"


class InvalidArgs(GPDError):
    """Raised when the host is invoked with the wrong number of arguments."""

    cause = "invalid args"


class PluginNotFound(GPDError):
    """Raised when the plugin path does not exist."""

    cause = "invalid plugin file"


class PluginOpenFailed(GPDError):
    """Raised when a plugin unit exists but cannot be loaded."""

    cause = "failed to load plugin"


class SymbolNotFound(GPDError):
    """Raised when a plugin unit does not export the requested symbol."""

    cause = "failed to lookup symbol"


class ContractViolation(GPDError):
    """Raised when a symbol's runtime shape does not match the expected contract."""

    cause = "contract violation"


class NilTable(GPDError):
    """Raised when a type table symbol has the right name but holds nothing."""

    cause = "nil type table"


class ModuleNotRegistered(GPDError):
    """Raised when instantiating a module name nobody registered."""

    cause = "module not registered"


class UnsupportedConfig(GPDError):
    """Raised when a config lacks the capability level a module requires."""

    cause = "unsupported config"


class InvalidConfig(GPDError):
    """Raised by a module when the configuration values it read are unusable."""

    cause = "invalid config"


class Cancelled(GPDError):
    """Raised when a context was cancelled or its deadline passed."""

    cause = "cancelled"


class ModuleInitFailed(GPDError):
    """Raised when a module's init fails with an error of its own."""

    cause = "module init failed"
