"""
Capability handed to ``Command`` symbols exported by plugins.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Named(Protocol):
    """Anything with a name, e.g. (wo)man's best friend."""

    def name(self) -> str:
        """Return the name."""
        ...
