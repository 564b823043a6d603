"""
Plugin exporting a Command that prints a dog's name to stdout.
"""

from typing import Protocol


class Dog(Protocol):
    """(Wo)man's best friend."""

    def name(self) -> str:
        """Return the name of the dog."""
        ...


def Command(d: Dog) -> None:
    """Print a dog's name to stdout."""
    print(d.name())
