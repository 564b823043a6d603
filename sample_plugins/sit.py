"""
Plugin whose Command expects its own Dog class rather than the capability
the host hands out, so the host refuses it.
"""


class Dog:
    """A concrete dog type only this plugin knows about."""

    def name(self) -> str:
        return "Rex"

    def sit(self) -> str:
        return f"{self.name()} sits"


def Command(d: Dog) -> None:
    """Make a dog sit."""
    print(d.sit())
