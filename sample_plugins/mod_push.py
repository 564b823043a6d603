"""
Plugin that registers its module from the on-load hook.
"""

from typing import Any

from interfaces import IModule


class Module(IModule):
    """Sings about bananas, no configuration needed."""

    def init(self, ctx: Any, config: Any) -> None:
        print("Yes there were thirty, thousand, pounds...")
        print("Of...bananas.")


def on_load(registry) -> None:
    registry.register("mod_go", Module)
