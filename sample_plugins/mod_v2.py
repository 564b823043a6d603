"""
Plugin with a module that writes its configuration back, so it needs a
read/write config.
"""

from typing import Any

from interfaces import ConfigLevel, IModule


class Module(IModule):
    """Prints the current lyric, then replaces it."""

    config_level = ConfigLevel.V2

    def init(self, ctx: Any, config: Any) -> None:
        print(config.get(ctx, "bananas"))
        config.set(ctx, "bananas", "We have no bananas today.")


Types = {
    "mod_go": Module,
}
