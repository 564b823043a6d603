"""
Plugin exporting a Types table the host registers in bulk.
"""

from typing import Any

from core.errors import InvalidConfig


class Module:
    """Sings about bananas using the configured lyric."""

    def init(self, ctx: Any, config: Any) -> None:
        lyric = config.get(ctx, "bananas")
        if lyric is None:
            raise InvalidConfig("bananas has no value")
        print(lyric)


Types = {
    "mod_go": Module,
}
