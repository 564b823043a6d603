"""
Interfaces shared by the host and the plugins it loads.
Provides the module, config and command capability contracts.
"""

from .iconfig import (
    ConfigLevel, IConfigV1, IConfigV2,
    config_level, require_level, require_v1, require_v2
)
from .imodule import IModule
from .inamed import Named

__all__ = [
    'ConfigLevel',
    'IConfigV1',
    'IConfigV2',
    'config_level',
    'require_level',
    'require_v1',
    'require_v2',
    'IModule',
    'Named'
]
