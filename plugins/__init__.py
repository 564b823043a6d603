"""
Plugin system for loading plugin units and registering the modules they provide.
"""

from .handle import PluginHandle, RawSymbol
from .loader import ON_LOAD_HOOK, PluginLoader, file_exists
from .registry import ModuleRegistry
from .validator import assert_command, assert_module, assert_type_table

__all__ = [
    'PluginHandle',
    'RawSymbol',
    'ON_LOAD_HOOK',
    'PluginLoader',
    'file_exists',
    'ModuleRegistry',
    'assert_command',
    'assert_module',
    'assert_type_table'
]
