"""
Factories for wiring the plugin host's components.
"""

from .factories import HostFactory

__all__ = ['HostFactory']
