"""
Shared fixtures for the plugin host tests.
"""

import textwrap
from pathlib import Path

import pytest

from plugins import ModuleRegistry, PluginLoader

SAMPLE_PLUGINS = Path(__file__).resolve().parent.parent / "sample_plugins"


@pytest.fixture
def sample_plugin():
    """Resolve the path of a bundled sample plugin by stem."""
    def _path(stem: str) -> str:
        return str(SAMPLE_PLUGINS / f"{stem}.py")
    return _path


@pytest.fixture
def write_plugin(tmp_path):
    """Write a plugin unit from source into a temporary directory."""
    def _write(name: str, source: str) -> str:
        path = tmp_path / name
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def registry():
    """Fresh module registry."""
    return ModuleRegistry()


@pytest.fixture
def loader(registry):
    """Plugin loader bound to the fresh registry."""
    return PluginLoader(registry=registry)
