"""
Tests for opening plugin units and looking up their symbols.
"""

import importlib.machinery
import sys
import types

import pytest
from unittest.mock import patch

from core.errors import PluginNotFound, PluginOpenFailed, SymbolNotFound
from plugins.loader import PluginLoader, file_exists


class TestPluginLoader:
    """Test plugin opening."""

    def test_open_and_lookup(self, loader, write_plugin):
        """Test symbols of an opened unit can be looked up."""
        path = write_plugin("answer.py", """
            ANSWER = 42
        """)

        handle = loader.open(path)
        raw = loader.lookup(handle, "ANSWER")

        assert raw.value == 42
        assert raw.name == "ANSWER"
        assert raw.handle is handle
        assert raw.kind == "int"
        assert "ANSWER" in handle.symbols()

    def test_missing_file_is_not_opened(self, loader, tmp_path):
        """Test a missing path fails before any open attempt."""
        with patch.object(PluginLoader, "_load_module") as mock_load:
            with pytest.raises(PluginNotFound) as exc_info:
                loader.open(str(tmp_path / "nope.py"))

        mock_load.assert_not_called()
        assert "nope.py" in exc_info.value.diagnostic()
        assert exc_info.value.diagnostic().startswith("error: invalid plugin file: ")

    def test_unsupported_format(self, loader, write_plugin):
        """Test a file the import machinery cannot load fails to open."""
        path = write_plugin("plugin.txt", "not a plugin")

        with pytest.raises(PluginOpenFailed, match="not a plugin unit"):
            loader.open(path)

    def test_directory_fails_to_open(self, loader, tmp_path):
        """Test directories are not plugin units."""
        with pytest.raises(PluginOpenFailed, match="directory"):
            loader.open(str(tmp_path))

    def test_broken_unit_fails_to_open(self, loader, write_plugin):
        """Test an exception in the unit's body is reported as an open failure."""
        path = write_plugin("broken.py", """
            raise RuntimeError("built for another host")
        """)

        with pytest.raises(PluginOpenFailed, match="built for another host"):
            loader.open(path)

    def test_syntax_error_fails_to_open(self, loader, write_plugin):
        """Test a unit that does not compile is reported as an open failure."""
        path = write_plugin("garbled.py", "def (:\n")

        with pytest.raises(PluginOpenFailed, match="SyntaxError"):
            loader.open(path)

    def test_lookup_missing_symbol(self, loader, write_plugin):
        """Test looking up an absent export."""
        handle = loader.open(write_plugin("empty.py", "X = 1\n"))

        with pytest.raises(SymbolNotFound) as exc_info:
            loader.lookup(handle, "Command")

        assert exc_info.value.cause == "failed to lookup Command"

    def test_initialization_runs_once(self, loader, write_plugin, tmp_path):
        """Test reopening a unit returns the same handle without re-running it."""
        counter = tmp_path / "count.txt"
        path = write_plugin("counted.py", f"""
            from pathlib import Path
            p = Path({str(counter)!r})
            p.write_text(p.read_text() + "x" if p.exists() else "x")
        """)

        first = loader.open(path)
        second = loader.open(path)

        assert first is second
        assert counter.read_text() == "x"
        assert loader.handles() == [first]

    def test_lookup_has_no_side_effects(self, loader, write_plugin, registry):
        """Test lookup does not run the on-load hook again."""
        path = write_plugin("hooked.py", """
            calls = []

            def on_load(registry):
                calls.append(registry)
        """)

        handle = loader.open(path)
        loader.lookup(handle, "calls")
        loader.lookup(handle, "on_load")

        assert handle.module.calls == [registry]

    def test_on_load_hook_registers_modules(self, loader, registry, sample_plugin):
        """Test the push strategy populates the registry while opening."""
        loader.open(sample_plugin("mod_push"))

        assert registry.names() == ["mod_go"]

    def test_on_load_hook_failure(self, loader, write_plugin):
        """Test an exception in the on-load hook is reported as an open failure."""
        path = write_plugin("bad_hook.py", """
            def on_load(registry):
                raise ValueError("boom")
        """)

        with pytest.raises(PluginOpenFailed, match="on_load"):
            loader.open(path)

    def test_on_load_hook_failure_registers_nothing(self, loader, registry, write_plugin):
        """Test registrations made before the hook failed do not reach the registry."""
        path = write_plugin("half_hook.py", """
            class Module:
                def init(self, ctx, config):
                    pass

            def on_load(registry):
                registry.register("mod_go", Module)
                raise RuntimeError("halfway")
        """)

        with pytest.raises(PluginOpenFailed, match="halfway"):
            loader.open(path)

        assert "mod_go" not in registry
        assert len(registry) == 0
        assert loader.handles() == []

    def test_on_load_hook_keeps_existing_registrations(self, loader, registry, sample_plugin):
        """Test a hook's registrations are merged into what the registry already holds."""
        registry.register("mod_other", object)

        loader.open(sample_plugin("mod_push"))

        assert registry.names() == ["mod_other", "mod_go"]

    def test_on_load_hook_must_be_callable(self, loader, write_plugin):
        """Test a non-callable on_load export fails the open like any other load error."""
        path = write_plugin("odd_hook.py", "on_load = 3\n")

        with pytest.raises(PluginOpenFailed, match="on_load is int, not callable"):
            loader.open(path)

        assert loader.handles() == []

    def test_extension_name_already_imported(self, loader, tmp_path, monkeypatch):
        """Test an extension unit never replaces a module that is already imported."""
        existing = types.ModuleType("gpd_taken")
        monkeypatch.setitem(sys.modules, "gpd_taken", existing)
        path = tmp_path / f"gpd_taken{importlib.machinery.EXTENSION_SUFFIXES[0]}"
        path.write_bytes(b"")

        with pytest.raises(PluginOpenFailed, match="already imported"):
            loader.open(path)

        assert sys.modules["gpd_taken"] is existing

    def test_on_load_hook_skipped_without_registry(self, write_plugin):
        """Test a loader without a registry does not run on-load hooks."""
        path = write_plugin("hooked.py", """
            calls = []

            def on_load(registry):
                calls.append(registry)
        """)

        handle = PluginLoader().open(path)

        assert handle.module.calls == []

    def test_file_exists(self, tmp_path):
        """Test the existence check."""
        target = tmp_path / "plugin.py"
        assert file_exists(target) is False
        target.write_text("")
        assert file_exists(str(target)) is True
