"""Tests for environment settings and file selection."""

import logging
import os
from pathlib import Path

import pytest

from gred.gred_exceptions import ConfigError
from gred.gred_selector import FileSelector, select_paths
from gred.gred_settings import GredSettings, extension_globs


class TestExtensionGlobs:
    """Test GREDX conversion."""

    @pytest.mark.parametrize("dotted,expected", [
        (".", ["*"]),
        (" . ", ["*"]),
        (".py", ["*.py"]),
        (".foo.bar", ["*.foo", "*.bar"]),
        (".go..md", ["*.go", "*.md"]),
        ("py", None),
        ("..", None),
    ])
    def test_globs(self, dotted, expected):
        """Test dotted lists and invalid values."""
        assert extension_globs(dotted) == expected


class TestGredSettings:
    """Test reading settings from the environment."""

    def test_defaults(self):
        """Test an environment without gred variables."""
        settings = GredSettings.from_environ({})
        assert settings.target == ""
        assert settings.extensions == ""
        assert settings.log_file == ""
        assert settings.has_selection() is False

    def test_values(self):
        """Test that every variable is read."""
        settings = GredSettings.from_environ({
            "GRED": "*.txt",
            "GREDX": ".py",
            "GRED_LOG": "/tmp/gred.log",
            "GRED_LOG_LEVEL": "warning",
        })
        assert settings.target == "*.txt"
        assert settings.extensions == ".py"
        assert settings.log_file == "/tmp/gred.log"
        assert settings.log_level == logging.WARNING
        assert settings.has_selection() is True

    def test_invalid_extensions(self):
        """Test that a GREDX value without a leading dot is rejected."""
        with pytest.raises(ConfigError):
            GredSettings.from_environ({"GREDX": "py"})

    def test_invalid_log_level(self):
        """Test that an unknown log level is rejected."""
        with pytest.raises(ConfigError):
            GredSettings.from_environ({"GRED_LOG_LEVEL": "loud"})


class TestFileSelector:
    """Test directory walking."""

    @pytest.fixture
    def tree(self, tmp_path, monkeypatch):
        """Create a small tree and make it the working directory."""
        for name in ["a.py", "b.txt", "sub/c.py", "sub/deeper/d.py", ".hidden/e.py", "sub/.f.py"]:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("content\n")

        monkeypatch.chdir(tmp_path)
        return tmp_path

    def test_walk_breadth_first(self, tree):
        """Test walk order and hidden directory skipping."""
        paths = list(FileSelector('.', ['*.py']).walk())
        assert paths == [
            'a.py',
            os.path.join('sub', '.f.py'),
            os.path.join('sub', 'c.py'),
            os.path.join('sub', 'deeper', 'd.py'),
        ]

    def test_multiple_globs_yield_once(self, tree):
        """Test that a file matching two globs is selected once."""
        paths = list(FileSelector('.', ['*.py', 'a.*']).walk())
        assert paths.count('a.py') == 1

    def test_select_explicit_file(self, tree):
        """Test that GRED naming a file selects just that file."""
        assert select_paths(GredSettings(target='sub/c.py')) == ['sub/c.py']

    def test_select_glob(self, tree):
        """Test that GRED as a glob walks from the root."""
        assert select_paths(GredSettings(target='*.txt')) == ['b.txt']

    def test_select_directory(self, tree):
        """Test that GRED naming a directory selects every file in it."""
        paths = select_paths(GredSettings(target='sub'))
        assert os.path.join('sub', 'c.py') in paths
        assert os.path.join('sub', 'deeper', 'd.py') in paths

    def test_select_extensions(self, tree):
        """Test GREDX selection."""
        paths = select_paths(GredSettings(extensions='.txt'))
        assert paths == ['b.txt']

    def test_select_nothing_configured(self, tree):
        """Test that a selection is required."""
        with pytest.raises(ConfigError):
            select_paths(GredSettings())

    def test_unreadable_root_is_skipped(self, tmp_path):
        """Test that a missing directory yields nothing."""
        assert list(FileSelector(str(tmp_path / "missing"), ['*']).walk()) == []

    def test_selected_paths_exist(self, tree):
        """Test that selected paths can be opened as given."""
        for path in select_paths(GredSettings(extensions='.')):
            assert Path(path).is_file()
