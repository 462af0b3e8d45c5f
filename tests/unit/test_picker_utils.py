"""Unit tests for utils, binary resolution and logging setup."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from tmuxpick import logging_config
from tmuxpick.cli import picker
from tmuxpick.config.schema import PickerConfig
from tmuxpick.runtime import binaries
from tmuxpick.runtime.binaries import resolve_binary, resolve_tmux_binary
from tmuxpick.utils import expand_env_vars, session_name_from_directory, session_name_from_query


class TestExpandEnvVars:
    """Tests for expand_env_vars() function."""

    def test_expand_nested_config(self):
        """Test expanding env vars in nested dicts and lists."""
        os.environ["TMUXPICK_TEST_VAR"] = "value"

        result = expand_env_vars({"outer": {"items": ["${TMUXPICK_TEST_VAR}", 3]}})

        assert result == {"outer": {"items": ["value", 3]}}

        # Cleanup
        del os.environ["TMUXPICK_TEST_VAR"]

    def test_expand_nonexistent_env_var(self):
        """Test that nonexistent env var is kept as-is."""
        assert expand_env_vars("${TMUXPICK_NONEXISTENT}") == "${TMUXPICK_NONEXISTENT}"


class TestSessionNames:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("project", "project"),
            ("my project", "my_project"),
            ("api-v2_x", "api-v2_x"),
            ("a.b:c", "a_b_c"),
            ("über", "_ber"),
        ],
    )
    def test_from_query(self, query, expected):
        assert session_name_from_query(query) == expected

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/home/me/src", "src"),
            ("/home/me/site.example.com", "site_example_com"),
            ("/home/me/src/", "src"),
            ("/", "session"),
        ],
    )
    def test_from_directory(self, path, expected):
        assert session_name_from_directory(path) == expected


class TestResolveBinary:
    def test_prefers_path_lookup(self):
        with patch.object(binaries.shutil, "which", return_value="/usr/bin/fzf"):
            assert resolve_binary("fzf") == "/usr/bin/fzf"

    def test_falls_back_to_bare_name(self):
        with (
            patch.object(binaries.shutil, "which", return_value=None),
            patch.object(binaries, "_is_macos", return_value=False),
        ):
            assert resolve_binary("zoxide") == "zoxide"
            assert resolve_tmux_binary() == "tmux"

    def test_macos_homebrew_prefix(self):
        with (
            patch.object(binaries.shutil, "which", return_value=None),
            patch.object(binaries, "_is_macos", return_value=True),
            patch.object(Path, "exists", autospec=True, side_effect=lambda p: str(p) == "/opt/homebrew/bin/fzf"),
        ):
            assert resolve_binary("fzf") == "/opt/homebrew/bin/fzf"

    def test_unknown_tool(self):
        with pytest.raises(ValueError, match="Unknown tool"):
            resolve_binary("rm")


class TestLogging:
    def test_level_resolution(self):
        assert logging_config._resolve_level("debug") == logging.DEBUG
        assert logging_config._resolve_level(" Info ") == logging.INFO
        assert logging_config._resolve_level("bogus") == logging.WARNING

    def test_records_below_level_are_dropped(self, monkeypatch, capsys):
        monkeypatch.setenv(logging_config.LOG_LEVEL_ENV, "WARNING")
        logging_config.setup_logging()
        logger = logging_config.get_logger("tmuxpick.test")

        logger.info("quiet %s", "info")
        logger.warning("loud %s", "warning")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "loud warning" in captured.err
        assert "quiet info" not in captured.err

    def test_override_sets_environment(self, monkeypatch, capsys):
        monkeypatch.setenv(logging_config.LOG_LEVEL_ENV, "ERROR")
        logging_config.setup_logging("debug")
        logging_config.get_logger("tmuxpick.test").debug("detail")

        assert os.environ[logging_config.LOG_LEVEL_ENV] == "debug"
        assert "detail" in capsys.readouterr().err

    def test_module_logger_carries_module_name(self, monkeypatch, capsys):
        monkeypatch.setenv(logging_config.LOG_LEVEL_ENV, "debug")
        logging_config.setup_logging()

        targets = picker.resolve_targets("999\n300\n", {}, "999 1\n300 1", PickerConfig())

        assert targets == {}
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "2 agent process(es) not attached" in captured.err
        assert "tmuxpick.cli.picker" in captured.err
