"""Picker configuration.

Loaded once per invocation by the CLI and passed down explicitly:

    from tmuxpick.config import load
    cfg = load()

The file location is `TMUXPICK_CONFIG_PATH`, or `~/.tmuxpick/tmuxpick.yml`.
A missing file means defaults.
"""

import os
from pathlib import Path
from typing import Optional

from tmuxpick.config.loader import load_picker_config
from tmuxpick.config.schema import PickerConfig, ThemeConfig

CONFIG_PATH_ENV = "TMUXPICK_CONFIG_PATH"
DEFAULT_CONFIG_PATH = Path("~/.tmuxpick/tmuxpick.yml")


def config_path() -> Path:
    env_path = os.getenv(CONFIG_PATH_ENV)
    return Path(env_path).expanduser() if env_path else DEFAULT_CONFIG_PATH.expanduser()


def load(path: Optional[Path] = None) -> PickerConfig:
    """Load picker configuration from `path` or the default location."""
    return load_picker_config(path if path is not None else config_path())


__all__ = ["PickerConfig", "ThemeConfig", "config_path", "load"]
