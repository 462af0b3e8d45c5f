"""Utility functions for tmuxpick."""

import os
import re
from typing import Any

_ENV_REF = re.compile(r"\$\{([^}]+)\}")
_SESSION_NAME_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")


def _env_value(match: re.Match[str]) -> str:
    return os.environ.get(match.group(1), match.group(0))


def expand_env_vars(value: Any) -> Any:
    """Substitute ``${NAME}`` references in every string of a YAML document.

    Mappings and lists are walked; other scalars pass through. An unset
    variable leaves its reference in place.
    """
    if isinstance(value, str):
        return _ENV_REF.sub(_env_value, value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def session_name_from_query(query: str) -> str:
    """Turn a typed fzf query into a tmux-safe session name."""
    return _SESSION_NAME_UNSAFE.sub("_", query)


def session_name_from_directory(path: str) -> str:
    """Session name for a directory: its basename with dots replaced.

    tmux treats ``.`` as the window/pane separator in targets.
    """
    name = path.rstrip("/").rsplit("/", 1)[-1].replace(".", "_")
    return name or "session"
