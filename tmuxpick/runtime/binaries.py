"""Runtime binary resolution policy.

These paths are internal platform policy, not user-configurable settings.
"""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

# Homebrew prefixes are missing from PATH when tmux runs the picker from a
# key binding on macOS (launchd environment).
_MACOS_PREFIXES = (Path("/opt/homebrew/bin"), Path("/usr/local/bin"))

_TOOLS = ("tmux", "fzf", "ps", "pgrep", "zoxide", "ls")


def _is_macos() -> bool:
    return sys.platform == "darwin"


def resolve_binary(tool: str) -> str:
    """Resolve a command-line tool by platform.

    Args:
        tool: One of tmux, fzf, ps, pgrep, zoxide, ls
    """
    key = tool.strip().lower()
    if key not in _TOOLS:
        raise ValueError(f"Unknown tool '{tool}'")
    found = shutil.which(key)
    if found:
        return found
    if _is_macos():
        for prefix in _MACOS_PREFIXES:
            candidate = prefix / key
            if candidate.exists():
                return str(candidate)
    return key


def resolve_tmux_binary() -> str:
    """Resolve tmux binary by platform."""
    return resolve_binary("tmux")
