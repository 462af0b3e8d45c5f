"""Runtime-only policy modules (not user-configurable)."""

from tmuxpick.runtime.binaries import resolve_binary, resolve_tmux_binary

__all__ = ["resolve_tmux_binary", "resolve_binary"]
