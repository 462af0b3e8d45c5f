"""Snapshot records for tmux panes, windows and session activity."""

from dataclasses import dataclass
from typing import Optional

# pid -> parent pid, from a single `ps` scan
ProcessAncestry = dict[str, str]
# session name -> pane targets ("session:window.pane") hosting an agent
TargetsBySession = dict[str, list[str]]


@dataclass(frozen=True)
class PaneRecord:
    """One running pane from `tmux list-panes`.

    Index fields are None when tmux emitted text that is not an integer.
    """

    session: str
    window_index: Optional[int]
    pane_index: Optional[int]
    pid: str

    @property
    def target(self) -> str:
        """tmux address of this pane, e.g. ``dev:1.0``."""
        return f"{self.session}:{self.window_index}.{self.pane_index}"


@dataclass(frozen=True)
class WindowRecord:
    """Window metadata from `tmux list-windows`."""

    session: str
    index: Optional[int]
    name: str
    pane_count: Optional[int]


@dataclass(frozen=True)
class SessionActivityEntry:
    """One `tmux list-sessions` row: last activity (epoch seconds) and name.

    timestamp is None when tmux emitted text that is not an integer.
    """

    timestamp: Optional[int]
    session_name: str
