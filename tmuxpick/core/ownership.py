"""Attribute agent processes to the tmux panes that host them.

A pane's ``pane_pid`` is the shell tmux spawned for it; an agent started from
that shell (directly, or through a wrapper such as ``npx`` or ``direnv exec``)
has the pane pid somewhere above it in its ancestry. Walking a few parent hops
from each agent pid and checking every ancestor against the pane index gives
the owning pane without scanning the whole process table.

Everything here is pure: no subprocesses, no logging. The shell reports
unattributed agents (see tmuxpick.cli.picker).
"""

from __future__ import annotations

from typing import Iterable

from tmuxpick.constants import INIT_PID, MAX_PARENT_DEPTH
from tmuxpick.core.models import PaneRecord, ProcessAncestry, TargetsBySession


def _is_pid(text: str) -> bool:
    return bool(text) and text.isascii() and text.isdigit()


def build_pane_by_pid(panes: Iterable[PaneRecord]) -> dict[str, PaneRecord]:
    """Index panes by pane pid. A repeated pid keeps the last pane."""
    pane_by_pid: dict[str, PaneRecord] = {}
    for pane in panes:
        pane_by_pid[pane.pid] = pane
    return pane_by_pid


def find_owning_pane(
    agent_pid: str,
    pane_by_pid: dict[str, PaneRecord],
    pid_to_parent: ProcessAncestry,
    max_depth: int = MAX_PARENT_DEPTH,
) -> PaneRecord | None:
    """Return the nearest pane ancestor of ``agent_pid`` within ``max_depth`` hops.

    The walk stops at the first missing parent or at init (pid 1); such an
    agent is orphaned and None is returned.
    """
    if not _is_pid(agent_pid):
        return None

    current = agent_pid
    for _ in range(max_depth):
        current = pid_to_parent.get(current, "")
        if not current or current == INIT_PID:
            return None
        pane = pane_by_pid.get(current)
        if pane is not None:
            return pane
    return None


def find_claude_pane_targets(
    agent_pids: Iterable[str],
    pane_by_pid: dict[str, PaneRecord],
    pid_to_parent: ProcessAncestry,
    max_depth: int = MAX_PARENT_DEPTH,
) -> TargetsBySession:
    """Map session name -> pane targets (``"session:window.pane"``) running an agent.

    Targets are appended in ``agent_pids`` order. Two agents under the same pane
    produce two identical entries; callers count them as two agents.

    Args:
        agent_pids: Raw pid strings from ``pgrep``; blanks and non-numeric
            entries are ignored.
        pane_by_pid: Pane index from :func:`build_pane_by_pid`.
        pid_to_parent: Process ancestry from ``parse_process_tree``.
        max_depth: Maximum number of parent hops per agent.
    """
    targets: TargetsBySession = {}
    for agent_pid in agent_pids:
        pane = find_owning_pane(agent_pid, pane_by_pid, pid_to_parent, max_depth)
        if pane is not None:
            targets.setdefault(pane.session, []).append(pane.target)
    return targets


def count_agents(targets: TargetsBySession, session: str) -> int:
    """Number of agents attributed to ``session``; zero when it has none."""
    return len(targets.get(session, []))


def count_attributed(targets: TargetsBySession) -> int:
    """Total agents attributed across all sessions."""
    return sum(len(session_targets) for session_targets in targets.values())


def agent_window_indices(targets: Iterable[str]) -> set[int]:
    """Window indices named by pane targets (``"dev:2.1"`` -> 2)."""
    indices: set[int] = set()
    for target in targets:
        _, _, address = target.rpartition(":")
        window, _, _ = address.partition(".")
        if window.isdigit():
            indices.add(int(window))
    return indices
