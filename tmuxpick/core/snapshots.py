"""Concurrent snapshot collection.

Each source is sampled by its own subprocess, all started together; the
results are raw text handed to the pure parsers. Processes may start or exit
between samples, so the snapshots are not mutually consistent. Attribution
tolerates that (a vanished pid simply resolves to no pane).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from tmuxpick.config.schema import PickerConfig
from tmuxpick.core import tmux_bridge
from tmuxpick.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListSnapshot:
    """Raw sources for the session list."""

    panes: str
    agent_pids: str
    processes: str
    sessions: str
    zoxide: str
    current_session: str


@dataclass(frozen=True)
class PreviewSnapshot:
    """Raw sources for one session's preview, scoped with ``-t <session>``."""

    session_name: str
    panes: str
    windows: str
    agent_pids: str
    processes: str


async def _empty() -> str:
    return ""


async def collect_list_snapshot(cfg: PickerConfig) -> ListSnapshot:
    timeout = cfg.subprocess_timeout
    panes, agent_pids, processes, sessions, zoxide, current = await asyncio.gather(
        tmux_bridge.list_all_panes(timeout),
        tmux_bridge.find_agent_pids(cfg.agent_process_name, timeout),
        tmux_bridge.list_processes(timeout),
        tmux_bridge.list_sessions(timeout),
        tmux_bridge.query_zoxide(timeout) if cfg.show_zoxide else _empty(),
        tmux_bridge.current_session(),
    )
    logger.debug(
        "List snapshot: %d pane rows, %d agent pids, %d process rows, %d sessions",
        len(panes.splitlines()),
        len(agent_pids.splitlines()),
        len(processes.splitlines()),
        len(sessions.splitlines()),
    )
    return ListSnapshot(
        panes=panes,
        agent_pids=agent_pids,
        processes=processes,
        sessions=sessions,
        zoxide=zoxide,
        current_session=current,
    )


async def collect_preview_snapshot(session_name: str, cfg: PickerConfig) -> PreviewSnapshot:
    timeout = cfg.subprocess_timeout
    panes, windows, agent_pids, processes = await asyncio.gather(
        tmux_bridge.list_panes(session_name, timeout),
        tmux_bridge.list_windows(session_name, timeout),
        tmux_bridge.find_agent_pids(cfg.agent_process_name, timeout),
        tmux_bridge.list_processes(timeout),
    )
    return PreviewSnapshot(
        session_name=session_name,
        panes=panes,
        windows=windows,
        agent_pids=agent_pids,
        processes=processes,
    )
