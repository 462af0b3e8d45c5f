"""Parsers for the raw tmux and ps snapshots.

Every parser takes the full stdout of one command and silently drops lines it
cannot use. None of them raise: an empty or garbled snapshot yields an empty
collection.

Formats (as requested from tmux with ``-F``):

- panes:    ``#{session_name}:#{window_index}:#{pane_index}:#{pane_pid}``
- windows:  ``#{session_name}:#{window_index}:#{window_name}:#{window_panes}``
- sessions: ``#{session_activity}:#{session_name}``
- ps:       ``ps -A -o pid=,ppid=``
"""

from __future__ import annotations

import re
from typing import Optional

from tmuxpick.core.models import PaneRecord, ProcessAncestry, SessionActivityEntry, WindowRecord

_ANSI_SGR = re.compile(r"\x1b\[[0-9;]*m")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _lines(raw: str) -> list[str]:
    return [line for line in raw.split("\n") if line]


def parse_int(text: str) -> Optional[int]:
    """Parse the leading integer of ``text``; None when there is none.

    Trailing garbage is ignored ("3x" -> 3).
    """
    match = _LEADING_INT.match(text)
    if not match:
        return None
    return int(match.group(1))


def strip_ansi(text: str) -> str:
    """Remove SGR color sequences (``ESC[...m``) from picker text."""
    return _ANSI_SGR.sub("", text)


def clean_session_name(text: str, glyph: str) -> str:
    """Drop the trailing agent indicators from a session line.

    ``"dev 󰚩 󰚩"`` -> ``"dev"``. Text without indicators is returned unchanged.
    """
    pattern = re.compile(rf" {re.escape(glyph)}( {re.escape(glyph)})*$")
    return pattern.sub("", text)


def parse_pane_data(raw: str) -> list[PaneRecord]:
    """Parse ``session:window:pane:pid`` lines; lines with < 4 fields are dropped."""
    panes: list[PaneRecord] = []
    for line in _lines(raw):
        parts = line.split(":")
        if len(parts) < 4:
            continue
        panes.append(
            PaneRecord(
                session=parts[0],
                window_index=parse_int(parts[1]),
                pane_index=parse_int(parts[2]),
                pid=parts[3],
            )
        )
    return panes


def parse_window_data(raw: str) -> list[WindowRecord]:
    """Parse ``session:window:name:pane_count`` lines; lines with < 4 fields are dropped."""
    windows: list[WindowRecord] = []
    for line in _lines(raw):
        parts = line.split(":")
        if len(parts) < 4:
            continue
        windows.append(
            WindowRecord(
                session=parts[0],
                index=parse_int(parts[1]),
                name=parts[2],
                pane_count=parse_int(parts[3]),
            )
        )
    return windows


def parse_scoped_pane_data(raw: str, session: str) -> list[PaneRecord]:
    """Parse ``window:pane:pid`` lines from ``list-panes -t <session>``."""
    panes: list[PaneRecord] = []
    for line in _lines(raw):
        parts = line.split(":")
        if len(parts) < 3:
            continue
        panes.append(
            PaneRecord(
                session=session,
                window_index=parse_int(parts[0]),
                pane_index=parse_int(parts[1]),
                pid=parts[2],
            )
        )
    return panes


def parse_scoped_window_data(raw: str, session: str) -> list[WindowRecord]:
    """Parse ``window:name:pane_count`` lines from ``list-windows -t <session>``."""
    windows: list[WindowRecord] = []
    for line in _lines(raw):
        parts = line.split(":")
        if len(parts) < 3:
            continue
        windows.append(
            WindowRecord(
                session=session,
                index=parse_int(parts[0]),
                name=parts[1],
                pane_count=parse_int(parts[2]),
            )
        )
    return windows


def parse_process_tree(raw: str) -> ProcessAncestry:
    """Parse ``pid ppid`` rows into a pid -> ppid map.

    Rows without both tokens are skipped. A repeated pid keeps its last parent.
    """
    pid_to_parent: ProcessAncestry = {}
    for line in raw.split("\n"):
        tokens = line.split()
        if len(tokens) < 2:
            continue
        pid, ppid = tokens[0], tokens[1]
        pid_to_parent[pid] = ppid
    return pid_to_parent


def parse_session_activity_entries(raw: str) -> list[SessionActivityEntry]:
    """Parse ``timestamp:name`` lines, most recently active first.

    The sort is stable: sessions with equal timestamps keep their input order.
    Entries whose timestamp is not numeric sort last. Lines with no ``:`` are
    dropped.
    """
    entries: list[SessionActivityEntry] = []
    for line in _lines(raw):
        timestamp, sep, name = line.partition(":")
        if not sep:
            continue
        entries.append(SessionActivityEntry(timestamp=parse_int(timestamp), session_name=name))

    return sorted(
        entries,
        key=lambda entry: (entry.timestamp is not None, entry.timestamp or 0),
        reverse=True,
    )


def parse_session_activity(raw: str) -> list[str]:
    """Return session names ranked by most recent activity."""
    return [entry.session_name for entry in parse_session_activity_entries(raw)]
