"""Picker line and preview rendering.

Every function returns text that survives ANSI stripping: removing the SGR
sequences leaves the plain session names, targets and separators, which is
what the picker relies on to map a selected line back to a session.
"""

from __future__ import annotations

from typing import Collection, Sequence

from tmuxpick.constants import SEPARATOR_WIDTH
from tmuxpick.core.models import WindowRecord
from tmuxpick.render.theme import DEFAULT_THEME, Theme

HEADER_RULE = "━━"
SEPARATOR_CHAR = "─"


def _rule_width(theme: Theme) -> int:
    # rules never go below SEPARATOR_WIDTH, whatever the theme asks for
    return max(SEPARATOR_WIDTH, theme.separator_width)


def agent_indicator(count: int, theme: Theme = DEFAULT_THEME) -> str:
    """``count`` glyphs joined by single spaces; empty when count <= 0."""
    if count <= 0:
        return ""
    return " ".join([theme.glyph] * count)


def format_session_line(
    name: str,
    current_session: str,
    agent_count: int,
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Format one fzf line: session name plus one glyph per attributed agent.

    The current session uses the theme's `current` color, others `default`.
    """
    color = theme.current if name == current_session else theme.default
    indicator = ""
    if agent_count > 0:
        indicator = f" {theme.agent}{agent_indicator(agent_count, theme)}{theme.reset}"
    return f"{color}{name}{indicator}{theme.reset}"


def format_directory_line(path: str, theme: Theme = DEFAULT_THEME) -> str:
    return f"{theme.directory}{path}{theme.reset}"


def render_tree_header(
    session_name: str,
    windows: Sequence[WindowRecord],
    agent_window_indices: Collection[int],
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Render the preview header: session title, one line per window, separator.

    Example (stripped)::

        ━━ dev (2 windows) ━━
          0: editor [2 panes]
          1: claude 󰚩
        ────────────────────────────────────────

    Args:
        session_name: Session shown in the title.
        windows: Windows of that session, in tmux order.
        agent_window_indices: Window indices hosting at least one agent.
        theme: Colors and glyph.
    """
    label = "window" if len(windows) == 1 else "windows"
    lines = [
        f"{theme.bold}{theme.header}{HEADER_RULE} {session_name} "
        f"{theme.dim}({len(windows)} {label}){theme.reset}"
        f"{theme.bold}{theme.header} {HEADER_RULE}{theme.reset}"
    ]

    for window in windows:
        line = f"  {theme.window_index}{window.index}:{theme.reset} {window.name}"
        if window.pane_count is not None and window.pane_count > 1:
            line += f" {theme.dim}[{window.pane_count} panes]{theme.reset}"
        if window.index in agent_window_indices:
            line += f" {theme.agent}{theme.glyph}{theme.reset}"
        lines.append(line)

    lines.append(f"{theme.dim}{SEPARATOR_CHAR * _rule_width(theme)}{theme.reset}")
    return "\n".join(lines)


def render_pane_separator(target: str, theme: Theme = DEFAULT_THEME) -> str:
    """Labeled rule placed above each agent pane when several are stacked."""
    label = f"{SEPARATOR_CHAR * 2} {theme.glyph} {target} {SEPARATOR_CHAR * 2}"
    padding = max(0, _rule_width(theme) - len(label))
    return f"{theme.bold}{theme.agent}{label}{SEPARATOR_CHAR * padding}{theme.reset}"


def dim_block(text: str, theme: Theme = DEFAULT_THEME) -> str:
    """Wrap captured pane content or a directory listing in the preview color."""
    return f"{theme.preview}{text}{theme.reset}"
