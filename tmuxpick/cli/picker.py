"""tmuxpick: interactive tmux session picker built on fzf.

Lists sessions by last activity, marks sessions whose panes run an agent
process (one glyph per agent), and previews the session's window tree plus
the content of its agent panes.

Modes (the preview and kill modes are invoked by fzf itself):

    tmuxpick                 launch the picker
    tmuxpick --list          print the formatted session list
    tmuxpick --preview ITEM  print the preview for a picker line
    tmuxpick --kill ITEM     kill the session on a picker line

Keys inside fzf: enter / ctrl-o switch (or create a session from the typed
query), ctrl-k kill and reload, j/k move, / enables search.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from tmuxpick import config as picker_config
from tmuxpick.config.schema import PickerConfig
from tmuxpick.constants import (
    PREVIEW_HEADER_OVERHEAD,
    PREVIEW_MAX_LINES,
    PREVIEW_MIN_LINES,
    PREVIEW_MIN_LINES_PER_PANE,
)
from tmuxpick.core import tmux_bridge
from tmuxpick.core.ownership import (
    agent_window_indices,
    build_pane_by_pid,
    count_agents,
    count_attributed,
    find_claude_pane_targets,
)
from tmuxpick.core.models import PaneRecord, TargetsBySession
from tmuxpick.core.parsers import (
    clean_session_name,
    parse_pane_data,
    parse_process_tree,
    parse_scoped_pane_data,
    parse_scoped_window_data,
    parse_session_activity,
    strip_ansi,
)
from tmuxpick.core.snapshots import (
    ListSnapshot,
    PreviewSnapshot,
    collect_list_snapshot,
    collect_preview_snapshot,
)
from tmuxpick.logging_config import get_logger, setup_logging
from tmuxpick.render.formatting import (
    dim_block,
    format_directory_line,
    format_session_line,
    render_pane_separator,
    render_tree_header,
)
from tmuxpick.render.theme import Theme, theme_from_config
from tmuxpick.runtime.binaries import resolve_binary
from tmuxpick.utils import session_name_from_directory, session_name_from_query

logger = get_logger(__name__)

_SELF_COMMAND = f"{shlex.quote(sys.executable)} -m tmuxpick.cli.picker"


def build_self_command(config_path: Optional[Path] = None, log_level: Optional[str] = None) -> str:
    """Command fzf runs for --list/--preview/--kill, carrying this run's options.

    The children must load the same config: the glyph decides how a picker
    line maps back to a session name.
    """
    command = _SELF_COMMAND
    if config_path is not None:
        command += f" --config {shlex.quote(str(config_path))}"
    if log_level:
        command += f" --log-level {shlex.quote(log_level)}"
    return command


def resolve_targets(
    raw_agent_pids: str,
    pane_by_pid: dict[str, PaneRecord],
    raw_processes: str,
    cfg: PickerConfig,
) -> TargetsBySession:
    """Run the pane resolver over raw snapshots and report unattributed agents."""
    agent_pids = raw_agent_pids.split()
    targets = find_claude_pane_targets(
        agent_pids,
        pane_by_pid,
        parse_process_tree(raw_processes),
        cfg.max_parent_depth,
    )
    unattributed = len(agent_pids) - count_attributed(targets)
    if unattributed:
        logger.debug("%d agent process(es) not attached to a listed tmux pane", unattributed)
    return targets


# --- session list ---


def build_session_list(snapshot: ListSnapshot, cfg: PickerConfig, theme: Theme) -> str:
    """Ranked session lines followed by optional zoxide directories."""
    pane_by_pid = build_pane_by_pid(parse_pane_data(snapshot.panes))
    targets = resolve_targets(snapshot.agent_pids, pane_by_pid, snapshot.processes, cfg)

    lines = [
        format_session_line(name, snapshot.current_session, count_agents(targets, name), theme)
        for name in parse_session_activity(snapshot.sessions)
    ]
    if cfg.show_zoxide:
        directories = [line for line in snapshot.zoxide.split("\n") if line][: cfg.zoxide_limit]
        lines.extend(format_directory_line(path, theme) for path in directories)
    return "\n".join(lines)


async def generate_session_list(cfg: PickerConfig, theme: Theme) -> str:
    snapshot = await collect_list_snapshot(cfg)
    return build_session_list(snapshot, cfg, theme)


# --- preview ---


@dataclass(frozen=True)
class PreviewPlan:
    """What to capture for a session preview, derived from one snapshot."""

    header: str
    agent_targets: list[str]
    capture_targets: list[str]
    lines_per_pane: int

    @property
    def stacked(self) -> bool:
        return len(self.agent_targets) > 1


def plan_preview(snapshot: PreviewSnapshot, cfg: PickerConfig, theme: Theme) -> PreviewPlan:
    """Attribute agents within one session and size the capture area.

    With several agent panes each gets a labeled slice; with one, that pane is
    shown; with none, the session's active pane is shown.
    """
    session_name = snapshot.session_name
    windows = parse_scoped_window_data(snapshot.windows, session_name)
    pane_by_pid = build_pane_by_pid(parse_scoped_pane_data(snapshot.panes, session_name))
    targets = resolve_targets(snapshot.agent_pids, pane_by_pid, snapshot.processes, cfg).get(session_name, [])

    header = render_tree_header(session_name, windows, agent_window_indices(targets), theme)
    max_lines = max(PREVIEW_MIN_LINES, PREVIEW_MAX_LINES - len(windows) - PREVIEW_HEADER_OVERHEAD)

    if len(targets) > 1:
        return PreviewPlan(
            header=header,
            agent_targets=targets,
            capture_targets=list(targets),
            lines_per_pane=max(PREVIEW_MIN_LINES_PER_PANE, max_lines // len(targets)),
        )
    capture_target = targets[0] if targets else session_name
    return PreviewPlan(header=header, agent_targets=targets, capture_targets=[capture_target], lines_per_pane=max_lines)


def tail_lines(content: str, count: int) -> str:
    return "\n".join(content.split("\n")[-count:])


def assemble_preview(plan: PreviewPlan, captures: Sequence[str], theme: Theme) -> str:
    """Header plus captured pane content, in capture_targets order."""
    blocks = [plan.header]
    for target, content in zip(plan.capture_targets, captures):
        if plan.stacked:
            blocks.append(render_pane_separator(target, theme))
        blocks.append(dim_block(tail_lines(content, plan.lines_per_pane), theme))
    return "\n".join(blocks)


async def preview_session(session_name: str, cfg: PickerConfig, theme: Theme) -> str:
    snapshot = await collect_preview_snapshot(session_name, cfg)
    plan = plan_preview(snapshot, cfg, theme)
    captures = await asyncio.gather(
        *(tmux_bridge.capture_pane(target, cfg.subprocess_timeout) for target in plan.capture_targets)
    )
    return assemble_preview(plan, captures, theme)


async def preview_item(raw_item: str, cfg: PickerConfig, theme: Theme) -> str:
    """Preview for one picker line: a directory listing or a session tree."""
    item = strip_ansi(raw_item)
    if item.startswith("/"):
        listing = await tmux_bridge.list_directory(item, cfg.subprocess_timeout)
        return dim_block(listing, theme)
    return await preview_session(clean_session_name(item, theme.glyph), cfg, theme)


# --- kill ---


async def kill_item(raw_item: str, cfg: PickerConfig, theme: Theme) -> bool:
    """Kill the session on a picker line.

    Killing the attached session would detach the client, so the client is
    first switched to the most recently active other session. When there is
    no other session nothing is killed.
    """
    target = clean_session_name(strip_ansi(raw_item), theme.glyph)
    current = await tmux_bridge.current_session()

    if target == current:
        ranked = parse_session_activity(await tmux_bridge.list_sessions(cfg.subprocess_timeout))
        other = next((name for name in ranked if name != current), None)
        if other is None:
            logger.info("Not killing %s: it is the only session", target)
            return False
        await tmux_bridge.switch_client(other)

    killed = await tmux_bridge.kill_session(target)
    if not killed:
        logger.warning("Failed to kill session %s", target)
    return killed


# --- fzf ---


@dataclass(frozen=True)
class FzfResult:
    query: str
    key: str
    selected: str


def parse_fzf_output(output: str) -> FzfResult:
    """Split `--print-query --expect` output into query, key and plain selection."""
    lines = output.split("\n")
    query = lines[0] if lines else ""
    key = lines[1] if len(lines) > 1 else ""
    selected = strip_ansi("\n".join(lines[2:]).strip())
    return FzfResult(query=query, key=key, selected=selected)


def build_fzf_command(cfg: PickerConfig, self_command: str = _SELF_COMMAND) -> list[str]:
    return [
        resolve_binary("fzf"),
        "--ansi",
        "--reverse",
        "--disabled",
        "--header",
        cfg.fzf_header,
        "--header-first",
        "--bind",
        "j:down,k:up",
        "--bind",
        "/:enable-search",
        "--bind",
        "ctrl-o:accept",
        "--bind",
        f"ctrl-k:execute-silent({self_command} --kill {{}})+reload({self_command} --list)",
        f"--preview-window=right:{cfg.preview_width}%",
        "--preview",
        f"{self_command} --preview {{}}",
        "--print-query",
        "--expect=ctrl-o,enter",
    ]


async def run_fzf(cfg: PickerConfig, entries: str, self_command: str = _SELF_COMMAND) -> FzfResult:
    """Run fzf over `entries`; fzf draws on /dev/tty, stdout carries the result."""
    try:
        process = await asyncio.create_subprocess_exec(
            *build_fzf_command(cfg, self_command),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.error("Failed to start fzf: %s", e)
        return FzfResult(query="", key="", selected="")

    stdout, _ = await process.communicate(entries.encode())
    return parse_fzf_output(stdout.decode(errors="replace"))


async def handle_selection(result: FzfResult, theme: Theme) -> None:
    """Switch to, or create, the session the user picked."""
    if not result.selected:
        if result.query and result.key == "enter":
            name = session_name_from_query(result.query)
            if not await tmux_bridge.has_session(name):
                await tmux_bridge.new_session(name, str(Path.home()))
            await tmux_bridge.switch_client(name)
        return

    if not result.selected.startswith("/"):
        await tmux_bridge.switch_client(clean_session_name(result.selected, theme.glyph))
        return

    directory = result.selected
    name = session_name_from_directory(directory)
    if not (os.environ.get("TMUX") or await tmux_bridge.is_tmux_running()):
        await tmux_bridge.attach_new_session(name, directory)
        return
    if not await tmux_bridge.has_session(name):
        await tmux_bridge.new_session(name, directory)
    await tmux_bridge.switch_client(name)


async def launch_picker(cfg: PickerConfig, theme: Theme, self_command: str = _SELF_COMMAND) -> None:
    entries = await generate_session_list(cfg, theme)
    result = await run_fzf(cfg, entries, self_command)
    logger.debug("fzf returned key=%r query=%r selected=%r", result.key, result.query, result.selected)
    await handle_selection(result, theme)


# --- entry point ---


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tmuxpick", description="tmux session picker with agent pane markers")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--list", action="store_true", help="print the formatted session list")
    mode.add_argument("--preview", metavar="ITEM", help="print the preview for a picker line")
    mode.add_argument("--kill", metavar="ITEM", help="kill the session on a picker line")
    parser.add_argument("--config", type=Path, help="config file (default: $TMUXPICK_CONFIG_PATH)")
    parser.add_argument("--log-level", help="override TMUXPICK_LOG_LEVEL")
    return parser


async def _run(args: argparse.Namespace, cfg: PickerConfig, theme: Theme) -> None:
    if args.list:
        sys.stdout.write(await generate_session_list(cfg, theme) + "\n")
    elif args.preview is not None:
        sys.stdout.write(await preview_item(args.preview, cfg, theme) + "\n")
    elif args.kill is not None:
        await kill_item(args.kill, cfg, theme)
    else:
        await launch_picker(cfg, theme, build_self_command(args.config, args.log_level))


def _main_impl(argv: Optional[list[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        cfg = picker_config.load(args.config)
        theme = theme_from_config(cfg.theme)
    except ValidationError as e:
        sys.stderr.write(f"tmuxpick error: invalid config {args.config or picker_config.config_path()}:\n{e}\n")
        sys.exit(1)

    asyncio.run(_run(args, cfg, theme))


def main() -> None:
    try:
        _main_impl()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
