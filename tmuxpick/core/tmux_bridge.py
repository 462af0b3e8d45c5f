"""Async subprocess wrappers for tmux and the process-inspection tools.

This is the only module that spawns processes. Query helpers never raise:
a missing binary, a non-zero exit or a timeout all come back as empty
output, which the pure parsers turn into empty collections.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from tmuxpick.constants import (
    PANE_FORMAT,
    SCOPED_PANE_FORMAT,
    SCOPED_WINDOW_FORMAT,
    SESSION_ACTIVITY_FORMAT,
    SUBPROCESS_TIMEOUT_DEFAULT,
    SUBPROCESS_TIMEOUT_QUICK,
)
from tmuxpick.logging_config import get_logger
from tmuxpick.runtime.binaries import resolve_binary, resolve_tmux_binary

logger = get_logger(__name__)


class SubprocessTimeoutError(Exception):
    """A subprocess did not finish within its timeout and was killed."""

    def __init__(self, operation: str, timeout: float, pid: Optional[int]) -> None:
        self.operation = operation
        self.timeout = timeout
        self.pid = pid
        super().__init__(f"{operation} timed out after {timeout}s (pid={pid})")


def _kill_quietly(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        pass


async def communicate_with_timeout(
    process: asyncio.subprocess.Process,
    input_data: Optional[bytes],
    timeout: float,
    operation: str,
) -> tuple[bytes, bytes]:
    """communicate() with a timeout; the process is killed and reaped on expiry."""
    try:
        return await asyncio.wait_for(process.communicate(input_data), timeout=timeout)
    except asyncio.TimeoutError:
        _kill_quietly(process)
        await process.wait()
        raise SubprocessTimeoutError(operation, timeout, process.pid) from None


async def run_command(args: list[str], timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    """Run a command and return its stripped stdout, or "" on any failure."""
    operation = " ".join(args[:3])
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.debug("Failed to start %s: %s", operation, e)
        return ""

    try:
        stdout, stderr = await communicate_with_timeout(process, None, timeout, operation)
    except SubprocessTimeoutError as e:
        logger.warning("%s", e)
        return ""

    if process.returncode != 0:
        logger.debug(
            "%s exited %s: %s",
            operation,
            process.returncode,
            stderr.decode(errors="replace").strip()[:200],
        )
        return ""
    return stdout.decode(errors="replace").strip()


async def run_status(args: list[str], timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> bool:
    """Run a command for its side effect; True when it exited 0."""
    operation = " ".join(args[:3])
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.debug("Failed to start %s: %s", operation, e)
        return False

    try:
        _, stderr = await communicate_with_timeout(process, None, timeout, operation)
    except SubprocessTimeoutError as e:
        logger.warning("%s", e)
        return False

    if process.returncode != 0:
        logger.debug("%s exited %s: %s", operation, process.returncode, stderr.decode(errors="replace").strip())
        return False
    return True


def _tmux(*args: str) -> list[str]:
    return [resolve_tmux_binary(), *args]


# --- snapshot sources ---


async def list_all_panes(timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    return await run_command(_tmux("list-panes", "-a", "-F", PANE_FORMAT), timeout)


async def list_panes(session_name: str, timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    """Panes of one session, without the session prefix (SCOPED_PANE_FORMAT)."""
    return await run_command(_tmux("list-panes", "-s", "-t", session_name, "-F", SCOPED_PANE_FORMAT), timeout)


async def list_windows(session_name: str, timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    return await run_command(_tmux("list-windows", "-t", session_name, "-F", SCOPED_WINDOW_FORMAT), timeout)


async def list_sessions(timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    return await run_command(_tmux("list-sessions", "-F", SESSION_ACTIVITY_FORMAT), timeout)


async def current_session(timeout: float = SUBPROCESS_TIMEOUT_QUICK) -> str:
    """Name of the session the calling client is attached to, or ""."""
    return await run_command(_tmux("display-message", "-p", "#S"), timeout)


async def find_agent_pids(process_name: str, timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    """Newline-separated pids of processes named exactly `process_name`."""
    return await run_command([resolve_binary("pgrep"), "-x", process_name], timeout)


async def list_processes(timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    """Full process table as ``pid ppid`` rows."""
    return await run_command([resolve_binary("ps"), "-A", "-o", "pid=,ppid="], timeout)


async def query_zoxide(timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    return await run_command([resolve_binary("zoxide"), "query", "-l"], timeout)


async def list_directory(path: str, timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    return await run_command([resolve_binary("ls"), "-la", path], timeout)


async def capture_pane(target: str, timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> str:
    """Visible content of a pane (`target` may also be a bare session name)."""
    return await run_command(_tmux("capture-pane", "-p", "-t", target), timeout)


async def is_tmux_running(timeout: float = SUBPROCESS_TIMEOUT_QUICK) -> bool:
    return bool(await run_command([resolve_binary("pgrep"), "tmux"], timeout))


# --- session control ---


async def has_session(session_name: str, timeout: float = SUBPROCESS_TIMEOUT_QUICK) -> bool:
    # "=" prefix: exact match, tmux otherwise accepts a name prefix
    return await run_status(_tmux("has-session", "-t", f"={session_name}"), timeout)


async def new_session(session_name: str, working_dir: str, timeout: float = SUBPROCESS_TIMEOUT_DEFAULT) -> bool:
    """Create a detached session."""
    return await run_status(_tmux("new-session", "-d", "-s", session_name, "-c", working_dir), timeout)


async def switch_client(session_name: str, timeout: float = SUBPROCESS_TIMEOUT_QUICK) -> bool:
    return await run_status(_tmux("switch-client", "-t", session_name), timeout)


async def kill_session(session_name: str, timeout: float = SUBPROCESS_TIMEOUT_QUICK) -> bool:
    return await run_status(_tmux("kill-session", "-t", session_name), timeout)


async def attach_new_session(session_name: str, working_dir: str) -> int:
    """Start a tmux server with an attached session; returns its exit code.

    Used when the picker runs outside tmux. The terminal is inherited, so
    there is no timeout.
    """
    try:
        process = await asyncio.create_subprocess_exec(*_tmux("new-session", "-s", session_name, "-c", working_dir))
    except OSError as e:
        logger.error("Failed to start tmux: %s", e)
        return 1
    return await process.wait()
