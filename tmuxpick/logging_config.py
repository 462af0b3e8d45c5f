"""tmuxpick logging configuration.

Logs go to stderr through structlog: stdout is reserved for the lines fzf
reads (session list and preview text).

The level comes from `TMUXPICK_LOG_LEVEL` (default WARNING), so
`TMUXPICK_LOG_LEVEL=debug tmuxpick --list` shows subprocess and attribution
details without disturbing the list itself.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional

import structlog

LOG_LEVEL_ENV = "TMUXPICK_LOG_LEVEL"
_DEFAULT_LEVEL = "WARNING"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def setup_logging(level: Optional[str] = None) -> None:
    """Configure tmuxpick logging.

    Args:
        level: Optional override for `TMUXPICK_LOG_LEVEL`.
    """
    if level:
        os.environ[LOG_LEVEL_ENV] = level

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _resolve_level(os.environ.get(LOG_LEVEL_ENV, _DEFAULT_LEVEL))
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a lazily configured logger; the module name is bound as ``module``."""
    return structlog.get_logger(module=name)
