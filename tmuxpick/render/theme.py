"""Colors and glyphs for picker output.

The picker renders plain ANSI SGR sequences (fzf runs with ``--ansi``), so a
theme is just a set of escape strings plus the agent glyph. Themes are frozen
values passed into the formatting functions; nothing reads module state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from tmuxpick.constants import AGENT_GLYPH, SEPARATOR_WIDTH

if TYPE_CHECKING:
    from tmuxpick.config.schema import ThemeConfig

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"

# Named foreground colors accepted in config (`theme.current: yellow`)
NAMED_COLORS: dict[str, str] = {
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "gray": "\x1b[38;5;245m",
    "bold": BOLD,
    "dim": DIM,
}


def sgr(spec: str) -> str:
    """Resolve a color spec to an escape sequence.

    Accepts a name from NAMED_COLORS, an xterm-256 index ("208"), or a raw SGR
    parameter list ("1;38;5;208").
    """
    key = spec.strip().lower()
    if key in NAMED_COLORS:
        return NAMED_COLORS[key]
    if key.isdigit():
        return f"\x1b[38;5;{key}m"
    if key and all(part.isdigit() for part in key.split(";")):
        return f"\x1b[{key}m"
    raise ValueError(f"Unknown color '{spec}'")


@dataclass(frozen=True)
class Theme:
    """Escape sequences and glyph used by tmuxpick.render.formatting."""

    current: str = NAMED_COLORS["yellow"]
    default: str = NAMED_COLORS["green"]
    agent: str = NAMED_COLORS["magenta"]
    header: str = NAMED_COLORS["cyan"]
    window_index: str = NAMED_COLORS["green"]
    directory: str = NAMED_COLORS["blue"]
    preview: str = NAMED_COLORS["gray"]
    dim: str = DIM
    bold: str = BOLD
    reset: str = RESET
    glyph: str = AGENT_GLYPH
    separator_width: int = SEPARATOR_WIDTH


DEFAULT_THEME = Theme()

# Theme with no escape codes, for piping picker output into other tools
PLAIN_THEME = Theme(
    current="",
    default="",
    agent="",
    header="",
    window_index="",
    directory="",
    preview="",
    dim="",
    bold="",
    reset="",
)


def theme_from_config(cfg: ThemeConfig) -> Theme:
    """Build a theme from the `theme` config section.

    Unset keys keep DEFAULT_THEME values.
    """
    if cfg.plain:
        base = PLAIN_THEME
    else:
        colors = {
            name: sgr(spec)
            for name, spec in (
                ("current", cfg.current),
                ("default", cfg.default),
                ("agent", cfg.agent),
                ("header", cfg.header),
                ("window_index", cfg.window_index),
                ("directory", cfg.directory),
                ("preview", cfg.preview),
            )
            if spec
        }
        base = replace(DEFAULT_THEME, **colors)

    overrides: dict[str, object] = {}
    if cfg.glyph:
        overrides["glyph"] = cfg.glyph
    if cfg.separator_width is not None:
        overrides["separator_width"] = cfg.separator_width
    return replace(base, **overrides)
