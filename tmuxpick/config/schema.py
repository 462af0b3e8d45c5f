from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tmuxpick.constants import MAX_PARENT_DEPTH, SEPARATOR_WIDTH, SUBPROCESS_TIMEOUT_DEFAULT
from tmuxpick.render.theme import sgr

DEFAULT_FZF_HEADER = "(╯°□°)╯︵ ┻━┻"


class ThemeConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    plain: bool = False  # no escape codes at all
    current: Optional[str] = None  # color names, xterm-256 indices or raw SGR params
    default: Optional[str] = None
    agent: Optional[str] = None
    header: Optional[str] = None
    window_index: Optional[str] = None
    directory: Optional[str] = None
    preview: Optional[str] = None
    glyph: Optional[str] = None
    separator_width: Optional[int] = Field(default=None, ge=SEPARATOR_WIDTH, le=200)

    @field_validator("current", "default", "agent", "header", "window_index", "directory", "preview")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        sgr(v)  # raises ValueError for unknown specs
        return v

    @field_validator("glyph")
    @classmethod
    def validate_glyph(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip() or " " in v:
            raise ValueError("glyph must be a non-empty string without spaces")
        return v


class PickerConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    agent_process_name: str = "claude"  # exact process name passed to `pgrep -x`
    max_parent_depth: int = Field(default=MAX_PARENT_DEPTH, ge=1, le=64)
    show_zoxide: bool = False
    zoxide_limit: int = Field(default=20, ge=0)
    subprocess_timeout: float = Field(default=SUBPROCESS_TIMEOUT_DEFAULT, gt=0)
    fzf_header: str = DEFAULT_FZF_HEADER
    preview_width: int = Field(default=60, ge=10, le=90)  # percent of the fzf window
    theme: ThemeConfig = ThemeConfig()

    @field_validator("agent_process_name")
    @classmethod
    def validate_agent_process_name(cls, v: str) -> str:
        name = v.strip()
        if not name:
            raise ValueError("agent_process_name must not be empty")
        return name
