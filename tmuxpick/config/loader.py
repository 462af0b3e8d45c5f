from pathlib import Path
from typing import Any, Optional, Type, TypeVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from tmuxpick.config.schema import PickerConfig
from tmuxpick.logging_config import get_logger
from tmuxpick.utils import expand_env_vars

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def unknown_keys(model: BaseModel, prefix: str = "") -> list[str]:
    """Dotted names of keys no field accepted, nested sections included."""
    found = [f"{prefix}{key}" for key in (model.model_extra or {})]
    for name in type(model).model_fields:
        section = getattr(model, name)
        if isinstance(section, BaseModel):
            found.extend(unknown_keys(section, f"{prefix}{name}."))
    return found


def _read_mapping(path: Path) -> Optional[dict[str, Any]]:
    """YAML mapping from `path`; None when it is missing, unreadable or not a mapping."""
    if not path.exists():
        return None
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read config file %s: %s", path, e)
        return None

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Config file %s is not a mapping; using defaults", path)
        return None
    return raw


def load_config(path: Path, model_class: Type[T]) -> T:
    """Load and validate configuration from a YAML file.

    A `.env` file next to the config is loaded first so `${VAR}` references
    can point at it. Existing environment variables win. Invalid values
    raise pydantic's ValidationError.

    Args:
        path: Path to the tmuxpick.yml file.
        model_class: The Pydantic model class to use for validation.
    """
    dotenv_path = path.parent / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)

    raw = _read_mapping(path)
    if raw is None:
        return model_class()

    model = model_class.model_validate(expand_env_vars(raw))
    extra = unknown_keys(model)
    if extra:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(extra))
    return model


def load_picker_config(path: Path) -> PickerConfig:
    return load_config(path, PickerConfig)
