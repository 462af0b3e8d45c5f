"""Pytest configuration for tmuxpick tests."""

import pytest
import structlog

from tmuxpick.config.schema import PickerConfig
from tmuxpick.render.theme import DEFAULT_THEME, Theme


def pytest_collection_modifyitems(config, items):
    """Set per-directory timeouts: unit=1s, integration=5s."""
    for item in items:
        parts = item.path.parts
        if "unit" in parts:
            item.add_marker(pytest.mark.unit)
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.timeout(5))


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def picker_cfg() -> PickerConfig:
    return PickerConfig()


@pytest.fixture
def theme() -> Theme:
    return DEFAULT_THEME
