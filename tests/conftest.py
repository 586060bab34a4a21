from __future__ import annotations

import pytest

from stylezx.config import StyleZxConfig
from stylezx.events import EventBus
from stylezx.plugin import StyleZxPlugin
from stylezx.theme import default_store


@pytest.fixture(autouse=True)
def clean_default_store():
    """The process-wide theme store is shared, so reset it around every test."""
    default_store().reset()
    yield default_store()
    default_store().reset()


@pytest.fixture
def base_theme():
    return {
        "colors": {"primary": "#3366ff", "surface": "white"},
        "spacing": {"sm": 4, "md": 8},
    }


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def plugin(bus):
    return StyleZxPlugin(StyleZxConfig(inject_import=False), bus=bus)


@pytest.fixture
def dev_plugin(bus):
    """A plugin configured like a dev server: rewritten files import the stylesheet."""
    return StyleZxPlugin(StyleZxConfig(), bus=bus)
