"""Shared test fixtures for the commerce pixel tests."""

import pytest

from commerce_pixel.settings import PixelSettings, get_settings
from factories import FlakySink, RecordingSink


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return PixelSettings(
        _env_file=None,
        currency="EUR",
        fallback_brand="Brand Name",
        item_id_prefix="shopify_DE",
        debug=False,
    )


@pytest.fixture
def debug_settings(settings):
    return settings.model_copy(update={"debug": True})


@pytest.fixture
def sink():
    """Initialised in-memory sink."""
    s = RecordingSink()
    s.init()
    return s


@pytest.fixture
def flaky_sink():
    """Initialised sink that fails on its first call only."""
    s = FlakySink(fail_on=(1,))
    s.init()
    return s
