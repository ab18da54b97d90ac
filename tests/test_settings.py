import pytest
from pydantic import ValidationError

from commerce_pixel.settings import PixelSettings, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("PIXEL_CURRENCY", "PIXEL_FALLBACK_BRAND", "PIXEL_ITEM_ID_PREFIX", "PIXEL_DEBUG", "PIXEL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = PixelSettings(_env_file=None)
    assert s.currency == "EUR"
    assert s.fallback_brand == "Brand Name"
    assert s.item_id_prefix == "shopify_DE"
    assert s.debug is False
    assert s.measurement_id is None


def test_environment_overrides(clean_env):
    clean_env.setenv("PIXEL_CURRENCY", "usd")
    clean_env.setenv("PIXEL_FALLBACK_BRAND", "House Label")
    clean_env.setenv("PIXEL_DEBUG", "true")
    clean_env.setenv("PIXEL_LOG_LEVEL", "debug")

    s = PixelSettings(_env_file=None)
    assert s.currency == "USD"
    assert s.fallback_brand == "House Label"
    assert s.debug is True
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("currency", ["EURO", "E1", "12"])
def test_rejects_invalid_currency(clean_env, currency):
    with pytest.raises(ValidationError):
        PixelSettings(_env_file=None, currency=currency)


def test_empty_item_id_prefix_rejected(clean_env):
    with pytest.raises(ValidationError):
        PixelSettings(_env_file=None, item_id_prefix="")


def test_api_secret_is_hidden(clean_env):
    s = PixelSettings(_env_file=None, api_secret="s3cr3t")
    assert "s3cr3t" not in repr(s)
    assert s.api_secret.get_secret_value() == "s3cr3t"


def test_get_settings_is_cached(clean_env):
    assert get_settings() is get_settings()
