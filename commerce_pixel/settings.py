"""
Central pixel configuration using pydantic-settings.

This module provides typed access to environment-based configuration for:
- Canonical mapping defaults (currency, fallback brand, item id prefix)
- The Google tag / GA4 Measurement Protocol sink
- Diagnostic logging
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PixelSettings(BaseSettings):
    """
    Configuration for event normalization and the analytics sink.

    Environment variables (prefix: PIXEL_):
        PIXEL_CURRENCY          - Default ISO currency code (default: EUR)
        PIXEL_FALLBACK_BRAND    - Brand used when a product has no vendor
        PIXEL_ITEM_ID_PREFIX    - Prefix for ids of SKU-less variants (default: shopify_DE)
        PIXEL_DEBUG             - Log every dispatched event (default: false)
        PIXEL_LOG_LEVEL         - Root log level for entry points (default: INFO)
        PIXEL_MEASUREMENT_ID    - GA4 measurement id; enables the Measurement Protocol sink
        PIXEL_API_SECRET        - Measurement Protocol API secret
        PIXEL_ENDPOINT          - Measurement Protocol collect URL
        PIXEL_TIMEOUT_SECONDS   - HTTP timeout for the sink (default: 5)
        PIXEL_DEFAULT_CLIENT_ID - client_id used when an event carries none
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="PIXEL_",
    )

    # Mapping defaults
    currency: str = Field(default="EUR", description="Default ISO 4217 currency code.")
    fallback_brand: str = Field(
        default="Brand Name",
        description="item_brand used when the product vendor is empty.",
    )
    item_id_prefix: str = Field(
        default="shopify_DE",
        min_length=1,
        description="Fixed region prefix for ids built from product and variant ids.",
    )

    # Diagnostics
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Google tag container and reference ids (reported in the debug banner)
    google_tag_id: str = Field(default="GT-******")
    ga4_id: str = Field(default="G-******")
    google_ads_id: str = Field(default="AW-******")
    merchant_center_id: str = Field(default="MC-******")

    # Measurement Protocol sink
    measurement_id: Optional[str] = Field(
        default=None,
        description="GA4 measurement id. When unset, events are only logged.",
    )
    api_secret: Optional[SecretStr] = Field(default=None)
    endpoint: str = Field(default="https://www.google-analytics.com/mp/collect")
    timeout_seconds: float = Field(default=5.0, gt=0)
    default_client_id: str = Field(default="commerce-pixel")

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, value: Optional[str]) -> str:
        """Upper-case the currency and require a three-letter code."""
        if not value:
            return "EUR"
        value = str(value).strip().upper()
        if len(value) != 3 or not value.isalpha():
            raise ValueError(f"currency must be a 3-letter ISO code, got {value!r}")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        if not value:
            return "INFO"
        return str(value).strip().upper()


@lru_cache
def get_settings() -> PixelSettings:
    """Return cached pixel settings instance."""
    return PixelSettings()
