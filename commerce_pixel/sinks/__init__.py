"""
Analytics sinks.

Exactly one sink receives every canonical event. ``build_sink`` picks the
Measurement Protocol sink when GA4 credentials are configured and falls
back to the logging sink otherwise.
"""

import logging
from typing import Optional

from commerce_pixel.settings import PixelSettings, get_settings
from commerce_pixel.sinks.base import AnalyticsSink, tag_ids
from commerce_pixel.sinks.logging_sink import LoggingSink
from commerce_pixel.sinks.measurement_protocol import MeasurementProtocolSink

logger = logging.getLogger(__name__)


def build_sink(settings: Optional[PixelSettings] = None) -> AnalyticsSink:
    """Create (but do not init) the sink described by ``settings``."""
    settings = settings or get_settings()
    if settings.measurement_id and settings.api_secret is not None:
        return MeasurementProtocolSink.from_settings(settings)
    logger.warning("No GA4 measurement id/API secret configured; events will only be logged")
    return LoggingSink(debug=settings.debug, tag_ids=tag_ids(settings))


__all__ = [
    "AnalyticsSink",
    "LoggingSink",
    "MeasurementProtocolSink",
    "build_sink",
    "tag_ids",
]
