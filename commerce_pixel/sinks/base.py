"""Base class for analytics sinks."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from commerce_pixel.settings import PixelSettings

logger = logging.getLogger(__name__)


def tag_ids(settings: PixelSettings) -> Dict[str, str]:
    """Google tag ids reported in the debug banner, in display order."""
    return {
        "Container": settings.google_tag_id,
        "GA4": settings.ga4_id,
        "Google Ads": settings.google_ads_id,
        "Merchant Center": settings.merchant_center_id,
    }


class AnalyticsSink(ABC):
    """
    Abstract base class for analytics sinks.

    A sink is initialised once by the host with ``init()`` and then
    receives one ``record()`` call per canonical event. Implementations may
    raise on failure; the dispatcher is responsible for isolating faults.
    """

    def __init__(self, *, debug: bool = False, tag_ids: Optional[Mapping[str, str]] = None) -> None:
        self._initialized = False
        self.debug = debug
        self.tag_ids: Dict[str, str] = dict(tag_ids or {})

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> None:
        """Prepare the sink. Calling it again is a no-op."""
        self._initialized = True

    def log_banner(self, title: str) -> None:
        """Log the configured tag ids when debug is on."""
        if not self.debug:
            return
        logger.info(f"[Web Pixel] {title}")
        for label, tag_id in self.tag_ids.items():
            logger.info(f"[Web Pixel] {label}: {tag_id}")
        logger.info("[Web Pixel] Item ID: SKU-based (with fallback)")

    @abstractmethod
    def record(
        self,
        event_name: str,
        payload: Dict[str, Any],
        *,
        client_id: Optional[str] = None,
    ) -> None:
        """
        Record one canonical event.

        Args:
            event_name: canonical event name (e.g. "purchase")
            payload: canonical payload (currency, value, items, extras)
            client_id: storefront client id, when the source event had one
        """
        pass

    def close(self) -> None:
        """Release any resources held by the sink."""
        pass
