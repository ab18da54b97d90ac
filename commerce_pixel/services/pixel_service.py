"""
PixelService glues the mapping core to the dispatcher and the event source.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Mapping, Optional, Union

from commerce_pixel.core.events import LifecycleEvent, map_event
from commerce_pixel.services.analytics import Analytics
from commerce_pixel.services.dispatcher import Dispatcher, isolate_faults
from commerce_pixel.settings import PixelSettings, get_settings

logger = logging.getLogger(__name__)


def _name(event_type: Union[str, LifecycleEvent]) -> str:
    return getattr(event_type, "value", event_type)


class PixelService:
    """Maps each lifecycle event and hands the result to the dispatcher."""

    def __init__(self, dispatcher: Dispatcher, settings: Optional[PixelSettings] = None):
        self.dispatcher = dispatcher
        self.settings = settings or get_settings()

    @isolate_faults(lambda self, event_type, event: f"handling of {_name(event_type)}", default=False)
    def handle(self, event_type: Union[str, LifecycleEvent], event: Mapping[str, Any]) -> bool:
        """Map and dispatch one raw event. Returns True if it reached the sink."""
        canonical = map_event(event_type, event, settings=self.settings)
        if canonical is None:
            if self.settings.debug:
                logger.info(f"[Web Pixel] {_name(event_type)}: nothing to send")
            return False
        return self.dispatcher.dispatch(canonical)

    def subscribe_all(self, analytics: Analytics) -> None:
        """Subscribe a handler for every lifecycle event on ``analytics``."""
        for lifecycle in LifecycleEvent:
            analytics.subscribe(lifecycle.value, functools.partial(self.handle, lifecycle))
        if self.settings.debug:
            logger.info(f"[Web Pixel] Subscribed to {len(LifecycleEvent)} lifecycle events")
