"""
Event utilities: lifecycle names and canonical mapping.

This package converts raw storefront lifecycle events into the stable
analytics shape the sinks expect.
"""

from commerce_pixel.core.events.mapper import RULES, map_event, resolve_event_type
from commerce_pixel.core.events.types import CANONICAL_NAMES, LifecycleEvent

__all__ = [
    "CANONICAL_NAMES",
    "LifecycleEvent",
    "RULES",
    "map_event",
    "resolve_event_type",
]
