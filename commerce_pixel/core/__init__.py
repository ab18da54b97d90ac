"""
Core normalization layer.

Exposes the item formatters, the canonical event model and the
per-lifecycle mapping rules. Nothing here performs I/O.
"""

from commerce_pixel.core.events import CANONICAL_NAMES, LifecycleEvent, map_event
from commerce_pixel.core.formatting import (
    clean_product_name,
    create_item_id,
    format_item,
    format_items,
    parse_amount,
)
from commerce_pixel.core.payload import CanonicalEvent, PayloadBuilder

__all__ = [
    "CANONICAL_NAMES",
    "CanonicalEvent",
    "LifecycleEvent",
    "PayloadBuilder",
    "clean_product_name",
    "create_item_id",
    "format_item",
    "format_items",
    "map_event",
    "parse_amount",
]
