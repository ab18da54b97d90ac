"""
Storefront lifecycle events and the canonical analytics names they map to.
"""

from enum import Enum
from typing import Dict


class LifecycleEvent(str, Enum):
    """Lifecycle events emitted by the storefront."""

    PAGE_VIEWED = "page_viewed"
    PRODUCT_VIEWED = "product_viewed"
    PRODUCT_ADDED_TO_CART = "product_added_to_cart"
    PRODUCT_REMOVED_FROM_CART = "product_removed_from_cart"
    CART_VIEWED = "cart_viewed"

    CHECKOUT_STARTED = "checkout_started"
    CHECKOUT_SHIPPING_INFO_SUBMITTED = "checkout_shipping_info_submitted"
    PAYMENT_INFO_SUBMITTED = "payment_info_submitted"
    CHECKOUT_COMPLETED = "checkout_completed"

    SEARCH_SUBMITTED = "search_submitted"


# Recommended GA4 event names
CANONICAL_NAMES: Dict[LifecycleEvent, str] = {
    LifecycleEvent.PAGE_VIEWED: "page_view",
    LifecycleEvent.PRODUCT_VIEWED: "view_item",
    LifecycleEvent.PRODUCT_ADDED_TO_CART: "add_to_cart",
    LifecycleEvent.PRODUCT_REMOVED_FROM_CART: "remove_from_cart",
    LifecycleEvent.CART_VIEWED: "view_cart",
    LifecycleEvent.CHECKOUT_STARTED: "begin_checkout",
    LifecycleEvent.CHECKOUT_SHIPPING_INFO_SUBMITTED: "add_shipping_info",
    LifecycleEvent.PAYMENT_INFO_SUBMITTED: "add_payment_info",
    LifecycleEvent.CHECKOUT_COMPLETED: "purchase",
    LifecycleEvent.SEARCH_SUBMITTED: "search",
}
