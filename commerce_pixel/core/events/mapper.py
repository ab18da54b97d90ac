"""
Mapping from raw storefront lifecycle events to canonical analytics events.

The storefront delivers event objects where:
- name is the lifecycle event (product_viewed, checkout_completed, ...)
- data holds an event-specific shape (productVariant, cartLine, cart,
  checkout, searchResult)
- context holds page metadata (context.document.title / .location.href)
- clientId identifies the browser, when present

Each rule below is a pure function from that raw event to a payload dict
with currency, value and items plus event-specific extras.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Union

from commerce_pixel.core.events.types import CANONICAL_NAMES, LifecycleEvent
from commerce_pixel.core.exceptions import MappingError, UnknownEventError
from commerce_pixel.core.formatting import format_item, format_items, parse_amount
from commerce_pixel.core.payload import CanonicalEvent, PayloadBuilder, dig
from commerce_pixel.settings import PixelSettings, get_settings

Payload = Dict[str, Any]
Rule = Callable[[Mapping[str, Any], PixelSettings], Optional[Payload]]


def _require(value: Any, what: str) -> Any:
    if value is None:
        raise MappingError(f"event has no {what}")
    return value


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        _require(value, what)
        raise MappingError(f"{what} is not an object, got {type(value).__name__}")
    return value


def _transaction_id(order_id: Any) -> str:
    """Stringify an order id; whole floats lose their trailing .0."""
    if isinstance(order_id, float) and order_id.is_integer():
        order_id = int(order_id)
    return str(order_id)


def _checkout_base(checkout: Mapping[str, Any], settings: PixelSettings) -> PayloadBuilder:
    """Fields shared by every checkout-scoped event."""
    return PayloadBuilder(
        currency=checkout.get("currencyCode") or settings.currency,
        value=parse_amount(dig(checkout, "totalPrice", "amount")),
        items=format_items(checkout.get("lineItems"), settings=settings),
    )


def _coupon(checkout: Mapping[str, Any]) -> Optional[str]:
    return dig(checkout, "discountApplications", 0, "title")


# Page and product


def map_page_viewed(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    document = _require_mapping(dig(event, "context", "document"), "context.document")
    return (
        PayloadBuilder()
        .put_if("page_title", dig(document, "title"))
        .put_if("page_location", dig(document, "location", "href"))
        .build()
    )


def map_product_viewed(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    variant = _require_mapping(dig(event, "data", "productVariant"), "data.productVariant")
    item = format_item(variant, settings=settings)
    return PayloadBuilder(currency=settings.currency, value=item["price"], items=[item]).build()


# Cart


def _cart_line_payload(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    cart_line = _require_mapping(dig(event, "data", "cartLine"), "data.cartLine")
    item = format_item(dig(cart_line, "merchandise"), dig(cart_line, "quantity"), settings=settings)
    return PayloadBuilder(
        currency=settings.currency,
        value=parse_amount(dig(cart_line, "cost", "totalAmount", "amount")),
        items=[item],
    ).build()


def map_product_added_to_cart(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    return _cart_line_payload(event, settings)


def map_product_removed_from_cart(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    return _cart_line_payload(event, settings)


def map_cart_viewed(event: Mapping[str, Any], settings: PixelSettings) -> Optional[Payload]:
    """View of the whole cart; no event at all when there is no cart."""
    cart = dig(event, "data", "cart")
    lines = dig(cart, "lines")
    if not cart or (not lines and not isinstance(lines, list)):
        return None
    items = format_items(lines, settings=settings)
    # Summed over formatted items, not over line costs
    value = sum((item["price"] * item["quantity"] for item in items), 0.0)
    return PayloadBuilder(currency=settings.currency, value=value, items=items).build()


# Checkout


def map_checkout_started(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    checkout = _require_mapping(dig(event, "data", "checkout"), "data.checkout")
    return _checkout_base(checkout, settings).put_if("coupon", _coupon(checkout)).build()


def map_shipping_info_submitted(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    checkout = _require_mapping(dig(event, "data", "checkout"), "data.checkout")
    shipping_tier = (
        dig(checkout, "delivery", "selectedDeliveryOptions", 0, "title")
        or dig(checkout, "shippingLine", "title")
        or ""
    )
    return (
        _checkout_base(checkout, settings)
        .put("shipping_tier", shipping_tier)
        .put_if("coupon", _coupon(checkout))
        .build()
    )


def map_payment_info_submitted(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    checkout = _require_mapping(dig(event, "data", "checkout"), "data.checkout")
    return (
        _checkout_base(checkout, settings)
        .put_if("payment_type", dig(checkout, "transactions", 0, "gateway"))
        .put_if("coupon", _coupon(checkout))
        .build()
    )


def map_checkout_completed(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    checkout = _require_mapping(dig(event, "data", "checkout"), "data.checkout")
    order_id = _require(dig(checkout, "order", "id"), "data.checkout.order.id")
    return (
        _checkout_base(checkout, settings)
        .put("transaction_id", _transaction_id(order_id))
        .put("tax", parse_amount(dig(checkout, "totalTax", "amount") or 0))
        .put("shipping", parse_amount(dig(checkout, "shippingLine", "price", "amount") or 0))
        .put_if("coupon", _coupon(checkout))
        .build()
    )


# Search


def map_search_submitted(event: Mapping[str, Any], settings: PixelSettings) -> Payload:
    return PayloadBuilder().put_if("search_term", dig(event, "data", "searchResult", "query")).build()


RULES: Dict[LifecycleEvent, Rule] = {
    LifecycleEvent.PAGE_VIEWED: map_page_viewed,
    LifecycleEvent.PRODUCT_VIEWED: map_product_viewed,
    LifecycleEvent.PRODUCT_ADDED_TO_CART: map_product_added_to_cart,
    LifecycleEvent.PRODUCT_REMOVED_FROM_CART: map_product_removed_from_cart,
    LifecycleEvent.CART_VIEWED: map_cart_viewed,
    LifecycleEvent.CHECKOUT_STARTED: map_checkout_started,
    LifecycleEvent.CHECKOUT_SHIPPING_INFO_SUBMITTED: map_shipping_info_submitted,
    LifecycleEvent.PAYMENT_INFO_SUBMITTED: map_payment_info_submitted,
    LifecycleEvent.CHECKOUT_COMPLETED: map_checkout_completed,
    LifecycleEvent.SEARCH_SUBMITTED: map_search_submitted,
}


def resolve_event_type(event_type: Union[str, LifecycleEvent]) -> LifecycleEvent:
    """Parse a lifecycle event name, raising UnknownEventError if unmapped."""
    try:
        return LifecycleEvent(event_type)
    except ValueError:
        raise UnknownEventError(f"No mapping rule for lifecycle event {event_type!r}") from None


def map_event(
    event_type: Union[str, LifecycleEvent],
    event: Mapping[str, Any],
    *,
    settings: Optional[PixelSettings] = None,
) -> Optional[CanonicalEvent]:
    """
    Map a single raw storefront event to a canonical event.

    Args:
        event_type: lifecycle event name
        event: raw event object (data, context, clientId)
        settings: pixel settings (defaults to the cached instance)

    Returns:
        CanonicalEvent, or None when the rule decides there is nothing to send

    Raises:
        UnknownEventError: no rule for ``event_type``
        MappingError: the event lacks a structure the rule needs
    """
    lifecycle = resolve_event_type(event_type)
    settings = settings or get_settings()

    payload = RULES[lifecycle](event, settings)
    if payload is None:
        return None
    return CanonicalEvent(
        name=CANONICAL_NAMES[lifecycle],
        payload=payload,
        client_id=dig(event, "clientId"),
        source=lifecycle.value,
    )
