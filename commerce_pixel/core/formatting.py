"""
Formatting of storefront products and line items into canonical items.

Source structures are the JSON-like mappings the storefront emits
(camelCase keys, most fields optional):

- variant: id, title, sku, price.amount, product
- product: id, title, vendor, type, collections[].title
- line item: merchandise (cart) or variant (checkout), quantity,
  discountAllocations[].amount.amount / .discountApplication.title

Every formatted item always has item_category; item_category2..5 are
only present when the matching collection has a title.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Mapping, Optional

from commerce_pixel.core.exceptions import MappingError
from commerce_pixel.core.payload import PayloadBuilder, dig, first_of
from commerce_pixel.settings import PixelSettings, get_settings

CATEGORY_KEYS = ("item_category2", "item_category3", "item_category4", "item_category5")

# Leading numeric prefix, as read by JavaScript's parseFloat
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(value: Any) -> float:
    """
    Coerce a storefront money amount to float.

    Numbers pass through; strings are read up to the first character that
    cannot continue a number ("12.50 EUR" -> 12.5). Anything else, including
    None, yields nan rather than raising.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    sign, unsigned = ("-", text[1:]) if text[:1] == "-" else ("", text.lstrip("+"))
    if unsigned.startswith("Infinity"):
        return float(sign + "inf")
    match = _NUMERIC_PREFIX.match(text)
    return float(match.group(0)) if match else math.nan


def clean_product_name(product_title: Optional[str], variant_title: Optional[str]) -> Optional[str]:
    """
    Remove the variant suffix from a product name.

    Example: ("T-Shirt Sparkle - XS", "XS") -> "T-Shirt Sparkle"
    """
    if not variant_title or not product_title:
        return product_title
    suffix = f" - {variant_title}"
    if product_title.endswith(suffix):
        return product_title[: -len(suffix)]
    return product_title


def create_item_id(product: Mapping[str, Any], variant: Mapping[str, Any], prefix: str) -> str:
    """SKU-based id when the variant has a SKU, else prefix_<product>_<variant>."""
    sku = variant.get("sku")
    if isinstance(sku, str) and sku.strip() != "":
        return f"SKU_{sku}"
    return f"{prefix}_{product.get('id')}_{variant.get('id')}"


def format_item(
    variant: Mapping[str, Any],
    quantity: Optional[int] = 1,
    line_item: Optional[Mapping[str, Any]] = None,
    *,
    settings: Optional[PixelSettings] = None,
) -> Dict[str, Any]:
    """
    Format one variant as a canonical item.

    Args:
        variant: storefront product variant
        quantity: units in the cart/checkout line (None means 1)
        line_item: optional line carrying discount allocations
        settings: pixel settings (defaults to the cached instance)

    Returns:
        dict with item_id, item_name, item_variant, item_brand,
        item_category, price, quantity and the optional category,
        discount and coupon keys
    """
    if not isinstance(variant, Mapping):
        raise MappingError(f"expected a product variant, got {type(variant).__name__}")

    settings = settings or get_settings()
    product = variant.get("product") or variant
    variant_title = variant.get("title")

    item = PayloadBuilder(
        item_id=create_item_id(product, variant, settings.item_id_prefix),
        item_name=clean_product_name(product.get("title"), variant_title),
        item_variant=variant_title,
        item_brand=product.get("vendor") or settings.fallback_brand,
        item_category=product.get("type") or "",
        price=parse_amount(dig(variant, "price", "amount")),
        quantity=int(quantity) if quantity is not None else 1,
    )

    collections = product.get("collections")
    titles = [dig(collections, idx, "title") for idx in range(len(CATEGORY_KEYS))]
    item.put_each(CATEGORY_KEYS, titles)

    allocation = first_of(dig(line_item, "discountAllocations"))
    if allocation is not None:
        item.put_if("discount", dig(allocation, "amount", "amount"), parse_amount)
        item.put_if("coupon", dig(allocation, "discountApplication", "title"))

    return item.build()


def format_items(
    line_items: Any,
    *,
    settings: Optional[PixelSettings] = None,
) -> List[Dict[str, Any]]:
    """Format cart lines or checkout line items, preserving order.

    Returns an empty list when ``line_items`` is missing or not a list.
    """
    if not line_items or not isinstance(line_items, (list, tuple)):
        return []
    settings = settings or get_settings()
    items: List[Dict[str, Any]] = []
    for line in line_items:
        variant = dig(line, "merchandise") or dig(line, "variant")
        items.append(format_item(variant, dig(line, "quantity"), line, settings=settings))
    return items
