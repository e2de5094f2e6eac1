"""Local validation and mutation input for basic discount codes.

Validation runs before any network call so a bad value never reaches Shopify.
"""

from __future__ import annotations

from ..exceptions import ShopifyClientError
from ..types import BasicDiscountInput, CombinesWith, JsonObject
from .gid import to_gids

VALUE_TYPES = ("percentage", "fixed_amount")

DEFAULT_COMBINES_WITH: CombinesWith = {
    "productDiscounts": True,
    "orderDiscounts": True,
    "shippingDiscounts": True,
}


def validate_discount(discount: BasicDiscountInput) -> None:
    """Raise INVALID_INPUT for discount values Shopify would reject.

    Percentages are decimals: 0.1 means 10%, so the value must lie in [0, 1].
    """
    context: dict[str, object] = {
        "code": discount.get("code"),
        "valueType": discount.get("valueType"),
        "value": discount.get("value"),
    }
    if not str(discount.get("code", "")).strip():
        raise ShopifyClientError.invalid_input("Discount code must not be empty", context)
    value_type = discount.get("valueType")
    if value_type not in VALUE_TYPES:
        raise ShopifyClientError.invalid_input(
            f"Discount valueType must be one of {', '.join(VALUE_TYPES)}", context
        )
    value = discount.get("value")
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ShopifyClientError.invalid_input("Discount value must be a number", context)
    if value_type == "percentage" and not 0 <= value <= 1:
        raise ShopifyClientError.invalid_input(
            "Percentage discount value must be between 0 and 1 (e.g. 0.1 for 10%)", context
        )
    if value_type == "fixed_amount" and value < 0:
        raise ShopifyClientError.invalid_input(
            "Fixed amount discount value must not be negative", context
        )


def build_basic_discount_input(discount: BasicDiscountInput) -> JsonObject:
    """Build the `DiscountCodeBasicInput` for `discountCodeBasicCreate`."""
    validate_discount(discount)

    if discount["valueType"] == "percentage":
        value: JsonObject = {"percentage": float(discount["value"])}
    else:
        value = {
            "discountAmount": {
                "amount": f"{float(discount['value']):.2f}",
                "appliesOnEachItem": False,
            }
        }

    include = discount.get("includeCollectionIds") or []
    if include:
        items: JsonObject = {"collections": {"add": to_gids("Collection", include)}}
    else:
        items = {"all": True}

    basic: JsonObject = {
        "title": discount["title"],
        "code": discount["code"],
        "startsAt": discount["startsAt"],
        "endsAt": discount.get("endsAt"),
        "usageLimit": discount.get("usageLimit"),
        "appliesOncePerCustomer": discount["appliesOncePerCustomer"],
        "customerSelection": {"all": True},
        "customerGets": {"value": value, "items": items},
        "combinesWith": dict(discount.get("combinesWith") or DEFAULT_COMBINES_WITH),
    }
    return {key: item for key, item in basic.items() if item is not None}
