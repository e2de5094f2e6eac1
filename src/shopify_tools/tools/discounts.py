"""Discount tool handlers."""

from __future__ import annotations

from ..domain.discounts import DEFAULT_COMBINES_WITH
from ..protocols import ShopifyClient
from ..types import BasicDiscountInput
from .responses import ToolResponse, format_success, handle_error, text_response


async def create_discount(
    client: ShopifyClient,
    *,
    title: str,
    code: str,
    value_type: str,
    value: float,
    starts_at: str,
    applies_once_per_customer: bool,
    ends_at: str | None = None,
    usage_limit: int | None = None,
    include_collection_ids: list[str] | None = None,
) -> ToolResponse:
    """Create a basic discount code applying to all items or the given collections."""
    discount: BasicDiscountInput = {
        "title": title,
        "code": code,
        "valueType": value_type,
        "value": value,
        "startsAt": starts_at,
        "endsAt": ends_at,
        "usageLimit": usage_limit,
        "appliesOncePerCustomer": applies_once_per_customer,
        "includeCollectionIds": include_collection_ids or [],
        "combinesWith": DEFAULT_COMBINES_WITH.copy(),
    }
    try:
        created = await client.create_basic_discount_code(discount)
    except Exception as error:
        return handle_error("Failed to create discount code", error)
    return text_response(
        f"Successfully created discount code:\nID: {created.id}\nCode: {created.code}"
    )


async def delete_discount(client: ShopifyClient, discount_id: str) -> ToolResponse:
    try:
        await client.delete_basic_discount_code(discount_id)
    except Exception as error:
        return handle_error(f"Failed to delete discount code {discount_id}", error)
    return text_response(f"Successfully deleted discount code {discount_id}")


async def get_price_rule(client: ShopifyClient, price_rule_id: str) -> ToolResponse:
    try:
        rule = await client.get_price_rule(price_rule_id)
    except Exception as error:
        return handle_error(f"Failed to retrieve price rule {price_rule_id}", error)
    return format_success(rule)
