"""Order and draft order tool handlers."""

from __future__ import annotations

from ..domain.formatting import format_order
from ..protocols import ShopifyClient
from ..types import DraftOrderInput, DraftOrderLineItem, MailingAddress, OrdersQuery
from .responses import ToolResponse, format_success, handle_error, text_response


async def get_orders(client: ShopifyClient, query: OrdersQuery) -> ToolResponse:
    try:
        page = await client.load_orders(query)
    except Exception as error:
        return handle_error("Failed to retrieve orders", error)
    formatted = "\n".join(format_order(order) for order in page.orders)
    if page.has_next_page:
        pagination = (
            f"More orders available. Use after: \"{page.end_cursor}\" to get the next page."
        )
    else:
        pagination = "No more orders available."
    return text_response(
        f"Found {len(page.orders)} orders:\n{formatted}\n\nPagination Info: {pagination}"
    )


async def get_order(client: ShopifyClient, order_id: str) -> ToolResponse:
    try:
        order = await client.load_order(order_id)
    except Exception as error:
        return handle_error(f"Failed to retrieve order {order_id}", error)
    return format_success(order)


async def create_draft_order(
    client: ShopifyClient,
    line_items: list[DraftOrderLineItem],
    email: str,
    shipping_address: MailingAddress,
    note: str | None = None,
) -> ToolResponse:
    """Create a draft order billed to the shipping address."""
    draft_input: DraftOrderInput = {
        "lineItems": line_items,
        "email": email,
        "shippingAddress": shipping_address,
        "billingAddress": shipping_address,
        "tags": "",
        "note": note or "",
    }
    try:
        draft = await client.create_draft_order(draft_input)
    except Exception as error:
        return handle_error("Failed to create draft order", error)
    return text_response(
        f"Successfully created draft order:\nID: {draft.draft_order_id}\n"
        f"Name: {draft.draft_order_name}"
    )


async def complete_draft_order(
    client: ShopifyClient, draft_order_id: str, variant_id: str
) -> ToolResponse:
    try:
        completed = await client.complete_draft_order(draft_order_id, variant_id)
    except Exception as error:
        return handle_error(f"Failed to complete draft order {draft_order_id}", error)
    return text_response(
        "Successfully completed draft order:\n"
        f"Draft Order ID: {completed.draft_order_id}\n"
        f"Draft Order Name: {completed.draft_order_name}\n"
        f"Order ID: {completed.order_id}"
    )
