"""Customer tool handlers."""

from __future__ import annotations

from ..protocols import ShopifyClient
from .responses import ToolResponse, error_response, format_success, handle_error, text_response


async def get_customers(
    client: ShopifyClient, limit: int | None = None, next_page_info: str | None = None
) -> ToolResponse:
    try:
        page = await client.load_customers(limit, next_page_info)
    except Exception as error:
        return handle_error("Failed to retrieve customers", error)
    return format_success({"customers": page.customers, "next": page.next_page_info})


async def tag_customer(client: ShopifyClient, customer_id: str, tags: list[str]) -> ToolResponse:
    try:
        tagged = await client.tag_customer(tags, customer_id)
    except Exception as error:
        return handle_error(f"Failed to tag customer {customer_id}", error)
    if not tagged:
        return error_response(f"Failed to tag customer {customer_id}")
    return text_response(
        f"Successfully tagged customer {customer_id} with tags: {', '.join(tags)}"
    )
