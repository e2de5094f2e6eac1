"""Shop and collection tool handlers."""

from __future__ import annotations

from ..protocols import ShopifyClient
from .responses import ToolResponse, format_success, handle_error


async def get_collections(
    client: ShopifyClient,
    limit: int | None = None,
    name: str | None = None,
    since_id: str | None = None,
) -> ToolResponse:
    try:
        page = await client.load_collections(limit=limit or 10, name=name, since_id=since_id)
    except Exception as error:
        return handle_error("Failed to retrieve collections", error)
    return format_success(page)


async def get_shop(client: ShopifyClient) -> ToolResponse:
    try:
        shop = await client.load_shop()
    except Exception as error:
        return handle_error("Failed to retrieve shop details", error)
    return format_success(shop)
