"""Product and variant tool handlers."""

from __future__ import annotations

from ..domain.formatting import format_product, format_variant
from ..protocols import ShopifyClient
from ..types import InventoryAction, NewProduct, ProductUpdate
from .responses import ToolResponse, format_success, handle_error, text_response


def _pagination_hint(next_cursor: str | None) -> str:
    if next_cursor:
        return f'\n\nMore products available. Use after: "{next_cursor}" to get the next page.'
    return ""


async def get_products(
    client: ShopifyClient,
    search_title: str | None = None,
    limit: int = 10,
    after: str | None = None,
) -> ToolResponse:
    try:
        page = await client.load_products(search_title, limit, after)
    except Exception as error:
        return handle_error("Failed to retrieve products", error)
    formatted = "\n".join(format_product(product) for product in page.products)
    return text_response(
        f"Found {len(page.products)} products with currency {page.currency_code}:\n"
        f"{formatted}{_pagination_hint(page.next_cursor)}"
    )


async def get_products_by_collection(
    client: ShopifyClient,
    collection_id: str,
    limit: int = 10,
    after: str | None = None,
) -> ToolResponse:
    try:
        page = await client.load_products_by_collection_id(collection_id, limit, after)
    except Exception as error:
        return handle_error("Failed to retrieve products from collection", error)
    formatted = "\n".join(format_product(product) for product in page.products)
    return text_response(
        f"Found {len(page.products)} products in collection {collection_id} "
        f"with currency {page.currency_code}:\n{formatted}{_pagination_hint(page.next_cursor)}"
    )


async def get_products_by_ids(client: ShopifyClient, product_ids: list[str]) -> ToolResponse:
    try:
        page = await client.load_products_by_ids(product_ids)
    except Exception as error:
        return handle_error("Failed to retrieve products by IDs", error)
    formatted = "\n".join(format_product(product) for product in page.products)
    return text_response(
        f"Found {len(page.products)} products with currency {page.currency_code}:\n{formatted}"
    )


async def get_variants_by_ids(client: ShopifyClient, variant_ids: list[str]) -> ToolResponse:
    try:
        result = await client.load_variants_by_ids(variant_ids)
    except Exception as error:
        return handle_error("Failed to retrieve variants by IDs", error)
    formatted = "\n".join(format_variant(variant) for variant in result.variants)
    return text_response(
        f"Found {len(result.variants)} variants with currency {result.currency_code}:\n"
        f"{formatted}"
    )


async def create_product(client: ShopifyClient, product: NewProduct) -> ToolResponse:
    try:
        created = await client.create_product(product)
    except Exception as error:
        return handle_error("Failed to create product", error)
    return text_response(f"Successfully created product:\n{format_product(created)}")


async def update_product(
    client: ShopifyClient, product_id: str, update: ProductUpdate
) -> ToolResponse:
    if not update:
        return handle_error(
            f"Failed to update product {product_id}",
            ValueError("at least one field to update is required"),
        )
    try:
        updated = await client.update_product(product_id, update)
    except Exception as error:
        return handle_error(f"Failed to update product {product_id}", error)
    return text_response(f"Successfully updated product:\n{format_product(updated)}")


async def manage_inventory(
    client: ShopifyClient,
    inventory_item_id: str,
    location_id: str,
    action: InventoryAction,
    quantity: int,
    reason: str = "correction",
) -> ToolResponse:
    try:
        change = await client.manage_inventory(
            inventory_item_id, location_id, action, quantity, reason
        )
    except Exception as error:
        return handle_error(f"Failed to {action.lower()} inventory", error)
    return format_success(
        {
            "inventoryItemId": inventory_item_id,
            "locationId": location_id,
            "action": action,
            "previousQuantity": change.previous_quantity,
            "newQuantity": change.new_quantity,
        }
    )


async def search_products_by_price_range(
    client: ShopifyClient,
    min_price: float,
    max_price: float,
    limit: int = 10,
    after: str | None = None,
) -> ToolResponse:
    try:
        page = await client.search_products_by_price_range(min_price, max_price, limit, after)
    except Exception as error:
        return handle_error("Failed to search products by price range", error)
    formatted = "\n".join(format_product(product) for product in page.products)
    return text_response(
        f"Found {len(page.products)} products priced {min_price:.2f}-{max_price:.2f} "
        f"{page.currency_code}:\n{formatted}{_pagination_hint(page.next_cursor)}"
    )
