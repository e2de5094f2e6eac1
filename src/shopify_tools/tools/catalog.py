"""Bulk catalog tool handlers: variants, prices, metafields, collections and images."""

from __future__ import annotations

from ..domain.formatting import format_product
from ..protocols import ShopifyClient
from ..types import (
    ImageAction,
    MembershipAction,
    MetafieldOperation,
    ProductBulkUpdate,
    ProductImage,
    VariantOperation,
    VariantPriceUpdate,
)
from .responses import ToolResponse, format_success, handle_error, text_response


async def bulk_variant_operations(
    client: ShopifyClient, operations: list[VariantOperation]
) -> ToolResponse:
    try:
        results = await client.bulk_variant_operations(operations)
    except Exception as error:
        return handle_error("Failed to apply variant operations", error)
    return format_success({"batches": results})


async def bulk_update_variant_prices(
    client: ShopifyClient, updates: list[VariantPriceUpdate]
) -> ToolResponse:
    try:
        changed = await client.bulk_update_variant_prices(updates)
    except Exception as error:
        return handle_error("Failed to update variant prices", error)
    return format_success({"updatedVariants": changed})


async def bulk_update_products(
    client: ShopifyClient, updates: list[ProductBulkUpdate]
) -> ToolResponse:
    try:
        updated = await client.bulk_update_products(updates)
    except Exception as error:
        return handle_error("Failed to update products", error)
    formatted = "\n".join(format_product(product) for product in updated)
    return text_response(f"Successfully updated {len(updated)} products:\n{formatted}")


async def manage_product_metafields(
    client: ShopifyClient, product_id: str, operations: list[MetafieldOperation]
) -> ToolResponse:
    try:
        changes = await client.manage_product_metafields(product_id, operations)
    except Exception as error:
        return handle_error(f"Failed to manage metafields of product {product_id}", error)
    return format_success(changes)


async def manage_product_collections(
    client: ShopifyClient,
    action: MembershipAction,
    product_ids: list[str],
    collection_ids: list[str],
) -> ToolResponse:
    try:
        updated = await client.manage_product_collections(action, product_ids, collection_ids)
    except Exception as error:
        return handle_error(f"Failed to {action.lower()} products in collections", error)
    verb = "Added" if action == "ADD" else "Removed"
    direction = "to" if action == "ADD" else "from"
    return text_response(
        f"{verb} {len(product_ids)} products {direction} {len(updated)} collections:\n"
        + "\n".join(updated)
    )


async def manage_product_images(
    client: ShopifyClient, product_id: str, action: ImageAction, images: list[ProductImage]
) -> ToolResponse:
    try:
        media = await client.manage_product_images(product_id, action, images)
    except Exception as error:
        return handle_error(f"Failed to {action.lower()} images of product {product_id}", error)
    return format_success({"productId": product_id, "action": action, "media": media})
