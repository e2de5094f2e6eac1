"""MCP server exposing the Shopify tools.

Each tool delegates to a handler in `shopify_tools.tools`, which never raises.
A handler's error envelope is re-raised here as `ToolError` so FastMCP marks
the result with `isError`.

Usage example:
    from shopify_tools.server import create_server

    server = create_server(client)
    server.run()  # stdio transport
"""

from __future__ import annotations

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from .protocols import ShopifyClient
from .tools import catalog, customers, discounts, orders, products, shop, webhooks
from .tools.responses import ToolResponse, is_error, response_text
from .types import (
    DiscountValueType,
    DraftOrderLineItem,
    ImageAction,
    InventoryAction,
    MailingAddress,
    MembershipAction,
    MetafieldOperation,
    NewProduct,
    NewVariant,
    OrderSortKey,
    OrdersQuery,
    ProductBulkUpdate,
    ProductImage,
    ProductStatus,
    ProductUpdate,
    VariantOperation,
    VariantPriceUpdate,
    WebhookAction,
)

SERVER_NAME = "shopify-tools"

TOOL_NAMES = (
    "get-products",
    "get-products-by-collection",
    "get-products-by-ids",
    "get-variants-by-ids",
    "create-product",
    "update-product",
    "manage-inventory",
    "search-products-by-price-range",
    "bulk-update-products",
    "bulk-variant-operations",
    "bulk-update-variant-prices",
    "manage-product-metafields",
    "manage-product-collections",
    "manage-product-images",
    "get-customers",
    "tag-customer",
    "get-orders",
    "get-order",
    "create-draft-order",
    "complete-draft-order",
    "get-collections",
    "get-shop",
    "create-discount",
    "delete-discount",
    "get-price-rule",
    "manage-webhook",
)


def unwrap(response: ToolResponse) -> str:
    """Return the envelope text, raising `ToolError` for error envelopes."""
    text = response_text(response)
    if is_error(response):
        raise ToolError(text)
    return text


def create_server(client: ShopifyClient, *, name: str = SERVER_NAME) -> FastMCP:
    """Build a FastMCP server with every Shopify tool bound to `client`."""
    mcp = FastMCP(name, instructions="Read and manage a Shopify store through the Admin API.")
    _register_product_tools(mcp, client)
    _register_catalog_tools(mcp, client)
    _register_customer_tools(mcp, client)
    _register_order_tools(mcp, client)
    _register_shop_tools(mcp, client)
    _register_discount_tools(mcp, client)
    _register_webhook_tools(mcp, client)
    return mcp


def _register_product_tools(mcp: FastMCP, client: ShopifyClient) -> None:
    @mcp.tool(name="get-products", description="Get all products or search by title")
    async def get_products(
        limit: Annotated[int, Field(description="Maximum number of products to return", gt=0)],
        search_title: Annotated[
            str | None, Field(description="Filter products by title")
        ] = None,
        after: Annotated[str | None, Field(description="Next page cursor")] = None,
    ) -> str:
        return unwrap(await products.get_products(client, search_title, limit, after))

    @mcp.tool(
        name="get-products-by-collection", description="Get products from a specific collection"
    )
    async def get_products_by_collection(
        collection_id: Annotated[
            str, Field(description="ID of the collection to get products from")
        ],
        limit: Annotated[
            int, Field(description="Maximum number of products to return", gt=0)
        ] = 10,
        after: Annotated[str | None, Field(description="Next page cursor")] = None,
    ) -> str:
        return unwrap(
            await products.get_products_by_collection(client, collection_id, limit, after)
        )

    @mcp.tool(name="get-products-by-ids", description="Get products by their IDs")
    async def get_products_by_ids(
        product_ids: Annotated[list[str], Field(description="Array of product IDs to retrieve")],
    ) -> str:
        return unwrap(await products.get_products_by_ids(client, product_ids))

    @mcp.tool(name="get-variants-by-ids", description="Get product variants by their IDs")
    async def get_variants_by_ids(
        variant_ids: Annotated[list[str], Field(description="Array of variant IDs to retrieve")],
    ) -> str:
        return unwrap(await products.get_variants_by_ids(client, variant_ids))

    @mcp.tool(name="create-product", description="Create a product with optional variants")
    async def create_product(
        title: Annotated[str, Field(description="Product title")],
        description: Annotated[str, Field(description="Product description (HTML allowed)")],
        vendor: Annotated[str | None, Field(description="Product vendor")] = None,
        product_type: Annotated[str | None, Field(description="Product type")] = None,
        tags: Annotated[list[str] | None, Field(description="Product tags")] = None,
        variants: Annotated[
            list[NewVariant] | None,
            Field(description="Variants with title, price and optional sku/inventory"),
        ] = None,
    ) -> str:
        product: NewProduct = {"title": title, "description": description}
        if vendor is not None:
            product["vendor"] = vendor
        if product_type is not None:
            product["productType"] = product_type
        if tags is not None:
            product["tags"] = tags
        if variants:
            product["variants"] = variants
        return unwrap(await products.create_product(client, product))

    @mcp.tool(name="update-product", description="Update fields of an existing product")
    async def update_product(
        product_id: Annotated[str, Field(description="ID of the product to update")],
        title: Annotated[str | None, Field(description="New title")] = None,
        description: Annotated[str | None, Field(description="New description")] = None,
        status: Annotated[
            ProductStatus | None, Field(description="ACTIVE, ARCHIVED or DRAFT")
        ] = None,
        vendor: Annotated[str | None, Field(description="New vendor")] = None,
        product_type: Annotated[str | None, Field(description="New product type")] = None,
        tags: Annotated[list[str] | None, Field(description="Replacement tags")] = None,
    ) -> str:
        update: ProductUpdate = {}
        if title is not None:
            update["title"] = title
        if description is not None:
            update["description"] = description
        if status is not None:
            update["status"] = status
        if vendor is not None:
            update["vendor"] = vendor
        if product_type is not None:
            update["productType"] = product_type
        if tags is not None:
            update["tags"] = tags
        return unwrap(await products.update_product(client, product_id, update))

    @mcp.tool(
        name="manage-inventory",
        description="Set or adjust the available inventory of an item at a location",
    )
    async def manage_inventory(
        inventory_item_id: Annotated[str, Field(description="Inventory item ID of the variant")],
        location_id: Annotated[str, Field(description="Location ID")],
        action: Annotated[
            InventoryAction, Field(description="SET an absolute quantity or ADJUST by a delta")
        ],
        quantity: Annotated[int, Field(description="Quantity to set, or delta to apply")],
        reason: Annotated[str, Field(description="Reason recorded by Shopify")] = "correction",
    ) -> str:
        return unwrap(
            await products.manage_inventory(
                client, inventory_item_id, location_id, action, quantity, reason
            )
        )


def _register_catalog_tools(mcp: FastMCP, client: ShopifyClient) -> None:
    @mcp.tool(
        name="search-products-by-price-range",
        description="Find products with a variant priced within a range",
    )
    async def search_products_by_price_range(
        min_price: Annotated[float, Field(description="Lowest variant price", ge=0)],
        max_price: Annotated[float, Field(description="Highest variant price", ge=0)],
        limit: Annotated[
            int, Field(description="Maximum number of products to return", gt=0)
        ] = 10,
        after: Annotated[str | None, Field(description="Next page cursor")] = None,
    ) -> str:
        return unwrap(
            await products.search_products_by_price_range(
                client, min_price, max_price, limit, after
            )
        )

    @mcp.tool(name="bulk-update-products", description="Update fields of several products")
    async def bulk_update_products(
        updates: Annotated[
            list[ProductBulkUpdate],
            Field(description="Updates with productId and the fields to change", min_length=1),
        ],
    ) -> str:
        return unwrap(await catalog.bulk_update_products(client, updates))

    @mcp.tool(
        name="bulk-variant-operations",
        description="Create, update or delete product variants in bulk",
    )
    async def bulk_variant_operations(
        operations: Annotated[
            list[VariantOperation],
            Field(
                description="Operations with action, productId and variantData "
                "(variantData.id required for UPDATE and DELETE)",
                min_length=1,
            ),
        ],
    ) -> str:
        return unwrap(await catalog.bulk_variant_operations(client, operations))

    @mcp.tool(name="bulk-update-variant-prices", description="Set new prices for variants")
    async def bulk_update_variant_prices(
        updates: Annotated[
            list[VariantPriceUpdate],
            Field(description="Array of variantId and newPrice", min_length=1),
        ],
    ) -> str:
        return unwrap(await catalog.bulk_update_variant_prices(client, updates))

    @mcp.tool(name="manage-product-metafields", description="Set or delete product metafields")
    async def manage_product_metafields(
        product_id: Annotated[str, Field(description="ID of the product")],
        operations: Annotated[
            list[MetafieldOperation],
            Field(
                description="Operations with action, namespace and key "
                "(value and type required for SET)",
                min_length=1,
            ),
        ],
    ) -> str:
        return unwrap(await catalog.manage_product_metafields(client, product_id, operations))

    @mcp.tool(
        name="manage-product-collections",
        description="Add products to or remove them from collections",
    )
    async def manage_product_collections(
        action: Annotated[MembershipAction, Field(description="ADD or REMOVE")],
        product_ids: Annotated[list[str], Field(description="Product IDs", min_length=1)],
        collection_ids: Annotated[list[str], Field(description="Collection IDs", min_length=1)],
    ) -> str:
        return unwrap(
            await catalog.manage_product_collections(client, action, product_ids, collection_ids)
        )

    @mcp.tool(name="manage-product-images", description="Add, update or remove product images")
    async def manage_product_images(
        product_id: Annotated[str, Field(description="ID of the product")],
        action: Annotated[ImageAction, Field(description="ADD, UPDATE or REMOVE")],
        images: Annotated[
            list[ProductImage],
            Field(
                description="Images with url (ADD) or media id (UPDATE, REMOVE) "
                "and optional altText",
                min_length=1,
            ),
        ],
    ) -> str:
        return unwrap(await catalog.manage_product_images(client, product_id, action, images))


def _register_customer_tools(mcp: FastMCP, client: ShopifyClient) -> None:
    @mcp.tool(name="get-customers", description="Get shopify customers with pagination support")
    async def get_customers(
        limit: Annotated[
            int | None, Field(description="Maximum number of customers to return", gt=0)
        ] = None,
        next: Annotated[str | None, Field(description="Next page cursor")] = None,
    ) -> str:
        return unwrap(await customers.get_customers(client, limit, next))

    @mcp.tool(name="tag-customer", description="Add tags to a customer")
    async def tag_customer(
        customer_id: Annotated[str, Field(description="Customer ID to tag")],
        tags: Annotated[list[str], Field(description="Tags to add to the customer")],
    ) -> str:
        return unwrap(await customers.tag_customer(client, customer_id, tags))


def _register_order_tools(mcp: FastMCP, client: ShopifyClient) -> None:
    @mcp.tool(name="get-orders", description="Get orders with advanced filtering and sorting")
    async def get_orders(
        first: Annotated[int | None, Field(description="Limit of orders to return", gt=0)] = None,
        after: Annotated[str | None, Field(description="Next page cursor")] = None,
        query: Annotated[
            str | None, Field(description="Filter orders using query syntax")
        ] = None,
        sort_key: Annotated[OrderSortKey | None, Field(description="Field to sort by")] = None,
        reverse: Annotated[bool | None, Field(description="Reverse sort order")] = None,
    ) -> str:
        orders_query: OrdersQuery = {}
        if first is not None:
            orders_query["first"] = first
        if after is not None:
            orders_query["after"] = after
        if query is not None:
            orders_query["query"] = query
        if sort_key is not None:
            orders_query["sortKey"] = sort_key
        if reverse is not None:
            orders_query["reverse"] = reverse
        return unwrap(await orders.get_orders(client, orders_query))

    @mcp.tool(name="get-order", description="Get a single order by ID")
    async def get_order(
        order_id: Annotated[str, Field(description="ID of the order to retrieve")],
    ) -> str:
        return unwrap(await orders.get_order(client, order_id))

    @mcp.tool(name="create-draft-order", description="Create a draft order")
    async def create_draft_order(
        line_items: Annotated[
            list[DraftOrderLineItem],
            Field(description="Array of items with variantId and quantity", min_length=1),
        ],
        email: Annotated[str, Field(description="Customer email")],
        shipping_address: Annotated[MailingAddress, Field(description="Shipping address details")],
        note: Annotated[str | None, Field(description="Optional note for the order")] = None,
    ) -> str:
        return unwrap(
            await orders.create_draft_order(client, line_items, email, shipping_address, note)
        )

    @mcp.tool(name="complete-draft-order", description="Complete a draft order")
    async def complete_draft_order(
        draft_order_id: Annotated[str, Field(description="ID of the draft order to complete")],
        variant_id: Annotated[str, Field(description="ID of the variant in the draft order")],
    ) -> str:
        return unwrap(await orders.complete_draft_order(client, draft_order_id, variant_id))


def _register_shop_tools(mcp: FastMCP, client: ShopifyClient) -> None:
    @mcp.tool(name="get-collections", description="Get collections from the shop")
    async def get_collections(
        limit: Annotated[
            int | None, Field(description="Maximum number of collections to return", gt=0)
        ] = None,
        name: Annotated[str | None, Field(description="Filter collections by name")] = None,
        since_id: Annotated[
            str | None,
            Field(description="Return collections after this id (next_since_id of a prior page)"),
        ] = None,
    ) -> str:
        return unwrap(await shop.get_collections(client, limit, name, since_id))

    @mcp.tool(name="get-shop", description="Get shop details")
    async def get_shop() -> str:
        return unwrap(await shop.get_shop(client))


def _register_discount_tools(mcp: FastMCP, client: ShopifyClient) -> None:
    @mcp.tool(name="create-discount", description="Create a basic discount code")
    async def create_discount(
        title: Annotated[str, Field(description="Title of the discount")],
        code: Annotated[str, Field(description="Discount code that customers will enter")],
        value_type: Annotated[
            DiscountValueType,
            Field(description="Type of discount ('percentage' or 'fixed_amount')"),
        ],
        value: Annotated[
            float, Field(description="Discount value (percentage as decimal or fixed amount)")
        ],
        starts_at: Annotated[str, Field(description="Start date in ISO format")],
        applies_once_per_customer: Annotated[
            bool, Field(description="Whether discount can be used only once per customer")
        ],
        ends_at: Annotated[str | None, Field(description="Optional end date in ISO format")] = None,
        usage_limit: Annotated[
            int | None, Field(description="Total number of times the code may be used")
        ] = None,
        include_collection_ids: Annotated[
            list[str] | None, Field(description="Collections the discount applies to")
        ] = None,
    ) -> str:
        return unwrap(
            await discounts.create_discount(
                client,
                title=title,
                code=code,
                value_type=value_type,
                value=value,
                starts_at=starts_at,
                applies_once_per_customer=applies_once_per_customer,
                ends_at=ends_at,
                usage_limit=usage_limit,
                include_collection_ids=include_collection_ids,
            )
        )

    @mcp.tool(name="delete-discount", description="Delete a discount code")
    async def delete_discount(
        discount_id: Annotated[str, Field(description="ID of the discount code to delete")],
    ) -> str:
        return unwrap(await discounts.delete_discount(client, discount_id))

    @mcp.tool(name="get-price-rule", description="Get a price rule by ID")
    async def get_price_rule(
        price_rule_id: Annotated[str, Field(description="ID of the price rule")],
    ) -> str:
        return unwrap(await discounts.get_price_rule(client, price_rule_id))


def _register_webhook_tools(mcp: FastMCP, client: ShopifyClient) -> None:
    @mcp.tool(name="manage-webhook", description="Subscribe, find, or unsubscribe webhooks")
    async def manage_webhook(
        action: Annotated[
            WebhookAction,
            Field(description="Action to perform ('subscribe', 'find', 'unsubscribe')"),
        ],
        callback_url: Annotated[str, Field(description="Webhook callback URL")],
        topic: Annotated[
            str, Field(description="Webhook topic, e.g. 'orders/updated' or 'ORDERS_UPDATED'")
        ],
        webhook_id: Annotated[
            str | None, Field(description="Webhook ID (required for unsubscribe)")
        ] = None,
    ) -> str:
        return unwrap(
            await webhooks.manage_webhook(client, action, callback_url, topic, webhook_id)
        )
