"""Canonical Shopify Admin client used by every tool.

Each call goes through the shared `HttpInvoker` (rate limited, classified
errors) wrapped in `with_retry`; mutations only retry failures where the
request never arrived. Mutation `userErrors` are classified here, and
connection shapes are flattened before anything reaches the tool layer.

Usage example:
    from shopify_tools.application.shopify_client import ShopifyAdminClient
    from shopify_tools.infrastructure import RetryPolicy, TTLCache

    client = ShopifyAdminClient(invoker=invoker, cache=TTLCache(), retry_policy=RetryPolicy())
    page = await client.load_products("shirt", limit=5)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar, cast, override

from ..domain.discounts import build_basic_discount_input, validate_discount
from ..domain.error_classification import classify_user_error
from ..domain.gid import id_from_gid, to_gid, to_gids
from ..domain.pagination import flatten_edges, flatten_nodes, page_cursor, parse_next_page_info
from ..exceptions import ErrorKind, ShopifyClientError
from ..infrastructure.resilience import RetryPolicy, with_retry
from ..observability import get_logger
from ..protocols import Cache, HttpInvoker, ShopifyClient, Sleeper
from ..types import (
    BasicDiscountInput,
    CollectionsPage,
    CompletedDraftOrder,
    CustomersPage,
    DiscountCode,
    DraftOrder,
    DraftOrderInput,
    ImageAction,
    InventoryAction,
    InventoryChange,
    JsonObject,
    MembershipAction,
    MetafieldChanges,
    MetafieldOperation,
    NewProduct,
    OrdersPage,
    OrdersQuery,
    ProductBulkUpdate,
    ProductImage,
    ProductsPage,
    ProductUpdate,
    RestResponse,
    VariantAction,
    VariantBatchResult,
    VariantData,
    VariantOperation,
    VariantPriceUpdate,
    VariantsResult,
    Webhook,
)
from . import queries

T = TypeVar("T")

logger = get_logger("shopify_tools.application.shopify_client")

SHOP_CACHE_KEY = "shop"
CURRENCY_CACHE_KEY = "shop:currency_code"
DEFAULT_ORDERS_PAGE_SIZE = 10


def webhook_topic_to_graphql(topic: str) -> str:
    """`orders/updated` -> `ORDERS_UPDATED`; enum-style values pass through."""
    return topic.strip().replace("/", "_").upper()


def webhook_topic_from_graphql(topic: str) -> str:
    """`ORDERS_UPDATED` -> `orders/updated`, `DRAFT_ORDERS_CREATE` -> `draft_orders/create`."""
    resource, _, event = topic.strip().lower().rpartition("_")
    if not resource:
        return event
    return f"{resource}/{event}"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _mapping(value: object) -> JsonObject:
    return value if isinstance(value, dict) else {}


def _list(value: object) -> list[JsonObject]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _without_none(values: Mapping[str, object]) -> JsonObject:
    return {key: value for key, value in values.items() if value is not None}


def normalise_product(node: Mapping[str, object]) -> JsonObject:
    """Replace the `variants` / `images` connections with plain lists."""
    product = dict(node)
    product["variants"] = flatten_edges(node.get("variants"))
    product["images"] = flatten_edges(node.get("images"))
    return product


def _webhook(node: Mapping[str, object]) -> Webhook:
    endpoint = _mapping(node.get("endpoint"))
    return Webhook(
        id=str(node.get("id", "")),
        topic=webhook_topic_from_graphql(str(node.get("topic", ""))),
        callback_url=str(endpoint.get("callbackUrl", "")),
    )


def _tag_list(tags: str | list[str] | None) -> list[str]:
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [tag.strip() for tag in tags if tag.strip()]


def _price(value: float) -> str:
    return f"{float(value):.2f}"


def _variant_input(data: VariantData, action: VariantAction) -> JsonObject:
    """Map variant fields onto `ProductVariantsBulkInput`."""
    weight = data.get("weight")
    measurement = (
        {"weight": {"value": weight, "unit": data.get("weightUnit", "KILOGRAMS")}}
        if weight is not None
        else None
    )
    inventory_item = _without_none(
        {
            "sku": data.get("sku"),
            "requiresShipping": data.get("requiresShipping"),
            "measurement": measurement,
        }
    )
    price = data.get("price")
    title = data.get("title")
    return _without_none(
        {
            "id": to_gid("ProductVariant", str(data.get("id"))) if action == "UPDATE" else None,
            "price": _price(price) if price is not None else None,
            "barcode": data.get("barcode"),
            "taxable": data.get("taxable"),
            "inventoryItem": inventory_item or None,
            # New variants are told apart by their single "Title" option value.
            "optionValues": (
                [{"optionName": "Title", "name": title}] if title and action == "CREATE" else None
            ),
        }
    )


@dataclass(frozen=True)
class ShopifyAdminClient(ShopifyClient):
    """Shopify operations over the Admin REST and GraphQL APIs."""

    invoker: HttpInvoker
    cache: Cache
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    sleep: Sleeper = field(default=asyncio.sleep, repr=False)

    async def _retry(
        self, operation: Callable[[], Awaitable[T]], policy: RetryPolicy | None = None
    ) -> T:
        return await with_retry(operation, policy or self.retry_policy, sleep=self.sleep)

    async def _graphql(
        self,
        query: str,
        variables: Mapping[str, object] | None = None,
        context: Mapping[str, object] | None = None,
        *,
        policy: RetryPolicy | None = None,
    ) -> JsonObject:
        return await self._retry(
            lambda: self.invoker.graphql(query, variables, context=context), policy
        )

    async def _rest(
        self,
        method: str,
        resource: str,
        *,
        params: Mapping[str, object] | None = None,
        json_body: Mapping[str, object] | None = None,
        context: Mapping[str, object] | None = None,
    ) -> RestResponse:
        return await self._retry(
            lambda: self.invoker.rest(
                method, resource, params=params, json_body=json_body, context=context
            )
        )

    async def _mutate(
        self,
        mutation: str,
        name: str,
        variables: Mapping[str, object],
        context: Mapping[str, object],
        *,
        errors_field: str = "userErrors",
    ) -> JsonObject:
        """Run a mutation and raise a classified error for any `userErrors`.

        Mutations are not idempotent, so they are only retried when the
        request provably never reached Shopify.
        """
        data = await self._graphql(
            mutation, variables, context, policy=self.retry_policy.for_unsafe_operations()
        )
        payload = _mapping(data.get(name))
        user_errors = payload.get(errors_field)
        if isinstance(user_errors, list) and user_errors:
            raise classify_user_error(user_errors, context)
        return payload

    def id_from_gid(self, gid: str) -> str:
        return id_from_gid(gid)

    @override
    async def load_shop(self) -> JsonObject:
        async def fetch() -> JsonObject:
            response = await self._rest("GET", "shop", context={"resource": "shop"})
            return _mapping(response.data.get("shop"))

        return await self.cache.get_or_set(SHOP_CACHE_KEY, fetch)

    async def load_currency_code(self) -> str:
        async def fetch() -> str:
            data = await self._graphql(queries.SHOP_CURRENCY_QUERY, context={"query": "shop"})
            return str(_mapping(data.get("shop")).get("currencyCode", ""))

        return await self.cache.get_or_set(CURRENCY_CACHE_KEY, fetch)

    @override
    async def load_products(
        self, search_title: str | None, limit: int, after: str | None = None
    ) -> ProductsPage:
        search = search_title.strip() if search_title else ""
        query = f"title:*{search}*" if search and search != "*" else None
        variables = _without_none({"first": limit, "after": after, "query": query})
        data = await self._graphql(
            queries.PRODUCTS_QUERY, variables, {"searchTitle": search_title, "limit": limit}
        )
        connection = data.get("products")
        products = [normalise_product(node) for node in flatten_edges(connection)]
        logger.debug("Loaded %s products", len(products))
        return ProductsPage(
            products=products,
            currency_code=await self.load_currency_code(),
            next_cursor=page_cursor(connection).next_cursor,
        )

    @override
    async def load_products_by_collection_id(
        self, collection_id: str, limit: int, after: str | None = None
    ) -> ProductsPage:
        variables = _without_none(
            {"id": to_gid("Collection", collection_id), "first": limit, "after": after}
        )
        data = await self._graphql(
            queries.PRODUCTS_BY_COLLECTION_QUERY,
            variables,
            {"collectionId": collection_id, "limit": limit},
        )
        collection = data.get("collection")
        if not isinstance(collection, dict):
            raise ShopifyClientError(
                ErrorKind.INPUT,
                f"Collection {collection_id} not found",
                context_data={"collectionId": collection_id},
            )
        connection = collection.get("products")
        return ProductsPage(
            products=[normalise_product(node) for node in flatten_edges(connection)],
            currency_code=await self.load_currency_code(),
            next_cursor=page_cursor(connection).next_cursor,
        )

    @override
    async def load_products_by_ids(self, product_ids: list[str]) -> ProductsPage:
        data = await self._graphql(
            queries.PRODUCTS_BY_IDS_QUERY,
            {"ids": to_gids("Product", product_ids)},
            {"productIds": product_ids},
        )
        nodes = [node for node in flatten_nodes(data) if node.get("__typename") == "Product"]
        return ProductsPage(
            products=[normalise_product(node) for node in nodes],
            currency_code=await self.load_currency_code(),
        )

    @override
    async def load_variants_by_ids(self, variant_ids: list[str]) -> VariantsResult:
        data = await self._graphql(
            queries.VARIANTS_BY_IDS_QUERY,
            {"ids": to_gids("ProductVariant", variant_ids)},
            {"variantIds": variant_ids},
        )
        variants = [
            node for node in flatten_nodes(data) if node.get("__typename") == "ProductVariant"
        ]
        return VariantsResult(variants=variants, currency_code=await self.load_currency_code())

    @override
    async def create_product(self, product: NewProduct) -> JsonObject:
        variants = [
            _without_none(
                {
                    "title": variant["title"],
                    "price": str(variant["price"]),
                    "sku": variant.get("sku"),
                    "inventoryQuantity": variant.get("inventory"),
                    "requiresShipping": variant.get("requiresShipping"),
                    "taxable": variant.get("taxable"),
                }
            )
            for variant in product.get("variants", [])
        ]
        product_input = _without_none(
            {
                "title": product["title"],
                "descriptionHtml": product.get("description"),
                "vendor": product.get("vendor"),
                "productType": product.get("productType"),
                "tags": product.get("tags"),
                "variants": variants or None,
            }
        )
        payload = await self._mutate(
            queries.PRODUCT_CREATE_MUTATION,
            "productCreate",
            {"input": product_input},
            {"title": product["title"]},
        )
        logger.info("Created product %s", _mapping(payload.get("product")).get("id"))
        return normalise_product(_mapping(payload.get("product")))

    @override
    async def update_product(self, product_id: str, update: ProductUpdate) -> JsonObject:
        product_input = _without_none(
            {
                "id": to_gid("Product", product_id),
                "title": update.get("title"),
                "descriptionHtml": update.get("description"),
                "status": update.get("status"),
                "vendor": update.get("vendor"),
                "productType": update.get("productType"),
                "tags": update.get("tags"),
            }
        )
        payload = await self._mutate(
            queries.PRODUCT_UPDATE_MUTATION,
            "productUpdate",
            {"input": product_input},
            {"productId": product_id, **update},
        )
        return normalise_product(_mapping(payload.get("product")))

    @override
    async def bulk_update_products(self, updates: list[ProductBulkUpdate]) -> list[JsonObject]:
        """Apply each update with `productUpdate`, in order.

        Every entry is checked before the first request. A failing update
        stops the run; the ones before it stay applied.
        """
        pending: list[tuple[str, ProductUpdate]] = []
        for update in updates:
            fields = cast(
                ProductUpdate, {key: value for key, value in update.items() if key != "productId"}
            )
            if not fields:
                raise ShopifyClientError.invalid_input(
                    f"Update for product {update['productId']} has no fields to change",
                    {"productId": update["productId"]},
                )
            pending.append((update["productId"], fields))
        return [await self.update_product(product_id, fields) for product_id, fields in pending]

    @override
    async def search_products_by_price_range(
        self, min_price: float, max_price: float, limit: int = 10, after: str | None = None
    ) -> ProductsPage:
        context = {"minPrice": min_price, "maxPrice": max_price, "limit": limit}
        if min_price < 0 or max_price < min_price:
            raise ShopifyClientError.invalid_input(
                "Price range must satisfy 0 <= min_price <= max_price", context
            )
        query = f"price:>={_price(min_price)} price:<={_price(max_price)}"
        variables = _without_none({"first": limit, "after": after, "query": query})
        data = await self._graphql(queries.PRODUCTS_QUERY, variables, context)
        connection = data.get("products")
        return ProductsPage(
            products=[normalise_product(node) for node in flatten_edges(connection)],
            currency_code=await self.load_currency_code(),
            next_cursor=page_cursor(connection).next_cursor,
        )

    @override
    async def manage_inventory(
        self,
        inventory_item_id: str,
        location_id: str,
        action: InventoryAction,
        quantity: int,
        reason: str = "correction",
    ) -> InventoryChange:
        """Adjust by, or set on-hand to, `quantity` at one location.

        Shopify reports the change as a delta plus the quantity afterwards;
        the previous quantity is derived from the two.
        """
        item_gid = to_gid("InventoryItem", inventory_item_id)
        location_gid = to_gid("Location", location_id)
        context = {
            "inventoryItemId": inventory_item_id,
            "locationId": location_id,
            "action": action,
            "quantity": quantity,
        }
        if action == "SET":
            name = "inventorySetOnHandQuantities"
            mutation = queries.INVENTORY_SET_ON_HAND_MUTATION
            mutation_input: JsonObject = {
                "reason": reason,
                "setQuantities": [
                    {
                        "inventoryItemId": item_gid,
                        "locationId": location_gid,
                        "quantity": quantity,
                    }
                ],
            }
        elif action == "ADJUST":
            name = "inventoryAdjustQuantities"
            mutation = queries.INVENTORY_ADJUST_MUTATION
            mutation_input = {
                "reason": reason,
                "name": "available",
                "changes": [
                    {"inventoryItemId": item_gid, "locationId": location_gid, "delta": quantity}
                ],
            }
        else:
            raise ShopifyClientError.invalid_input(
                f"Inventory action must be SET or ADJUST, got {action!r}", context
            )

        payload = await self._mutate(mutation, name, {"input": mutation_input}, context)
        changes = _list(_mapping(payload.get("inventoryAdjustmentGroup")).get("changes"))
        if not changes:
            if action == "SET":
                # Shopify records no change when the quantity already matches.
                return InventoryChange(new_quantity=quantity, previous_quantity=quantity)
            raise ShopifyClientError(
                ErrorKind.GENERAL,
                "Shopify did not report the inventory change",
                inner_error=payload,
                context_data=context,
            )
        change = next(
            (item for item in changes if item.get("name") in ("available", "on_hand")),
            changes[0],
        )
        delta = _int(change.get("delta")) or 0
        after = _int(change.get("quantityAfterChange"))
        if after is None:
            if action != "SET":
                raise ShopifyClientError(
                    ErrorKind.GENERAL,
                    "Shopify did not report the inventory quantity after the change",
                    inner_error=change,
                    context_data=context,
                )
            after = quantity
        return InventoryChange(new_quantity=after, previous_quantity=after - delta)

    @override
    async def bulk_variant_operations(
        self, operations: list[VariantOperation]
    ) -> list[VariantBatchResult]:
        """Create, update and delete variants with one bulk mutation per product and action.

        Batches run in the order their first operation appears; a failing
        batch stops the run with earlier batches applied.
        """
        batches: dict[tuple[VariantAction, str], list[VariantData]] = {}
        for operation in operations:
            action = operation["action"]
            data = operation["variantData"]
            context = {"action": action, "productId": operation["productId"]}
            if action not in ("CREATE", "UPDATE", "DELETE"):
                raise ShopifyClientError.invalid_input(
                    f"Variant action must be CREATE, UPDATE or DELETE, got {action!r}", context
                )
            if action != "CREATE" and not data.get("id"):
                raise ShopifyClientError.invalid_input(
                    f"Variant {action} requires variantData.id", context
                )
            batches.setdefault((action, operation["productId"]), []).append(data)

        results: list[VariantBatchResult] = []
        for (action, product_id), batch in batches.items():
            product_gid = to_gid("Product", product_id)
            context = {"action": action, "productId": product_id, "count": len(batch)}
            if action == "DELETE":
                variant_ids = to_gids("ProductVariant", [str(data.get("id")) for data in batch])
                await self._mutate(
                    queries.PRODUCT_VARIANTS_BULK_DELETE_MUTATION,
                    "productVariantsBulkDelete",
                    {"productId": product_gid, "variantsIds": variant_ids},
                    context,
                )
            else:
                if action == "CREATE":
                    mutation = queries.PRODUCT_VARIANTS_BULK_CREATE_MUTATION
                    name = "productVariantsBulkCreate"
                else:
                    mutation = queries.PRODUCT_VARIANTS_BULK_UPDATE_MUTATION
                    name = "productVariantsBulkUpdate"
                payload = await self._mutate(
                    mutation,
                    name,
                    {
                        "productId": product_gid,
                        "variants": [_variant_input(data, action) for data in batch],
                    },
                    context,
                )
                variant_ids = [
                    str(variant.get("id", "")) for variant in _list(payload.get("productVariants"))
                ]
            logger.info("%s %s variants of product %s", action, len(batch), product_id)
            results.append(
                VariantBatchResult(action=action, product_id=product_gid, variant_ids=variant_ids)
            )
        return results

    @override
    async def bulk_update_variant_prices(
        self, updates: list[VariantPriceUpdate]
    ) -> list[JsonObject]:
        """Reprice variants, one `productVariantsBulkUpdate` per parent product."""
        for update in updates:
            if update["newPrice"] < 0:
                raise ShopifyClientError.invalid_input(
                    f"Price for variant {update['variantId']} must not be negative", dict(update)
                )
        if not updates:
            return []

        variant_ids = [update["variantId"] for update in updates]
        data = await self._graphql(
            queries.VARIANT_PRODUCTS_QUERY,
            {"ids": to_gids("ProductVariant", variant_ids)},
            {"variantIds": variant_ids},
        )
        product_by_variant = {
            str(node.get("id")): str(_mapping(node.get("product")).get("id"))
            for node in flatten_nodes(data)
            if node.get("__typename") == "ProductVariant"
        }
        batches: dict[str, list[JsonObject]] = {}
        for update in updates:
            variant_gid = to_gid("ProductVariant", update["variantId"])
            product_gid = product_by_variant.get(variant_gid)
            if product_gid is None:
                raise ShopifyClientError(
                    ErrorKind.VARIANT_NOT_FOUND,
                    f"Product variant {update['variantId']} not found",
                    context_data={"variantId": update["variantId"]},
                )
            batches.setdefault(product_gid, []).append(
                {"id": variant_gid, "price": _price(update["newPrice"])}
            )

        changed: list[JsonObject] = []
        for product_gid, variants in batches.items():
            payload = await self._mutate(
                queries.PRODUCT_VARIANTS_BULK_UPDATE_MUTATION,
                "productVariantsBulkUpdate",
                {"productId": product_gid, "variants": variants},
                {"productId": product_gid, "variantIds": [variant["id"] for variant in variants]},
            )
            changed.extend(
                {"variantId": variant.get("id"), "newPrice": variant.get("price")}
                for variant in _list(payload.get("productVariants"))
            )
        return changed

    @override
    async def manage_product_metafields(
        self, product_id: str, operations: list[MetafieldOperation]
    ) -> MetafieldChanges:
        """Write every SET in one `metafieldsSet`, then delete each DELETE by its id."""
        owner_gid = to_gid("Product", product_id)
        to_set: list[JsonObject] = []
        to_delete: list[MetafieldOperation] = []
        for operation in operations:
            context = {
                "productId": product_id,
                "namespace": operation["namespace"],
                "key": operation["key"],
            }
            if operation["action"] == "SET":
                value = operation.get("value")
                value_type = operation.get("type")
                if value is None or not value_type:
                    raise ShopifyClientError.invalid_input(
                        f"Metafield {operation['namespace']}.{operation['key']} "
                        "needs a value and type to SET",
                        context,
                    )
                to_set.append(
                    {
                        "ownerId": owner_gid,
                        "namespace": operation["namespace"],
                        "key": operation["key"],
                        "value": value,
                        "type": value_type,
                    }
                )
            elif operation["action"] == "DELETE":
                to_delete.append(operation)
            else:
                raise ShopifyClientError.invalid_input(
                    f"Metafield action must be SET or DELETE, got {operation['action']!r}", context
                )

        saved: list[JsonObject] = []
        if to_set:
            payload = await self._mutate(
                queries.METAFIELDS_SET_MUTATION,
                "metafieldsSet",
                {"metafields": to_set},
                {"productId": product_id, "count": len(to_set)},
            )
            saved = _list(payload.get("metafields"))

        deleted: list[str] = []
        for operation in to_delete:
            context = {
                "productId": product_id,
                "namespace": operation["namespace"],
                "key": operation["key"],
            }
            data = await self._graphql(
                queries.PRODUCT_METAFIELD_QUERY,
                {"id": owner_gid, "namespace": operation["namespace"], "key": operation["key"]},
                context,
            )
            metafield_id = _mapping(_mapping(data.get("product")).get("metafield")).get("id")
            if not metafield_id:
                raise ShopifyClientError(
                    ErrorKind.INPUT,
                    f"Metafield {operation['namespace']}.{operation['key']} "
                    f"not found on product {product_id}",
                    context_data=context,
                )
            payload = await self._mutate(
                queries.METAFIELD_DELETE_MUTATION,
                "metafieldDelete",
                {"input": {"id": metafield_id}},
                context,
            )
            deleted.append(str(payload.get("deletedId") or metafield_id))
        return MetafieldChanges(saved=saved, deleted=deleted)

    @override
    async def manage_product_collections(
        self, action: MembershipAction, product_ids: list[str], collection_ids: list[str]
    ) -> list[str]:
        """Add products to, or remove them from, each collection in turn.

        Returns the collection GIDs that were updated. Removal is queued by
        Shopify as a background job.
        """
        if action == "ADD":
            mutation, name = queries.COLLECTION_ADD_PRODUCTS_MUTATION, "collectionAddProducts"
        elif action == "REMOVE":
            mutation, name = queries.COLLECTION_REMOVE_PRODUCTS_MUTATION, "collectionRemoveProducts"
        else:
            raise ShopifyClientError.invalid_input(
                f"Collection action must be ADD or REMOVE, got {action!r}",
                {"collectionIds": collection_ids},
            )
        product_gids = to_gids("Product", product_ids)
        updated: list[str] = []
        for collection_id in collection_ids:
            collection_gid = to_gid("Collection", collection_id)
            await self._mutate(
                mutation,
                name,
                {"id": collection_gid, "productIds": product_gids},
                {"action": action, "collectionId": collection_id, "productIds": product_ids},
            )
            updated.append(collection_gid)
        return updated

    @override
    async def manage_product_images(
        self, product_id: str, action: ImageAction, images: list[ProductImage]
    ) -> list[JsonObject]:
        """Add images by URL, or update or remove existing images by media id."""
        product_gid = to_gid("Product", product_id)
        context = {"productId": product_id, "action": action, "count": len(images)}
        if action not in ("ADD", "UPDATE", "REMOVE"):
            raise ShopifyClientError.invalid_input(
                f"Image action must be ADD, UPDATE or REMOVE, got {action!r}", context
            )
        required = "url" if action == "ADD" else "id"
        if not images or any(not image.get(required) for image in images):
            raise ShopifyClientError.invalid_input(
                f"Image {action} requires `{required}` on every image", context
            )

        if action == "REMOVE":
            media_ids = to_gids("MediaImage", [str(image.get("id")) for image in images])
            payload = await self._mutate(
                queries.PRODUCT_DELETE_MEDIA_MUTATION,
                "productDeleteMedia",
                {"productId": product_gid, "mediaIds": media_ids},
                context,
                errors_field="mediaUserErrors",
            )
            deleted = payload.get("deletedMediaIds")
            return [{"id": media_id} for media_id in deleted] if isinstance(deleted, list) else []

        if action == "ADD":
            mutation, name = queries.PRODUCT_CREATE_MEDIA_MUTATION, "productCreateMedia"
            media = [
                _without_none(
                    {
                        "originalSource": image.get("url"),
                        "alt": image.get("altText"),
                        "mediaContentType": "IMAGE",
                    }
                )
                for image in images
            ]
        else:
            mutation, name = queries.PRODUCT_UPDATE_MEDIA_MUTATION, "productUpdateMedia"
            media = [
                _without_none(
                    {
                        "id": to_gid("MediaImage", str(image.get("id"))),
                        "previewImageSource": image.get("url"),
                        "alt": image.get("altText"),
                    }
                )
                for image in images
            ]
        payload = await self._mutate(
            mutation,
            name,
            {"productId": product_gid, "media": media},
            context,
            errors_field="mediaUserErrors",
        )
        return _list(payload.get("media"))

    @override
    async def load_customers(
        self, limit: int | None = None, next_page_info: str | None = None
    ) -> CustomersPage:
        params = _without_none({"limit": limit, "page_info": next_page_info})
        response = await self._rest(
            "GET", "customers", params=params, context={"resource": "customers", **params}
        )
        return CustomersPage(
            customers=_list(response.data.get("customers")),
            next_page_info=parse_next_page_info(_header(response.headers, "Link")),
        )

    @override
    async def tag_customer(self, tags: list[str], customer_id: str) -> bool:
        payload = await self._mutate(
            queries.TAGS_ADD_MUTATION,
            "tagsAdd",
            {"id": to_gid("Customer", customer_id), "tags": tags},
            {"customerId": customer_id, "tags": tags},
        )
        return isinstance(payload.get("node"), dict)

    @override
    async def load_orders(self, query: OrdersQuery) -> OrdersPage:
        variables = _without_none(
            {
                "first": query.get("first") or DEFAULT_ORDERS_PAGE_SIZE,
                "after": query.get("after"),
                "query": query.get("query"),
                "sortKey": query.get("sortKey"),
                "reverse": query.get("reverse"),
            }
        )
        data = await self._graphql(queries.ORDERS_QUERY, variables, dict(query))
        connection = data.get("orders")
        orders = [self._normalise_order(node) for node in flatten_edges(connection)]
        cursor = page_cursor(connection)
        return OrdersPage(
            orders=orders, has_next_page=cursor.has_next_page, end_cursor=cursor.end_cursor
        )

    @override
    async def load_order(self, order_id: str) -> JsonObject:
        data = await self._graphql(
            queries.ORDER_QUERY, {"id": to_gid("Order", order_id)}, {"orderId": order_id}
        )
        order = data.get("order")
        if not isinstance(order, dict):
            raise ShopifyClientError(
                ErrorKind.INPUT, f"Order {order_id} not found", context_data={"orderId": order_id}
            )
        return self._normalise_order(order)

    @staticmethod
    def _normalise_order(node: Mapping[str, object]) -> JsonObject:
        order = dict(node)
        order["lineItems"] = flatten_edges(node.get("lineItems"))
        return order

    @override
    async def create_draft_order(self, draft_order: DraftOrderInput) -> DraftOrder:
        line_items = [
            {"variantId": to_gid("ProductVariant", item["variantId"]), "quantity": item["quantity"]}
            for item in draft_order["lineItems"]
        ]
        draft_input = _without_none(
            {
                "lineItems": line_items,
                "email": draft_order["email"],
                "shippingAddress": dict(draft_order["shippingAddress"]),
                "billingAddress": dict(draft_order["billingAddress"]),
                "tags": _tag_list(draft_order.get("tags")),
                "note": draft_order.get("note") or None,
            }
        )
        payload = await self._mutate(
            queries.DRAFT_ORDER_CREATE_MUTATION,
            "draftOrderCreate",
            {"input": draft_input},
            {"email": draft_order["email"], "lineItems": line_items},
        )
        draft = _mapping(payload.get("draftOrder"))
        return DraftOrder(
            draft_order_id=str(draft.get("id", "")), draft_order_name=str(draft.get("name", ""))
        )

    @override
    async def complete_draft_order(
        self, draft_order_id: str, variant_id: str
    ) -> CompletedDraftOrder:
        payload = await self._mutate(
            queries.DRAFT_ORDER_COMPLETE_MUTATION,
            "draftOrderComplete",
            {"id": to_gid("DraftOrder", draft_order_id)},
            {"draftOrderId": draft_order_id, "variantId": variant_id},
        )
        draft = _mapping(payload.get("draftOrder"))
        order = _mapping(draft.get("order"))
        return CompletedDraftOrder(
            draft_order_id=str(draft.get("id", "")),
            draft_order_name=str(draft.get("name", "")),
            order_id=str(order.get("id", "")),
        )

    @override
    async def load_collections(
        self, limit: int = 10, name: str | None = None, since_id: str | None = None
    ) -> CollectionsPage:
        """Load at most `limit` custom and smart collections as one list.

        Both listings are read in id order after `since_id`, so the highest
        id returned is where the next page starts.
        """
        params = _without_none({"limit": limit, "title": name or None, "since_id": since_id or 0})
        context = {"resource": "collections", **params}
        custom = await self._rest("GET", "custom_collections", params=params, context=context)
        smart = await self._rest("GET", "smart_collections", params=params, context=context)
        custom_rows = _list(custom.data.get("custom_collections"))
        smart_rows = _list(smart.data.get("smart_collections"))
        merged = sorted(custom_rows + smart_rows, key=lambda row: _int(row.get("id")) or 0)
        collections = merged[:limit]
        has_more = len(merged) > limit or limit in (len(custom_rows), len(smart_rows))
        next_since_id = str(collections[-1].get("id")) if has_more and collections else None
        return CollectionsPage(collections=collections, next_since_id=next_since_id)

    @override
    async def create_basic_discount_code(self, discount: BasicDiscountInput) -> DiscountCode:
        validate_discount(discount)
        payload = await self._mutate(
            queries.DISCOUNT_CODE_BASIC_CREATE_MUTATION,
            "discountCodeBasicCreate",
            {"basicCodeDiscount": build_basic_discount_input(discount)},
            {"code": discount["code"], "title": discount["title"]},
        )
        node = _mapping(payload.get("codeDiscountNode"))
        logger.info("Created discount code %s", discount["code"])
        return DiscountCode(id=str(node.get("id", "")), code=discount["code"])

    @override
    async def delete_basic_discount_code(self, discount_id: str) -> None:
        await self._mutate(
            queries.DISCOUNT_CODE_DELETE_MUTATION,
            "discountCodeDelete",
            {"id": to_gid("DiscountCodeNode", discount_id)},
            {"discountId": discount_id},
        )
        logger.info("Deleted discount code %s", discount_id)

    @override
    async def get_price_rule(self, price_rule_id: str) -> JsonObject:
        rule_id = id_from_gid(price_rule_id)
        response = await self._rest(
            "GET", f"price_rules/{rule_id}", context={"priceRuleId": price_rule_id}
        )
        rule = response.data.get("price_rule")
        if not isinstance(rule, dict):
            raise ShopifyClientError(
                ErrorKind.INPUT,
                f"Price rule {price_rule_id} not found",
                context_data={"priceRuleId": price_rule_id},
            )
        return rule

    @override
    async def subscribe_webhook(self, callback_url: str, topic: str) -> Webhook:
        payload = await self._mutate(
            queries.WEBHOOK_SUBSCRIPTION_CREATE_MUTATION,
            "webhookSubscriptionCreate",
            {
                "topic": webhook_topic_to_graphql(topic),
                "webhookSubscription": {"callbackUrl": callback_url, "format": "JSON"},
            },
            {"callbackUrl": callback_url, "topic": topic},
        )
        return _webhook(_mapping(payload.get("webhookSubscription")))

    @override
    async def find_webhook_by_topic_and_callback_url(
        self, callback_url: str, topic: str
    ) -> Webhook | None:
        data = await self._graphql(
            queries.WEBHOOK_SUBSCRIPTIONS_QUERY,
            {"topics": [webhook_topic_to_graphql(topic)], "callbackUrl": callback_url},
            {"callbackUrl": callback_url, "topic": topic},
        )
        for node in flatten_edges(data.get("webhookSubscriptions")):
            webhook = _webhook(node)
            if webhook.callback_url == callback_url:
                return webhook
        return None

    @override
    async def unsubscribe_webhook(self, webhook_id: str) -> None:
        await self._mutate(
            queries.WEBHOOK_SUBSCRIPTION_DELETE_MUTATION,
            "webhookSubscriptionDelete",
            {"id": to_gid("WebhookSubscription", webhook_id)},
            {"webhookId": webhook_id},
        )
