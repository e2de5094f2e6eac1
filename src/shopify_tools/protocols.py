"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces the client and tools depend on,
enabling isolated unit testing with fake implementations.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Protocol, TypeVar, runtime_checkable

from .types import (
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
    VariantBatchResult,
    VariantOperation,
    VariantPriceUpdate,
    VariantsResult,
    Webhook,
)

T = TypeVar("T")

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


@runtime_checkable
class RateLimiter(Protocol):
    """Abstract rate limiter for outbound requests."""

    async def enforce_rate_limit(self) -> None:
        """Suspend the caller until the next request may be sent."""
        ...


@runtime_checkable
class Cache(Protocol):
    """Abstract expiring key/value cache."""

    def get(self, key: str) -> object | None:
        """Return the cached value, or None if missing or expired."""
        ...

    def set(self, key: str, value: object, ttl_seconds: float | None = None) -> None:
        """Store a value for `ttl_seconds` (cache default when None)."""
        ...

    async def get_or_set(
        self,
        key: str,
        getter: Callable[[], Awaitable[T]],
        ttl_seconds: float | None = None,
    ) -> T:
        """Return the cached value or compute, store and return it."""
        ...

    def delete(self, key: str) -> None:
        """Remove a single key."""
        ...

    def clear(self) -> None:
        """Remove every key."""
        ...

    def cleanup(self) -> int:
        """Remove expired entries and return how many were dropped."""
        ...


@runtime_checkable
class HttpInvoker(Protocol):
    """Abstract Shopify Admin API transport."""

    async def rest(
        self,
        method: str,
        resource: str,
        *,
        params: Mapping[str, object] | None = None,
        json_body: Mapping[str, object] | None = None,
        context: Mapping[str, object] | None = None,
    ) -> RestResponse:
        """Call `/admin/api/{version}/{resource}.json`.

        Raises:
            ShopifyClientError: On transport failure or a non-2xx response.
        """
        ...

    async def graphql(
        self,
        query: str,
        variables: Mapping[str, object] | None = None,
        *,
        context: Mapping[str, object] | None = None,
    ) -> JsonObject:
        """POST a GraphQL document and return its `data` object.

        Raises:
            ShopifyClientError: On transport failure, non-2xx, or top-level `errors`.
        """
        ...


@runtime_checkable
class ShopifyClient(Protocol):
    """The canonical Shopify operations used by the tool layer."""

    async def load_shop(self) -> JsonObject: ...

    async def load_products(
        self, search_title: str | None, limit: int, after: str | None = None
    ) -> ProductsPage: ...

    async def load_products_by_collection_id(
        self, collection_id: str, limit: int, after: str | None = None
    ) -> ProductsPage: ...

    async def load_products_by_ids(self, product_ids: list[str]) -> ProductsPage: ...

    async def load_variants_by_ids(self, variant_ids: list[str]) -> VariantsResult: ...

    async def create_product(self, product: NewProduct) -> JsonObject: ...

    async def update_product(self, product_id: str, update: ProductUpdate) -> JsonObject: ...

    async def bulk_update_products(self, updates: list[ProductBulkUpdate]) -> list[JsonObject]: ...

    async def search_products_by_price_range(
        self, min_price: float, max_price: float, limit: int = 10, after: str | None = None
    ) -> ProductsPage: ...

    async def manage_inventory(
        self,
        inventory_item_id: str,
        location_id: str,
        action: InventoryAction,
        quantity: int,
        reason: str = "correction",
    ) -> InventoryChange: ...

    async def bulk_variant_operations(
        self, operations: list[VariantOperation]
    ) -> list[VariantBatchResult]: ...

    async def bulk_update_variant_prices(
        self, updates: list[VariantPriceUpdate]
    ) -> list[JsonObject]: ...

    async def manage_product_metafields(
        self, product_id: str, operations: list[MetafieldOperation]
    ) -> MetafieldChanges: ...

    async def manage_product_collections(
        self, action: MembershipAction, product_ids: list[str], collection_ids: list[str]
    ) -> list[str]: ...

    async def manage_product_images(
        self, product_id: str, action: ImageAction, images: list[ProductImage]
    ) -> list[JsonObject]: ...

    async def load_customers(
        self, limit: int | None = None, next_page_info: str | None = None
    ) -> CustomersPage: ...

    async def tag_customer(self, tags: list[str], customer_id: str) -> bool: ...

    async def load_orders(self, query: OrdersQuery) -> OrdersPage: ...

    async def load_order(self, order_id: str) -> JsonObject: ...

    async def create_draft_order(self, draft_order: DraftOrderInput) -> DraftOrder: ...

    async def complete_draft_order(
        self, draft_order_id: str, variant_id: str
    ) -> CompletedDraftOrder: ...

    async def load_collections(
        self, limit: int = 10, name: str | None = None, since_id: str | None = None
    ) -> CollectionsPage: ...

    async def create_basic_discount_code(self, discount: BasicDiscountInput) -> DiscountCode: ...

    async def delete_basic_discount_code(self, discount_id: str) -> None: ...

    async def get_price_rule(self, price_rule_id: str) -> JsonObject: ...

    async def subscribe_webhook(self, callback_url: str, topic: str) -> Webhook: ...

    async def find_webhook_by_topic_and_callback_url(
        self, callback_url: str, topic: str
    ) -> Webhook | None: ...

    async def unsubscribe_webhook(self, webhook_id: str) -> None: ...
