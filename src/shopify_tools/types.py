"""Typed data contracts exchanged between tools, client and Shopify."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, NotRequired, Required, TypedDict

JsonObject = dict[str, object]

DiscountValueType = Literal["percentage", "fixed_amount"]
OrderSortKey = Literal[
    "PROCESSED_AT", "TOTAL_PRICE", "ID", "CREATED_AT", "UPDATED_AT", "ORDER_NUMBER"
]
ProductStatus = Literal["ACTIVE", "ARCHIVED", "DRAFT"]
InventoryAction = Literal["SET", "ADJUST"]
WebhookAction = Literal["subscribe", "find", "unsubscribe"]
MetafieldAction = Literal["SET", "DELETE"]
MembershipAction = Literal["ADD", "REMOVE"]
ImageAction = Literal["ADD", "UPDATE", "REMOVE"]
VariantAction = Literal["CREATE", "UPDATE", "DELETE"]
WeightUnit = Literal["GRAMS", "KILOGRAMS", "OUNCES", "POUNDS"]


class CombinesWith(TypedDict):
    """Which other discount classes a code may stack with."""

    productDiscounts: bool
    orderDiscounts: bool
    shippingDiscounts: bool


class BasicDiscountInput(TypedDict):
    """Input for creating a basic discount code."""

    title: str
    code: str
    startsAt: str
    valueType: str
    value: float
    appliesOncePerCustomer: bool
    endsAt: NotRequired[str | None]
    usageLimit: NotRequired[int | None]
    includeCollectionIds: NotRequired[list[str]]
    combinesWith: NotRequired[CombinesWith]


class MailingAddress(TypedDict):
    """Shipping / billing address for draft orders."""

    address1: str
    countryCode: str
    firstName: str
    lastName: str
    zip: str
    city: str
    country: str
    address2: NotRequired[str]
    province: NotRequired[str]
    provinceCode: NotRequired[str]
    phone: NotRequired[str]


class DraftOrderLineItem(TypedDict):
    """A variant and quantity on a draft order."""

    variantId: str
    quantity: int


class DraftOrderInput(TypedDict):
    """Input for creating a draft order."""

    lineItems: list[DraftOrderLineItem]
    email: str
    shippingAddress: MailingAddress
    billingAddress: MailingAddress
    tags: str
    note: str


class OrdersQuery(TypedDict, total=False):
    """Filter, sort and paging options for listing orders."""

    first: int
    after: str
    query: str
    sortKey: OrderSortKey
    reverse: bool


class NewVariant(TypedDict):
    """Variant data supplied when creating a product."""

    title: str
    price: float
    sku: NotRequired[str]
    inventory: NotRequired[int]
    requiresShipping: NotRequired[bool]
    taxable: NotRequired[bool]


class NewProduct(TypedDict):
    """Input for creating a product."""

    title: str
    description: str
    vendor: NotRequired[str]
    productType: NotRequired[str]
    tags: NotRequired[list[str]]
    variants: NotRequired[list[NewVariant]]


class ProductUpdate(TypedDict, total=False):
    """Fields that may change on an existing product."""

    title: str
    description: str
    status: ProductStatus
    vendor: str
    productType: str
    tags: list[str]


class ProductBulkUpdate(ProductUpdate):
    """One entry of a bulk product update."""

    productId: Required[str]


class MetafieldOperation(TypedDict):
    """Set or delete one product metafield. `SET` needs `value` and `type`."""

    action: MetafieldAction
    namespace: str
    key: str
    value: NotRequired[str]
    type: NotRequired[str]


class ProductImage(TypedDict, total=False):
    """An image to add (`url`), update or remove (`id`)."""

    id: str
    url: str
    altText: str


class VariantData(TypedDict, total=False):
    """Variant fields for bulk create and update."""

    id: str
    title: str
    price: float
    sku: str
    barcode: str
    requiresShipping: bool
    taxable: bool
    weight: float
    weightUnit: WeightUnit


class VariantOperation(TypedDict):
    """Create, update or delete one variant of a product."""

    action: VariantAction
    productId: str
    variantData: VariantData


class VariantPriceUpdate(TypedDict):
    """A new price for one variant."""

    variantId: str
    newPrice: float


@dataclass(frozen=True)
class RestResponse:
    """Decoded REST body plus the response headers (for `Link` paging)."""

    data: JsonObject
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProductsPage:
    """Products with the shop currency and the next-page cursor."""

    products: list[JsonObject]
    currency_code: str
    next_cursor: str | None = None


@dataclass(frozen=True)
class VariantsResult:
    """Variants (each with its parent product) and the shop currency."""

    variants: list[JsonObject]
    currency_code: str


@dataclass(frozen=True)
class OrdersPage:
    """Orders with GraphQL page info."""

    orders: list[JsonObject]
    has_next_page: bool
    end_cursor: str | None


@dataclass(frozen=True)
class CustomersPage:
    """Customers and the REST `page_info` token for the next page."""

    customers: list[JsonObject]
    next_page_info: str | None = None


@dataclass(frozen=True)
class CollectionsPage:
    """Custom and smart collections merged into one list, in id order.

    `next_since_id` is passed back as `since_id` to fetch the next page.
    """

    collections: list[JsonObject]
    next_since_id: str | None = None


@dataclass(frozen=True)
class DraftOrder:
    """A created draft order."""

    draft_order_id: str
    draft_order_name: str


@dataclass(frozen=True)
class CompletedDraftOrder:
    """A draft order that has been turned into an order."""

    draft_order_id: str
    draft_order_name: str
    order_id: str


@dataclass(frozen=True)
class DiscountCode:
    """A created basic discount code."""

    id: str
    code: str


@dataclass(frozen=True)
class Webhook:
    """A webhook subscription."""

    id: str
    topic: str
    callback_url: str


@dataclass(frozen=True)
class InventoryChange:
    """Inventory quantity before and after a change."""

    new_quantity: int
    previous_quantity: int


@dataclass(frozen=True)
class MetafieldChanges:
    """Metafields written and the identifiers of those deleted."""

    saved: list[JsonObject]
    deleted: list[str]


@dataclass(frozen=True)
class VariantBatchResult:
    """Outcome of one bulk variant mutation for one product."""

    action: VariantAction
    product_id: str
    variant_ids: list[str]
