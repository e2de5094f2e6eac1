"""Tests for product and inventory tool handlers."""

import asyncio
import json

from shopify_tools.exceptions import ErrorKind, ShopifyClientError
from shopify_tools.tools import products
from shopify_tools.tools.responses import is_error, response_text
from shopify_tools.types import InventoryChange, ProductsPage, VariantsResult
from tests.fakes import FakeShopifyClient

PRODUCT = {
    "id": "gid://shopify/Product/1",
    "title": "Classic Tee",
    "handle": "classic-tee",
    "description": "Soft",
    "variants": [{"id": "gid://shopify/ProductVariant/11", "title": "Small", "price": "20.00"}],
}


class TestGetProducts:
    def test_lists_products_with_currency_and_next_cursor(self) -> None:
        client = FakeShopifyClient(
            products=ProductsPage(products=[PRODUCT], currency_code="EUR", next_cursor="abc")
        )

        response = asyncio.run(products.get_products(client, "tee", 5))

        text = response_text(response)
        assert not is_error(response)
        assert text.startswith("Found 1 products with currency EUR:\n")
        assert "Product: Classic Tee" in text
        assert 'Use after: "abc"' in text
        assert client.calls == [("load_products", ("tee", 5, None))]

    def test_no_pagination_hint_on_last_page(self) -> None:
        client = FakeShopifyClient(products=ProductsPage(products=[PRODUCT], currency_code="EUR"))

        text = response_text(asyncio.run(products.get_products(client)))

        assert "More products available" not in text

    def test_failure_becomes_error_envelope(self) -> None:
        client = FakeShopifyClient(
            error=ShopifyClientError(
                ErrorKind.AUTHORIZATION,
                "Shopify authorization error (HTTP 401)",
                context_data={"searchTitle": "tee"},
                inner_error="[API] Invalid API key or access token",
            )
        )

        response = asyncio.run(products.get_products(client, "tee"))

        text = response_text(response)
        assert is_error(response)
        assert text.startswith("Failed to retrieve products: Shopify authorization error")
        assert "(Code: SHOPIFY_CLIENT.AUTHORIZATION_ERROR)" in text
        assert "Context:" in text
        assert "Inner Error:" in text


def test_get_products_by_collection_names_the_collection() -> None:
    client = FakeShopifyClient(products=ProductsPage(products=[PRODUCT], currency_code="USD"))

    text = response_text(asyncio.run(products.get_products_by_collection(client, "42", 3)))

    assert text.startswith("Found 1 products in collection 42 with currency USD:")
    assert client.calls == [("load_products_by_collection_id", ("42", 3, None))]


def test_get_variants_by_ids() -> None:
    variant = {
        "id": "gid://shopify/ProductVariant/11",
        "title": "Small",
        "availableForSale": True,
        "product": {"title": "Classic Tee"},
    }
    client = FakeShopifyClient(variants=VariantsResult(variants=[variant], currency_code="USD"))

    text = response_text(asyncio.run(products.get_variants_by_ids(client, ["11"])))

    assert text.startswith("Found 1 variants with currency USD:")
    assert "product: Classic Tee" in text
    assert "availableForSale: Yes" in text


def test_update_product_without_fields_is_rejected_locally() -> None:
    client = FakeShopifyClient()

    response = asyncio.run(products.update_product(client, "1", {}))

    assert is_error(response)
    assert "Failed to update product 1" in response_text(response)
    assert client.calls == []


def test_create_product_reports_created_product() -> None:
    client = FakeShopifyClient(product=PRODUCT)

    response = asyncio.run(
        products.create_product(client, {"title": "Classic Tee", "description": "Soft"})
    )

    assert response_text(response).startswith("Successfully created product:\nProduct: Classic Tee")


def test_manage_inventory_returns_json_summary() -> None:
    client = FakeShopifyClient(
        inventory_change=InventoryChange(new_quantity=8, previous_quantity=5)
    )

    response = asyncio.run(products.manage_inventory(client, "77", "88", "ADJUST", 3))

    assert json.loads(response_text(response)) == {
        "inventoryItemId": "77",
        "locationId": "88",
        "action": "ADJUST",
        "previousQuantity": 5,
        "newQuantity": 8,
    }


def test_manage_inventory_failure_names_the_action() -> None:
    client = FakeShopifyClient(error=ShopifyClientError(ErrorKind.INPUT))

    response = asyncio.run(products.manage_inventory(client, "77", "88", "SET", 3))

    assert is_error(response)
    assert response_text(response).startswith("Failed to set inventory: Shopify input error")


def test_search_products_by_price_range() -> None:
    client = FakeShopifyClient(
        products=ProductsPage(products=[PRODUCT], currency_code="USD", next_cursor="next")
    )

    response = asyncio.run(products.search_products_by_price_range(client, 10, 25.5, limit=3))

    text = response_text(response)
    assert text.startswith("Found 1 products priced 10.00-25.50 USD:\n")
    assert 'Use after: "next"' in text
    assert client.calls == [("search_products_by_price_range", (10, 25.5, 3, None))]


def test_search_products_by_price_range_failure() -> None:
    client = FakeShopifyClient(
        error=ShopifyClientError.invalid_input("Price range must satisfy 0 <= min_price <= max_price")
    )

    response = asyncio.run(products.search_products_by_price_range(client, 30, 10))

    assert is_error(response)
    assert response_text(response).startswith("Failed to search products by price range")
