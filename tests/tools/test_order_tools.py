"""Tests for order and draft order tool handlers."""

import asyncio
import json

from shopify_tools.exceptions import ErrorKind, ShopifyClientError
from shopify_tools.tools import orders
from shopify_tools.tools.responses import is_error, response_text
from shopify_tools.types import MailingAddress, OrdersPage
from tests.fakes import FakeShopifyClient

ADDRESS: MailingAddress = {
    "address1": "1 Main St",
    "countryCode": "US",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "zip": "10001",
    "city": "New York",
    "country": "United States",
}


def test_get_orders_reports_next_page() -> None:
    order = {
        "id": "gid://shopify/Order/1",
        "name": "#1001",
        "lineItems": [{"title": "Tee", "quantity": 2}],
    }
    client = FakeShopifyClient(
        orders=OrdersPage(orders=[order], has_next_page=True, end_cursor="c2")
    )

    text = response_text(asyncio.run(orders.get_orders(client, {"first": 1})))

    assert text.startswith("Found 1 orders:\nOrder: #1001")
    assert "    - Tee x2" in text
    assert text.endswith('Pagination Info: More orders available. Use after: "c2" to get the next page.')


def test_get_orders_last_page() -> None:
    client = FakeShopifyClient()

    text = response_text(asyncio.run(orders.get_orders(client, {})))

    assert text.endswith("Pagination Info: No more orders available.")


def test_get_order_returns_json() -> None:
    client = FakeShopifyClient(order={"id": "gid://shopify/Order/7", "name": "#1007"})

    response = asyncio.run(orders.get_order(client, "7"))

    assert json.loads(response_text(response)) == {"id": "gid://shopify/Order/7", "name": "#1007"}
    assert client.calls == [("load_order", ("7",))]


def test_create_draft_order_bills_shipping_address() -> None:
    client = FakeShopifyClient()

    response = asyncio.run(
        orders.create_draft_order(
            client, [{"variantId": "11", "quantity": 1}], "ada@example.com", ADDRESS
        )
    )

    assert response_text(response) == (
        "Successfully created draft order:\nID: gid://shopify/DraftOrder/1\nName: #D1"
    )
    (name, (draft_input,)) = client.calls[0]
    assert name == "create_draft_order"
    assert draft_input["billingAddress"] == ADDRESS
    assert draft_input["tags"] == ""
    assert draft_input["note"] == ""


def test_create_draft_order_variant_not_found() -> None:
    client = FakeShopifyClient(
        error=ShopifyClientError(
            ErrorKind.VARIANT_NOT_FOUND,
            "Product variant not found: Product variant not found.",
            inner_error=[{"field": ["lineItems"], "message": "Product variant not found."}],
        )
    )

    response = asyncio.run(
        orders.create_draft_order(
            client, [{"variantId": "404", "quantity": 1}], "ada@example.com", ADDRESS
        )
    )

    text = response_text(response)
    assert is_error(response)
    assert "(Code: SHOPIFY_CLIENT.PRODUCT_VARIANT_NOT_FOUND)" in text
    assert "Inner Error:" in text


def test_complete_draft_order() -> None:
    client = FakeShopifyClient()

    text = response_text(asyncio.run(orders.complete_draft_order(client, "1", "11")))

    assert text == (
        "Successfully completed draft order:\n"
        "Draft Order ID: gid://shopify/DraftOrder/1\n"
        "Draft Order Name: #D1\n"
        "Order ID: gid://shopify/Order/9"
    )
