"""Tests for MCP tool registration and envelope unwrapping."""

import asyncio

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from shopify_tools.exceptions import ErrorKind, ShopifyClientError
from shopify_tools.server import SERVER_NAME, TOOL_NAMES, create_server, unwrap
from shopify_tools.tools.responses import error_response, text_response
from tests.fakes import FakeShopifyClient


def _tool_schemas(client: FakeShopifyClient) -> dict[str, dict[str, object]]:
    tools = asyncio.run(create_server(client).list_tools())
    return {tool.name: tool.inputSchema for tool in tools}


def test_every_tool_is_registered() -> None:
    schemas = _tool_schemas(FakeShopifyClient())

    assert sorted(schemas) == sorted(TOOL_NAMES)
    assert len(TOOL_NAMES) == 26


def test_server_name() -> None:
    assert create_server(FakeShopifyClient()).name == SERVER_NAME


def test_argument_schemas() -> None:
    schemas = _tool_schemas(FakeShopifyClient())

    products = schemas["get-products"]
    assert products["required"] == ["limit"]
    assert set(products["properties"]) == {"limit", "search_title", "after"}
    assert set(schemas["get-customers"]["properties"]) == {"limit", "next"}
    assert "webhook_id" in schemas["manage-webhook"]["properties"]
    assert set(schemas["create-draft-order"]["required"]) == {
        "line_items",
        "email",
        "shipping_address",
    }
    assert schemas["get-shop"].get("required", []) == []
    assert set(schemas["get-collections"]["properties"]) == {"limit", "name", "since_id"}
    assert "exclude_collection_ids" not in schemas["create-discount"]["properties"]
    assert schemas["delete-discount"]["required"] == ["discount_id"]
    assert set(schemas["search-products-by-price-range"]["required"]) == {"min_price", "max_price"}
    assert set(schemas["manage-product-collections"]["required"]) == {
        "action",
        "product_ids",
        "collection_ids",
    }


def test_unwrap_returns_text() -> None:
    assert unwrap(text_response("ok")) == "ok"


def test_unwrap_raises_tool_error_for_error_envelope() -> None:
    with pytest.raises(ToolError, match="Failed to retrieve shop details"):
        unwrap(error_response("Failed to retrieve shop details: down"))


def test_failing_tool_call_surfaces_as_tool_error() -> None:
    client = FakeShopifyClient(
        error=ShopifyClientError(ErrorKind.AUTHORIZATION, "Shopify authorization error (HTTP 401)")
    )
    server = create_server(client)

    with pytest.raises(ToolError, match="SHOPIFY_CLIENT.AUTHORIZATION_ERROR"):
        asyncio.run(server.call_tool("get-shop", {}))

    assert client.call_names() == ["load_shop"]


def test_delete_discount_tool_reaches_client() -> None:
    client = FakeShopifyClient()
    server = create_server(client)

    asyncio.run(server.call_tool("delete-discount", {"discount_id": "5"}))

    assert client.calls == [("delete_basic_discount_code", ("5",))]


def test_price_range_tool_reaches_client() -> None:
    client = FakeShopifyClient()
    server = create_server(client)

    asyncio.run(
        server.call_tool("search-products-by-price-range", {"min_price": 5, "max_price": 20})
    )

    assert client.call_names() == ["search_products_by_price_range"]
