"""Tests for tool response envelopes."""

import json
import logging

import pytest

from shopify_tools.exceptions import ErrorKind, ShopifyClientError
from shopify_tools.tools.responses import (
    describe_error,
    error_response,
    format_success,
    handle_error,
    is_error,
    response_text,
    text_response,
)
from shopify_tools.types import DiscountCode, MetafieldChanges


def test_text_response_has_no_error_flag() -> None:
    response = text_response("hello")

    assert response == {"content": [{"type": "text", "text": "hello"}]}
    assert not is_error(response)


def test_error_response_is_flagged() -> None:
    response = error_response("boom")

    assert is_error(response)
    assert response_text(response) == "boom"


def test_format_success_renders_dataclasses_as_json() -> None:
    response = format_success(DiscountCode(id="gid://shopify/DiscountCodeNode/1", code="SAVE10"))

    assert json.loads(response_text(response)) == {
        "id": "gid://shopify/DiscountCodeNode/1",
        "code": "SAVE10",
    }


def test_format_success_renders_nested_dataclasses() -> None:
    response = format_success(
        {"changes": [MetafieldChanges(saved=[], deleted=["gid://shopify/Metafield/2"])]}
    )

    assert json.loads(response_text(response)) == {
        "changes": [{"saved": [], "deleted": ["gid://shopify/Metafield/2"]}]
    }


def test_describe_error_for_plain_exception() -> None:
    assert describe_error("Failed to do it", ValueError("bad")) == "Failed to do it: bad"


def test_describe_error_includes_code_context_and_inner_error() -> None:
    error = ShopifyClientError(
        ErrorKind.VARIANT_NOT_FOUND,
        "Product variant not found",
        inner_error=[{"message": "Product variant not found."}],
        context_data={"email": "ada@example.com"},
    )

    text = describe_error("Failed to create draft order", error)

    assert text.startswith("Failed to create draft order: Product variant not found")
    assert "(Code: SHOPIFY_CLIENT.PRODUCT_VARIANT_NOT_FOUND)" in text
    assert '\nContext: {\n  "email": "ada@example.com"\n}' in text
    assert "\nInner Error: [" in text


def test_custom_code_is_appended() -> None:
    error = ShopifyClientError(ErrorKind.INPUT, "nope", custom_code="MISSING")

    assert "(Code: SHOPIFY_CLIENT.INPUT_ERROR.MISSING)" in describe_error("Failed", error)


def test_handle_error_logs_at_error_level(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("shopify_tools.tools")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.ERROR, logger="shopify_tools.tools"):
            response = handle_error("Failed to retrieve shop details", RuntimeError("down"))
    finally:
        logger.removeHandler(caplog.handler)

    assert is_error(response)
    assert "Failed to retrieve shop details: down" in caplog.text
