"""Tests for Shopify GID helpers."""

import pytest

from shopify_tools.domain.gid import id_from_gid, to_gid, to_gids


def test_id_from_gid_extracts_trailing_segment() -> None:
    assert id_from_gid("gid://shopify/Product/123456789") == "123456789"


@pytest.mark.parametrize(
    ("gid", "expected"),
    [
        ("gid://shopify/InventoryLevel/1?inventory_item_id=2", "1"),
        ("gid://shopify/Order/42/", "42"),
        ("987", "987"),
    ],
)
def test_id_from_gid_edge_cases(gid: str, expected: str) -> None:
    assert id_from_gid(gid) == expected


def test_to_gid_formats_numeric_ids() -> None:
    assert to_gid("Product", 123) == "gid://shopify/Product/123"
    assert to_gid("Customer", " 55 ") == "gid://shopify/Customer/55"


def test_to_gid_passes_existing_gids_through() -> None:
    gid = "gid://shopify/ProductVariant/7"
    assert to_gid("Product", gid) == gid


def test_to_gids_preserves_order() -> None:
    assert to_gids("Collection", ["2", "1"]) == [
        "gid://shopify/Collection/2",
        "gid://shopify/Collection/1",
    ]
