"""Shopify global ID (GID) helpers.

Shopify addresses resources with opaque strings such as
`gid://shopify/Product/123456789`; tool callers usually pass the numeric part.
"""

from __future__ import annotations

GID_PREFIX = "gid://shopify/"


def to_gid(resource_type: str, resource_id: str | int) -> str:
    """Format an ID as a GID, passing through values already in GID form."""
    value = str(resource_id).strip()
    if value.startswith("gid://"):
        return value
    return f"{GID_PREFIX}{resource_type}/{value}"


def id_from_gid(gid: str) -> str:
    """Return the trailing numeric segment of a GID.

    Query strings (e.g. `?inventory_item_id=1`) are dropped; non-GID input is
    returned unchanged.
    """
    value = gid.split("?", 1)[0]
    return value.rstrip("/").split("/")[-1]


def to_gids(resource_type: str, resource_ids: list[str]) -> list[str]:
    return [to_gid(resource_type, resource_id) for resource_id in resource_ids]
