"""Flatten Shopify connection shapes into plain sequences.

GraphQL connections arrive as `{"edges": [{"node": {...}}], "pageInfo": {...}}`
or `{"nodes": [...]}`; REST list endpoints page with a `Link` header whose
`rel="next"` URL carries a `page_info` token.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse

_LINK_PART_RE = re.compile(r'<([^>]+)>\s*;\s*rel="?([^";]+)"?')


@dataclass(frozen=True)
class PageCursor:
    """Next-page token for a GraphQL connection."""

    has_next_page: bool
    end_cursor: str | None

    @property
    def next_cursor(self) -> str | None:
        return self.end_cursor if self.has_next_page else None


def flatten_edges(connection: object) -> list[dict[str, object]]:
    """Return the `node` of every edge, preserving order."""
    if not isinstance(connection, Mapping):
        return []
    edges = connection.get("edges")
    if not isinstance(edges, list):
        return flatten_nodes(connection)
    nodes: list[dict[str, object]] = []
    for edge in edges:
        if isinstance(edge, Mapping):
            node = edge.get("node")
            if isinstance(node, dict):
                nodes.append(node)
    return nodes


def flatten_nodes(connection: object) -> list[dict[str, object]]:
    """Return the `nodes` list of a connection, skipping nulls."""
    if not isinstance(connection, Mapping):
        return []
    nodes = connection.get("nodes")
    if not isinstance(nodes, list):
        return []
    return [node for node in nodes if isinstance(node, dict)]


def page_cursor(connection: object) -> PageCursor:
    """Extract `pageInfo.hasNextPage` / `pageInfo.endCursor`."""
    if not isinstance(connection, Mapping):
        return PageCursor(has_next_page=False, end_cursor=None)
    page_info = connection.get("pageInfo")
    if not isinstance(page_info, Mapping):
        return PageCursor(has_next_page=False, end_cursor=None)
    end_cursor = page_info.get("endCursor")
    return PageCursor(
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=end_cursor if isinstance(end_cursor, str) else None,
    )


def parse_next_page_info(link_header: str | None) -> str | None:
    """Return the `page_info` token of the `rel="next"` link, if any."""
    if not link_header:
        return None
    for url, rel in _LINK_PART_RE.findall(link_header):
        if rel.strip() != "next":
            continue
        values = parse_qs(urlparse(url).query).get("page_info")
        if values:
            return values[0]
    return None
