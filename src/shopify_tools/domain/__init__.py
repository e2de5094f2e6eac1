"""Pure domain logic: error taxonomy mapping, GIDs, paging shapes, discounts."""

from .error_classification import (
    classify_graphql_error,
    classify_http_error,
    classify_user_error,
    kind_for_status,
)
from .gid import id_from_gid, to_gid
from .pagination import PageCursor, flatten_edges, flatten_nodes, page_cursor, parse_next_page_info

__all__ = [
    "PageCursor",
    "classify_graphql_error",
    "classify_http_error",
    "classify_user_error",
    "flatten_edges",
    "flatten_nodes",
    "id_from_gid",
    "kind_for_status",
    "page_cursor",
    "parse_next_page_info",
    "to_gid",
]
