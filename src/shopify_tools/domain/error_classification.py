"""Classification of Shopify failures into the `ErrorKind` taxonomy.

Three entry points, one per failure surface:

- `classify_http_error`: a non-2xx REST response.
- `classify_graphql_error`: a non-2xx GraphQL response, or a 200 response
  carrying a top-level `errors` array.
- `classify_user_error`: the `userErrors` array of a successful mutation.

All three are total: any payload shape resolves to exactly one kind and none
of them raise.

Usage example:
    from shopify_tools.domain.error_classification import classify_http_error

    error = classify_http_error({"errors": "Too Many Requests"}, 429, {"resource": "shop"})
    assert error.kind is ErrorKind.RATE_LIMITING
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ..exceptions import ErrorKind, ShopifyClientError

_MAX_DETAIL_LENGTH = 300


def _status_table() -> Mapping[int, ErrorKind]:
    table: dict[int, ErrorKind] = {}
    for status in (401, 403, 423, 430):
        table[status] = ErrorKind.AUTHORIZATION
    for status in (400, 405, 406, 414, 415, 783):
        table[status] = ErrorKind.REQUEST
    for status in (404, 409, 422):
        table[status] = ErrorKind.INPUT
    table[429] = ErrorKind.RATE_LIMITING
    for status in (500, 501, 502, 503, 504, 530, 540):
        table[status] = ErrorKind.SERVER_INFRASTRUCTURE
    table[402] = ErrorKind.PAYMENT
    return MappingProxyType(table)


HTTP_STATUS_KINDS: Mapping[int, ErrorKind] = _status_table()

GRAPHQL_CODE_KINDS: Mapping[str, ErrorKind] = MappingProxyType(
    {
        "UNAUTHORIZED": ErrorKind.AUTHORIZATION,
        "ACCESS_DENIED": ErrorKind.AUTHORIZATION,
        "FORBIDDEN": ErrorKind.AUTHORIZATION,
        "UNPROCESSABLE": ErrorKind.INPUT,
        "THROTTLED": ErrorKind.RATE_LIMITING,
        "INTERNAL_SERVER_ERROR": ErrorKind.SERVER_INFRASTRUCTURE,
    }
)

# Checked in order; the first phrase found in any user error message wins.
USER_ERROR_PHRASES: tuple[tuple[str, ErrorKind], ...] = (
    ("Product variant not found.", ErrorKind.VARIANT_NOT_FOUND),
    ("not available for sale", ErrorKind.VARIANT_NOT_AVAILABLE),
    ("Webhook subscription does not exist", ErrorKind.WEBHOOK_NOT_FOUND),
    ("Address for this topic has already been taken", ErrorKind.WEBHOOK_ALREADY_EXISTS),
)


def kind_for_status(status_code: int | None) -> ErrorKind:
    """Return the error kind for an HTTP status, GENERAL when unlisted."""
    if status_code is None:
        return ErrorKind.GENERAL
    return HTTP_STATUS_KINDS.get(status_code, ErrorKind.GENERAL)


def kind_for_graphql_errors(errors: object) -> ErrorKind:
    """Return the kind named by the first recognised `extensions.code`."""
    for error in _as_list(errors):
        if not isinstance(error, Mapping):
            continue
        extensions = error.get("extensions")
        if not isinstance(extensions, Mapping):
            continue
        code = extensions.get("code")
        if isinstance(code, str) and code.upper() in GRAPHQL_CODE_KINDS:
            return GRAPHQL_CODE_KINDS[code.upper()]
    return ErrorKind.GENERAL


def kind_for_user_errors(errors: object) -> ErrorKind:
    """Return the domain-specific kind for known user error phrases."""
    messages = _messages(errors)
    for phrase, kind in USER_ERROR_PHRASES:
        if any(phrase in message for message in messages):
            return kind
    return ErrorKind.GENERAL


def classify_http_error(
    payload: object,
    status_code: int,
    context: Mapping[str, object] | None = None,
) -> ShopifyClientError:
    """Classify a failed REST response by its status code."""
    kind = kind_for_status(status_code)
    return ShopifyClientError(
        kind,
        _compose_message(kind, status_code, _messages(payload)),
        inner_error=payload,
        context_data=context,
        status_code=status_code,
    )


def classify_graphql_error(
    errors: object,
    status_code: int,
    context: Mapping[str, object] | None = None,
) -> ShopifyClientError:
    """Classify GraphQL errors.

    The status code decides first; extension codes are only consulted when the
    status itself maps to GENERAL (including the usual 200 with `errors`).
    """
    kind = kind_for_status(status_code)
    if kind is ErrorKind.GENERAL:
        kind = kind_for_graphql_errors(errors)
    shown_status = status_code if status_code >= 400 else None
    return ShopifyClientError(
        kind,
        _compose_message(kind, shown_status, _messages(errors)),
        inner_error=errors,
        context_data=context,
        status_code=status_code,
    )


def classify_user_error(
    errors: object,
    context: Mapping[str, object] | None = None,
) -> ShopifyClientError:
    """Classify a mutation's `userErrors` array by known message phrases."""
    kind = kind_for_user_errors(errors)
    return ShopifyClientError(
        kind,
        _compose_message(kind, None, _messages(errors)),
        inner_error=errors,
        context_data=context,
    )


def _compose_message(kind: ErrorKind, status_code: int | None, details: list[str]) -> str:
    message = kind.default_message
    if status_code is not None:
        message = f"{message} (HTTP {status_code})"
    if details:
        detail = "; ".join(details)
        if len(detail) > _MAX_DETAIL_LENGTH:
            detail = detail[:_MAX_DETAIL_LENGTH] + "..."
        message = f"{message}: {detail}"
    return message


def _as_list(value: object) -> list[object]:
    if isinstance(value, list | tuple):
        return list(value)
    if value is None:
        return []
    return [value]


def _messages(payload: object) -> list[str]:
    """Collect vendor-provided message strings from any payload shape."""
    if isinstance(payload, str):
        text = " ".join(payload.split())
        return [text] if text else []
    if isinstance(payload, Mapping):
        for key in ("errors", "error", "message"):
            if key in payload:
                return _messages(payload[key])
        # Field-keyed REST errors: {"title": ["can't be blank"]}
        found: list[str] = []
        for field_name, value in payload.items():
            for message in _messages(value):
                found.append(f"{field_name} {message}")
        return found
    if isinstance(payload, list | tuple):
        found = []
        for item in payload:
            found.extend(_messages(item))
        return found
    return []
