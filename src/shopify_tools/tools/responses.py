"""Success and error envelopes returned by tool handlers.

An envelope is the MCP tool result shape:
`{"content": [{"type": "text", "text": ...}], "isError": True}` (the
`isError` key only on failures).
"""

from __future__ import annotations

import dataclasses
import json
from typing import NotRequired, TypedDict

from ..exceptions import ShopifyClientError
from ..observability import get_logger

logger = get_logger("shopify_tools.tools")


class TextContent(TypedDict):
    type: str
    text: str


class ToolResponse(TypedDict):
    content: list[TextContent]
    isError: NotRequired[bool]


def _json_default(value: object) -> object:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return str(value)


def _to_json(data: object) -> str:
    return json.dumps(data, indent=2, default=_json_default)


def text_response(text: str) -> ToolResponse:
    return {"content": [{"type": "text", "text": text}]}


def error_response(text: str) -> ToolResponse:
    return {"content": [{"type": "text", "text": text}], "isError": True}


def format_success(data: object) -> ToolResponse:
    """Render `data` (mapping, list or dataclass) as indented JSON text."""
    return text_response(_to_json(data))


def describe_error(default_message: str, error: BaseException) -> str:
    """Build the envelope text for a failed tool call.

    Classified errors add their code, context and inner error so the caller
    can see what Shopify rejected.
    """
    message = f"{default_message}: {error}"
    if isinstance(error, ShopifyClientError):
        message += f" (Code: {error.code})"
        if error.context_data:
            message += f"\nContext: {_to_json(error.context_data)}"
        if error.inner_error is not None:
            message += f"\nInner Error: {_to_json(error.inner_error)}"
    return message


def handle_error(default_message: str, error: BaseException) -> ToolResponse:
    """Log the failure and return an error envelope."""
    logger.error("%s: %s", default_message, error, exc_info=error)
    return error_response(describe_error(default_message, error))


def is_error(response: ToolResponse) -> bool:
    return bool(response.get("isError"))


def response_text(response: ToolResponse) -> str:
    return "\n".join(part["text"] for part in response["content"])
