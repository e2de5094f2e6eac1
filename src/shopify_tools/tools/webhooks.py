"""Webhook tool handler."""

from __future__ import annotations

from ..protocols import ShopifyClient
from ..types import Webhook, WebhookAction
from .responses import ToolResponse, error_response, handle_error, text_response


def _describe(webhook: Webhook) -> str:
    return f"ID: {webhook.id}\nTopic: {webhook.topic}\nCallback URL: {webhook.callback_url}"


async def manage_webhook(
    client: ShopifyClient,
    action: WebhookAction,
    callback_url: str,
    topic: str,
    webhook_id: str | None = None,
) -> ToolResponse:
    """Subscribe, find or unsubscribe a webhook."""
    try:
        if action == "subscribe":
            webhook = await client.subscribe_webhook(callback_url, topic)
            return text_response(f"Successfully subscribed to webhook:\n{_describe(webhook)}")
        if action == "find":
            found = await client.find_webhook_by_topic_and_callback_url(callback_url, topic)
            if found is None:
                return text_response(
                    f"No webhook found for topic {topic} and callback URL {callback_url}"
                )
            return text_response(f"Found webhook:\n{_describe(found)}")
        if action == "unsubscribe":
            if not webhook_id:
                return error_response("Webhook ID is required for unsubscribe action")
            await client.unsubscribe_webhook(webhook_id)
            return text_response(f"Successfully unsubscribed webhook {webhook_id}")
    except Exception as error:
        return handle_error(f"Failed to {action} webhook", error)
    return error_response(f"Invalid action: {action}")
