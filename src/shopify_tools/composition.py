"""Composition root for wiring the client, server and CLI."""

from __future__ import annotations

import requests
from mcp.server.fastmcp import FastMCP

from .application.shopify_client import ShopifyAdminClient
from .cli import create_app
from .config import ShopifyConfig
from .infrastructure import RateLimiter, RetryPolicy, ShopifyHttpInvoker, TTLCache
from .observability import configure_level
from .server import create_server


def build_client(
    config: ShopifyConfig, *, session: requests.Session | None = None
) -> ShopifyAdminClient:
    """Build the Shopify client with one shared rate limiter and cache.

    Args:
        config: Resolved configuration; credentials must already be validated.
        session: Optional `requests` session (a new one is created when omitted).
    """
    invoker = ShopifyHttpInvoker(
        session=session or requests.Session(),
        shop_domain=config.shop_domain,
        access_token=config.access_token,
        api_version=config.api_version,
        rate_limiter=RateLimiter(min_delay_seconds=config.min_request_delay_seconds),
        timeout_seconds=config.timeout_seconds,
    )
    retry_policy = RetryPolicy(
        max_retries=config.max_retries,
        initial_delay_seconds=config.initial_retry_delay_seconds,
        max_delay_seconds=config.max_retry_delay_seconds,
        backoff_factor=config.backoff_factor,
    )
    return ShopifyAdminClient(
        invoker=invoker,
        cache=TTLCache(default_ttl_seconds=config.cache_ttl_seconds),
        retry_policy=retry_policy,
    )


def build_server(*, config: ShopifyConfig) -> FastMCP:
    """Validate config, apply the log level and return a ready MCP server."""
    config.validate()
    configure_level(config.log_level)
    return create_server(build_client(config))


app = create_app(build_server)
