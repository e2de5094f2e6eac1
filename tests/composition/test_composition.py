"""Tests for the composition root wiring."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from shopify_tools import composition
from shopify_tools.application.shopify_client import ShopifyAdminClient
from shopify_tools.config import ShopifyConfig
from shopify_tools.exceptions import MissingEnvVarError
from shopify_tools.infrastructure import RateLimiter, ShopifyHttpInvoker, TTLCache
from shopify_tools.protocols import ShopifyClient


def test_build_client_wires_config_into_components() -> None:
    config = ShopifyConfig(
        access_token="shpat_abc",
        shop_domain="demo.myshopify.com",
        api_version="2025-01",
        timeout_seconds=12.0,
        min_request_delay_seconds=0.25,
        max_retries=5,
        initial_retry_delay_seconds=0.5,
        max_retry_delay_seconds=8.0,
        backoff_factor=3.0,
        cache_ttl_seconds=60.0,
    )
    session = MagicMock(spec=requests.Session)

    client = composition.build_client(config, session=session)

    assert isinstance(client, ShopifyAdminClient)
    invoker = client.invoker
    assert isinstance(invoker, ShopifyHttpInvoker)
    assert invoker.graphql_url == "https://demo.myshopify.com/admin/api/2025-01/graphql.json"
    assert invoker.session is session
    assert invoker.timeout_seconds == 12.0
    assert isinstance(invoker.rate_limiter, RateLimiter)
    assert invoker.rate_limiter.min_delay_seconds == 0.25
    assert client.retry_policy.max_retries == 5
    assert client.retry_policy.initial_delay_seconds == 0.5
    assert client.retry_policy.max_delay_seconds == 8.0
    assert client.retry_policy.backoff_factor == 3.0
    assert isinstance(client.cache, TTLCache)
    assert client.cache.default_ttl_seconds == 60.0


def test_build_server_requires_credentials() -> None:
    with pytest.raises(MissingEnvVarError):
        composition.build_server(config=ShopifyConfig(shop_domain="demo.myshopify.com"))


def test_build_server_binds_built_client(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    sentinel_client = MagicMock(spec=ShopifyAdminClient)
    sentinel_server = object()

    def fake_build_client(config: ShopifyConfig) -> ShopifyAdminClient:
        captured["config"] = config
        return sentinel_client

    def fake_create_server(client: ShopifyClient) -> object:
        captured["client"] = client
        return sentinel_server

    monkeypatch.setattr(composition, "build_client", fake_build_client)
    monkeypatch.setattr(composition, "create_server", fake_create_server)
    config = ShopifyConfig(access_token="shpat_abc", shop_domain="demo.myshopify.com")

    server = composition.build_server(config=config)

    assert server is sentinel_server
    assert captured == {"config": config, "client": sentinel_client}
