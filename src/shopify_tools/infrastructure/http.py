"""HTTP transport for the Shopify Admin REST and GraphQL APIs.

Usage example:
    import requests

    from shopify_tools.infrastructure.http import ShopifyHttpInvoker
    from shopify_tools.infrastructure.resilience import RateLimiter

    invoker = ShopifyHttpInvoker(
        session=requests.Session(),
        shop_domain="demo.myshopify.com",
        access_token="shpat_...",
        rate_limiter=RateLimiter(min_delay_seconds=0.5),
    )
    shop = await invoker.rest("GET", "shop")
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import override

import requests

from ..config import DEFAULT_API_VERSION
from ..domain.error_classification import classify_graphql_error, classify_http_error
from ..exceptions import ErrorKind, ShopifyClientError
from ..observability import get_logger
from ..protocols import HttpInvoker, RateLimiter
from ..types import JsonObject, RestResponse
from .resilience import RateLimiter as RateLimiterImpl

logger = get_logger("shopify_tools.infrastructure.http")

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _json_or_none(response: requests.Response) -> object:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _body_excerpt(response: requests.Response) -> str:
    """Return a compact, truncated body for diagnostics."""
    try:
        body = response.text
    except (UnicodeDecodeError, ValueError, requests.RequestException):
        return "<unreadable>"
    body = " ".join(body.split())
    if len(body) > 300:
        body = body[:300] + "..."
    return body


def extract_error_payload(response: requests.Response) -> object:
    """Pick the most specific error payload from a failed response.

    Preference order: the body's `errors` / `error` field, the whole JSON
    body, the raw text, then the HTTP reason phrase.
    """
    body = _json_or_none(response)
    if isinstance(body, Mapping):
        if "errors" in body:
            return body["errors"]
        if "error" in body:
            return body["error"]
    if body is not None:
        return body
    text = _body_excerpt(response)
    if text and text != "<unreadable>":
        return text
    return response.reason or f"HTTP {response.status_code}"


class ShopifyHttpInvoker(HttpInvoker):
    """Shopify Admin API transport with rate limiting and error classification.

    - Every request waits on the shared rate limiter first.
    - The blocking `requests` call runs in a worker thread so the event
      loop keeps serving other tool calls while it waits.
    - Non-2xx responses and GraphQL `errors` become `ShopifyClientError`.
    - Transport failures become GENERAL errors mentioning "network".
    """

    def __init__(
        self,
        *,
        session: requests.Session,
        shop_domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        rate_limiter: RateLimiter | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.session = session
        self.shop_domain = shop_domain
        self.access_token = access_token
        self.api_version = api_version
        self.rate_limiter = rate_limiter or RateLimiterImpl()
        self.timeout_seconds = timeout_seconds

    @property
    def base_url(self) -> str:
        return f"https://{self.shop_domain}/admin/api/{self.api_version}"

    @property
    def graphql_url(self) -> str:
        return f"{self.base_url}/graphql.json"

    def rest_url(self, resource: str) -> str:
        return f"{self.base_url}/{resource.strip('/')}.json"

    def _headers(self) -> dict[str, str]:
        return {
            ACCESS_TOKEN_HEADER: self.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, object] | None,
        json_body: Mapping[str, object] | None,
        context: Mapping[str, object] | None,
    ) -> requests.Response:
        await self.rate_limiter.enforce_rate_limit()
        logger.debug("%s %s", method, url)
        try:
            return await asyncio.to_thread(
                self.session.request,
                method,
                url,
                params=dict(params) if params else None,
                json=dict(json_body) if json_body is not None else None,
                headers=self._headers(),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ShopifyClientError(
                ErrorKind.GENERAL,
                f"Shopify network error: {exc}",
                inner_error=repr(exc),
                context_data=context,
            ) from exc

    @override
    async def rest(
        self,
        method: str,
        resource: str,
        *,
        params: Mapping[str, object] | None = None,
        json_body: Mapping[str, object] | None = None,
        context: Mapping[str, object] | None = None,
    ) -> RestResponse:
        """Call a REST resource and return its JSON body and headers.

        Raises:
            ShopifyClientError: Classified by HTTP status for non-2xx responses.
        """
        response = await self._send(
            method.upper(),
            self.rest_url(resource),
            params=params,
            json_body=json_body,
            context=context,
        )
        if not _is_success(response.status_code):
            logger.debug("REST %s %s failed: %s", method, resource, response.status_code)
            raise classify_http_error(
                extract_error_payload(response), response.status_code, context
            )

        body = _json_or_none(response)
        if body is None:
            data: JsonObject = {}
        elif isinstance(body, dict):
            data = body
        else:
            raise ShopifyClientError(
                ErrorKind.GENERAL,
                "Shopify returned a non-object JSON body",
                inner_error=_body_excerpt(response),
                context_data=context,
                status_code=response.status_code,
            )
        return RestResponse(data=data, headers=dict(response.headers or {}))

    @override
    async def graphql(
        self,
        query: str,
        variables: Mapping[str, object] | None = None,
        *,
        context: Mapping[str, object] | None = None,
    ) -> JsonObject:
        """POST a GraphQL document and return the `data` object.

        Raises:
            ShopifyClientError: For non-2xx responses or top-level `errors`.
        """
        payload: dict[str, object] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)
        response = await self._send(
            "POST", self.graphql_url, params=None, json_body=payload, context=context
        )
        body = _json_or_none(response)

        if not _is_success(response.status_code):
            raise classify_graphql_error(
                extract_error_payload(response), response.status_code, context
            )
        if not isinstance(body, dict):
            raise ShopifyClientError(
                ErrorKind.GENERAL,
                "Shopify returned a non-JSON GraphQL response",
                inner_error=_body_excerpt(response),
                context_data=context,
                status_code=response.status_code,
            )
        errors = body.get("errors")
        if errors:
            raise classify_graphql_error(errors, response.status_code, context)
        data = body.get("data")
        if not isinstance(data, dict):
            raise ShopifyClientError(
                ErrorKind.GENERAL,
                "Shopify GraphQL response did not contain data",
                inner_error=body,
                context_data=context,
                status_code=response.status_code,
            )
        return data
