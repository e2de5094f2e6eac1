"""HTTP fakes for tests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import override

from shopify_tools.protocols import HttpInvoker
from shopify_tools.types import JsonObject, RestResponse


@dataclass(frozen=True)
class GraphqlCall:
    query: str
    variables: dict[str, object]
    context: dict[str, object]


@dataclass(frozen=True)
class RestCall:
    method: str
    resource: str
    params: dict[str, object]
    json_body: dict[str, object] | None


def _empty_graphql_results() -> list[JsonObject | Exception]:
    return []


def _empty_rest_results() -> list[RestResponse | Exception]:
    return []


def _empty_graphql_calls() -> list[GraphqlCall]:
    return []


def _empty_rest_calls() -> list[RestCall]:
    return []


@dataclass
class FakeHttpInvoker(HttpInvoker):
    """Fake invoker that replays queued results in order.

    A queued exception is raised instead of returned.
    """

    graphql_results: list[JsonObject | Exception] = field(default_factory=_empty_graphql_results)
    rest_results: list[RestResponse | Exception] = field(default_factory=_empty_rest_results)
    graphql_calls: list[GraphqlCall] = field(default_factory=_empty_graphql_calls)
    rest_calls: list[RestCall] = field(default_factory=_empty_rest_calls)

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
        self.rest_calls.append(
            RestCall(
                method=method,
                resource=resource,
                params=dict(params or {}),
                json_body=dict(json_body) if json_body is not None else None,
            )
        )
        if not self.rest_results:
            raise AssertionError(f"No queued REST result for {method} {resource}")
        result = self.rest_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    @override
    async def graphql(
        self,
        query: str,
        variables: Mapping[str, object] | None = None,
        *,
        context: Mapping[str, object] | None = None,
    ) -> JsonObject:
        self.graphql_calls.append(
            GraphqlCall(query=query, variables=dict(variables or {}), context=dict(context or {}))
        )
        if not self.graphql_results:
            raise AssertionError("No queued GraphQL result")
        result = self.graphql_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result
