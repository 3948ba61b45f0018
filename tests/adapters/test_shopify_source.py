from __future__ import annotations

import asyncio
import json
from functools import partial
from collections.abc import Callable  # noqa: TC003
from typing import Any

import httpx
import pytest

from catalogsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from catalogsync.adapters.shopify import ShopifyStorefrontSource
from catalogsync.adapters.shopify.queries import PRODUCT_BY_HANDLE_QUERY, PRODUCTS_QUERY
from catalogsync.config.shopify import STOREFRONT_TOKEN_HEADER, ShopifyConfig
from catalogsync.domain.errors import RemoteFetchError
from catalogsync.domain.model import EntityKind
from catalogsync.domain.pagination import collect_entities
from tests.support.catalog import make_node


def _config() -> ShopifyConfig:
    return ShopifyConfig(
        shop_domain="example.myshopify.com",
        storefront_token="storefront-token",
        api_version="2024-04",
        resilience=ResilienceConfig(
            name="shopify-test",
            retry=None,
            default_headers={STOREFRONT_TOKEN_HEADER: "storefront-token"},
        ),
    )


def _source(
    handler: Callable[[httpx.Request], httpx.Response], *, page_size: int = 2
) -> ShopifyStorefrontSource:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handler))

    return ShopifyStorefrontSource(config=_config(), page_size=page_size, client_factory=factory)


def _connection(
    nodes: list[dict[str, Any]], *, has_next_page: bool, end_cursor: str | None
) -> dict[str, Any]:
    return {
        "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
        "edges": [{"cursor": f"edge-{node['id']}", "node": node} for node in nodes],
    }


def test_fetch_page_posts_the_products_query_and_unwinds_edges() -> None:
    requests: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == "https://example.myshopify.com/api/2024-04/graphql.json"
        assert request.headers[STOREFRONT_TOKEN_HEADER] == "storefront-token"
        requests.append(json.loads(request.content))
        nodes = [make_node(1), make_node(2)]
        return httpx.Response(
            200,
            json={"data": {"products": _connection(nodes, has_next_page=True, end_cursor="c2")}},
        )

    async def run() -> Any:
        async with _source(handler) as source:
            return await source.fetch_page(EntityKind.PRODUCT)

    page = asyncio.run(run())

    assert requests[0]["query"] == PRODUCTS_QUERY
    assert requests[0]["variables"] == {"first": 2, "after": None}
    assert [entity.handle for entity in page.entities] == ["item-1", "item-2"]
    assert page.entities[0].payload == make_node(1)
    assert page.has_next_page is True
    assert page.end_cursor == "c2"


def test_last_edge_cursor_is_used_when_end_cursor_is_absent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        nodes = [make_node(1, typename="Collection")]
        connection = _connection(nodes, has_next_page=True, end_cursor=None)
        return httpx.Response(200, json={"data": {"collections": connection}})

    page = asyncio.run(_source(handler).fetch_page(EntityKind.COLLECTION, "previous"))

    assert page.end_cursor == "edge-gid://shopify/Collection/1"


def test_pages_can_be_walked_through_the_paginator() -> None:
    pages = {
        None: _connection([make_node(1), make_node(2)], has_next_page=True, end_cursor="c1"),
        "c1": _connection([make_node(3)], has_next_page=False, end_cursor="c2"),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        after = json.loads(request.content)["variables"]["after"]
        return httpx.Response(200, json={"data": {"products": pages[after]}})

    async def run() -> list[str]:
        async with _source(handler) as source:
            entities = await collect_entities(partial(source.fetch_page, EntityKind.PRODUCT))
            return [entity.handle for entity in entities]

    assert asyncio.run(run()) == ["item-1", "item-2", "item-3"]


def test_fetch_by_handle_returns_the_entity_or_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["query"] == PRODUCT_BY_HANDLE_QUERY
        handle = body["variables"]["handle"]
        node = make_node(7, handle=handle) if handle == "known" else None
        return httpx.Response(200, json={"data": {"product": node}})

    async def run() -> tuple[Any, Any]:
        async with _source(handler) as source:
            found = await source.fetch_by_handle(EntityKind.PRODUCT, "known")
            return found, await source.fetch_by_handle(EntityKind.PRODUCT, "unknown")

    found, missing = asyncio.run(run())

    assert found is not None
    assert found.handle == "known"
    assert found.typename == "Product"
    assert missing is None


def test_graphql_errors_raise_remote_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"data": None, "errors": [{"message": "Throttled"}]}
        )

    with pytest.raises(RemoteFetchError, match="Throttled"):
        asyncio.run(_source(handler).fetch_page(EntityKind.PRODUCT))


def test_http_errors_raise_remote_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"errors": "Unauthorized"})

    with pytest.raises(RemoteFetchError, match="Storefront request failed"):
        asyncio.run(_source(handler).fetch_page(EntityKind.PRODUCT))


def test_malformed_connection_raises_remote_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"products": {"edges": []}}})

    with pytest.raises(RemoteFetchError, match="Unexpected products payload"):
        asyncio.run(_source(handler).fetch_page(EntityKind.PRODUCT))


def test_node_without_handle_raises_remote_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        node = {"__typename": "Product", "id": "gid://shopify/Product/1"}
        return httpx.Response(200, json={"data": {"product": node}})

    with pytest.raises(RemoteFetchError, match="handle"):
        asyncio.run(_source(handler).fetch_by_handle(EntityKind.PRODUCT, "x"))
