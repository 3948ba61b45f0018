"""Storefront GraphQL client exposing the catalog source port."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from catalogsync.adapters.http_resilience import ResilientClient
from catalogsync.config.sync import DEFAULT_PAGE_SIZE
from catalogsync.domain.errors import RemoteFetchError
from catalogsync.domain.model import EntityKind, PageResult, RemoteEntity

from .queries import (
    COLLECTION_BY_HANDLE_QUERY,
    COLLECTIONS_QUERY,
    PRODUCT_BY_HANDLE_QUERY,
    PRODUCTS_QUERY,
)
from .schema import Connection, GraphQLResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from catalogsync.config.http_resilience import ResilienceConfig
    from catalogsync.config.shopify import ShopifyConfig

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _KindQueries:
    connection_field: str
    list_query: str
    single_field: str
    single_query: str


_QUERIES: dict[EntityKind, _KindQueries] = {
    EntityKind.PRODUCT: _KindQueries(
        connection_field="products",
        list_query=PRODUCTS_QUERY,
        single_field="product",
        single_query=PRODUCT_BY_HANDLE_QUERY,
    ),
    EntityKind.COLLECTION: _KindQueries(
        connection_field="collections",
        list_query=COLLECTIONS_QUERY,
        single_field="collection",
        single_query=COLLECTION_BY_HANDLE_QUERY,
    ),
}


class ShopifyStorefrontSource:
    """Fetches products and collections from the Storefront API."""

    def __init__(
        self,
        *,
        config: ShopifyConfig,
        page_size: int = DEFAULT_PAGE_SIZE,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._page_size = page_size
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> ShopifyStorefrontSource:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_page(self, kind: EntityKind, cursor: str | None = None) -> PageResult:
        queries = _QUERIES[kind]
        data = await self.query(queries.list_query, {"first": self._page_size, "after": cursor})
        try:
            connection = Connection.model_validate(data.get(queries.connection_field))
            nodes, last_cursor = connection.unwind()
            entities = tuple(RemoteEntity.from_node(node) for node in nodes)
        except (ValidationError, ValueError) as exc:
            raise RemoteFetchError(f"Unexpected {queries.connection_field} payload: {exc}") from exc
        return PageResult(
            entities=entities,
            has_next_page=connection.page_info.has_next_page,
            end_cursor=last_cursor,
        )

    async def fetch_by_handle(self, kind: EntityKind, handle: str) -> RemoteEntity | None:
        queries = _QUERIES[kind]
        data = await self.query(queries.single_query, {"handle": handle})
        node = data.get(queries.single_field)
        if node is None:
            return None
        if not isinstance(node, dict):
            raise RemoteFetchError(f"Unexpected {queries.single_field} payload")
        try:
            return RemoteEntity.from_node(node)
        except ValueError as exc:
            raise RemoteFetchError(str(exc)) from exc

    async def query(self, query: str, variables: Mapping[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object."""

        try:
            response = await self._http().post(
                self._config.graphql_url,
                json={"query": query, "variables": dict(variables)},
            )
            response.raise_for_status()
            payload = GraphQLResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            log.error(f"Storefront request failed: {exc}")
            raise RemoteFetchError(f"Storefront request failed: {exc}") from exc
        except (ValidationError, ValueError) as exc:
            raise RemoteFetchError(f"Unexpected Storefront response: {exc}") from exc

        if payload.errors:
            messages = "; ".join(error.message for error in payload.errors)
            log.error(f"Storefront API error: {messages}")
            raise RemoteFetchError(f"Storefront API error: {messages}")
        if payload.data is None:
            raise RemoteFetchError("Storefront response carried no data")
        return payload.data

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client
