"""Sanity HTTP client implementing the document store port."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from catalogsync.adapters.http_resilience import ResilientClient
from catalogsync.domain.errors import StoreError

from .schema import (
    SOURCE_ID_FIELD,
    SOURCE_INFO_FIELD,
    ErrorResponse,
    MutationResponse,
    QueryResponse,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from catalogsync.config.http_resilience import ResilienceConfig
    from catalogsync.config.sanity import SanityConfig
    from catalogsync.domain.model import DocumentUpdate, NewDocument, TargetDocument, TypeTag

log = getLogger(__name__)

LOOKUP_QUERY = f"*[_type == $type && {SOURCE_ID_FIELD} == $sourceId][0]"


class SanityDocumentStore:
    """Looks up, creates and patches catalog documents in a Sanity dataset."""

    def __init__(
        self,
        *,
        config: SanityConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> SanityDocumentStore:
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

    async def lookup(self, type_tag: TypeTag, source_id: str) -> TargetDocument | None:
        params = {
            "query": LOOKUP_QUERY,
            "$type": json.dumps(str(type_tag)),
            "$sourceId": json.dumps(source_id),
        }
        url = f"{self._config.base_url}/data/query/{self._config.dataset}"
        payload = await self._request("GET", url, params=params)
        try:
            response = QueryResponse.model_validate(payload)
        except ValidationError as exc:
            raise StoreError(f"Unexpected Sanity query response: {exc}") from exc
        return response.result.to_target() if response.result is not None else None

    async def create(self, document: NewDocument) -> TargetDocument:
        body = {
            "_type": str(document.type_tag),
            SOURCE_ID_FIELD: document.source_id,
            "slug": document.slug.as_mapping(),
            SOURCE_INFO_FIELD: dict(document.source_info),
        }
        return await self._mutate({"create": body})

    async def patch(self, document_id: str, update: DocumentUpdate) -> TargetDocument:
        fields = {
            "slug": update.slug.as_mapping(),
            SOURCE_INFO_FIELD: dict(update.source_info),
        }
        return await self._mutate({"patch": {"id": document_id, "set": fields}})

    async def _mutate(self, mutation: Mapping[str, Any]) -> TargetDocument:
        payload = await self._request(
            "POST",
            f"{self._config.base_url}/data/mutate/{self._config.dataset}",
            params={"returnDocuments": "true"},
            json_body={"mutations": [dict(mutation)]},
        )
        try:
            response = MutationResponse.model_validate(payload)
        except ValidationError as exc:
            raise StoreError(f"Unexpected Sanity mutation response: {exc}") from exc
        if not response.results or response.results[0].document is None:
            raise StoreError("Sanity mutation returned no document")
        return response.results[0].document.to_target()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str],
        json_body: object | None = None,
    ) -> object:
        try:
            response = await self._http().request(
                method,
                url,
                params=dict(params),
                json=json_body,
            )
        except httpx.HTTPError as exc:
            log.error(f"Sanity request {method} {url} failed: {exc}")
            raise StoreError(f"Sanity request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise StoreError(
                f"Sanity returned a non-JSON response (status {response.status_code})"
            ) from exc

        if response.is_error:
            message = _describe_error(payload) or response.reason_phrase
            log.error(f"Sanity API error {response.status_code}: {message}")
            raise StoreError(f"Sanity API error {response.status_code}: {message}")
        return payload

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client


def _describe_error(payload: object) -> str | None:
    try:
        return ErrorResponse.model_validate(payload).describe()
    except ValidationError:
        return None
