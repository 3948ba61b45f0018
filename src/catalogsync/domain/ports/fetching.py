"""Ports for fetching catalog entities from the remote source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalogsync.domain.model import EntityKind, PageResult, RemoteEntity


@runtime_checkable
class PageFetcher(Protocol):
    """Fetch one page; ``None`` requests the first page."""

    async def __call__(self, cursor: str | None, /) -> PageResult: ...


@runtime_checkable
class EntityLookup(Protocol):
    """Fetch a single entity by handle, returning ``None`` when it does not exist."""

    async def __call__(self, handle: str, /) -> RemoteEntity | None: ...


@runtime_checkable
class CatalogSource(Protocol):
    """Remote catalog exposing paged listings and handle lookups per entity kind."""

    async def fetch_page(self, kind: EntityKind, cursor: str | None = None) -> PageResult: ...

    async def fetch_by_handle(self, kind: EntityKind, handle: str) -> RemoteEntity | None: ...


__all__ = ["CatalogSource", "EntityLookup", "PageFetcher"]
