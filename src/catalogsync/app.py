"""Application entry points wiring the catalog source to the document store."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import TYPE_CHECKING

from catalogsync.adapters.sanity import SanityDocumentStore
from catalogsync.adapters.shopify import ShopifyStorefrontSource
from catalogsync.config import get_sanity_config, get_shopify_config, get_sync_config
from catalogsync.domain.model import EntityKind
from catalogsync.domain.orchestrator import SyncOrchestrator
from catalogsync.domain.reconciliation import Reconciler

if TYPE_CHECKING:
    from types import TracebackType

    from catalogsync.config import SyncConfig
    from catalogsync.domain.callbacks import SyncCallbacks, SyncReport
    from catalogsync.domain.ports.fetching import CatalogSource
    from catalogsync.domain.ports.persistence import DocumentStore


class SyncingClient:
    """One bulk and one by-handle entry point per entity kind."""

    def __init__(
        self,
        *,
        source: CatalogSource,
        store: DocumentStore,
        config: SyncConfig | None = None,
    ) -> None:
        sync_config = config or get_sync_config()
        self._source = source
        self._store = store
        self._orchestrator = SyncOrchestrator(
            Reconciler(store, pacing_delay=sync_config.pacing_delay_seconds),
            concurrency=sync_config.concurrency,
        )

    async def __aenter__(self) -> SyncingClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for resource in (self._source, self._store):
            aclose = getattr(resource, "aclose", None)
            if aclose is not None:
                await aclose()

    async def sync_products(self, callbacks: SyncCallbacks | None = None) -> SyncReport:
        return await self._sync_kind(EntityKind.PRODUCT, callbacks, label="products")

    async def sync_collections(self, callbacks: SyncCallbacks | None = None) -> SyncReport:
        return await self._sync_kind(EntityKind.COLLECTION, callbacks, label="collections")

    async def sync_product_by_handle(
        self,
        handle: str,
        callbacks: SyncCallbacks | None = None,
    ) -> SyncReport:
        return await self._sync_handle(EntityKind.PRODUCT, handle, callbacks, label="product")

    async def sync_collection_by_handle(
        self,
        handle: str,
        callbacks: SyncCallbacks | None = None,
    ) -> SyncReport:
        return await self._sync_handle(
            EntityKind.COLLECTION, handle, callbacks, label="collection"
        )

    async def _sync_kind(
        self,
        kind: EntityKind,
        callbacks: SyncCallbacks | None,
        *,
        label: str,
    ) -> SyncReport:
        fetch_page = partial(self._source.fetch_page, kind)
        return await self._orchestrator.sync_many(fetch_page, callbacks, label=label)

    async def _sync_handle(
        self,
        kind: EntityKind,
        handle: str,
        callbacks: SyncCallbacks | None,
        *,
        label: str,
    ) -> SyncReport:
        lookup = partial(self._source.fetch_by_handle, kind)
        return await self._orchestrator.sync_one(lookup, handle, callbacks, label=label)


def build_syncing_client(*, config: SyncConfig | None = None) -> SyncingClient:
    """Create a client wired to the Storefront API and Sanity from the environment."""

    sync_config = config or get_sync_config()
    return SyncingClient(
        source=ShopifyStorefrontSource(
            config=get_shopify_config(), page_size=sync_config.page_size
        ),
        store=SanityDocumentStore(config=get_sanity_config()),
        config=sync_config,
    )


def sync_shopify_products(*, callbacks: SyncCallbacks | None = None) -> SyncReport:
    """Blocking helper: sync every product using the configured adapters."""

    return asyncio.run(_run_bulk(EntityKind.PRODUCT, callbacks))


def sync_shopify_collections(*, callbacks: SyncCallbacks | None = None) -> SyncReport:
    """Blocking helper: sync every collection using the configured adapters."""

    return asyncio.run(_run_bulk(EntityKind.COLLECTION, callbacks))


async def _run_bulk(kind: EntityKind, callbacks: SyncCallbacks | None) -> SyncReport:
    async with build_syncing_client() as client:
        if kind is EntityKind.PRODUCT:
            return await client.sync_products(callbacks)
        return await client.sync_collections(callbacks)
