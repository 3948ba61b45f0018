from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError

from catalogsync.adapters.sqlalchemy import SqlAlchemyDocumentStore, catalog_documents_table
from catalogsync.app import SyncingClient
from catalogsync.config.sync import SyncConfig
from catalogsync.domain.errors import StoreError
from catalogsync.domain.model import (
    DocumentUpdate,
    EntityKind,
    NewDocument,
    Slug,
    SyncOperation,
    TypeTag,
)
from catalogsync.domain.orchestrator import SyncOrchestrator
from catalogsync.domain.reconciliation import Reconciler
from tests.support.catalog import FakeCatalogSource, FakePageSource, make_entity, make_pages

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from catalogsync.domain.callbacks import SyncReport


@pytest.fixture
def store(sqlite_engine: Engine) -> SqlAlchemyDocumentStore:
    return SqlAlchemyDocumentStore(sqlite_engine)


def _new_document(index: int = 1) -> NewDocument:
    entity = make_entity(index)
    return NewDocument.from_entity(TypeTag.PRODUCT, entity)


def test_create_then_lookup_round_trips_the_document(store: SqlAlchemyDocumentStore) -> None:
    document = _new_document()

    created = asyncio.run(store.create(document))
    found = asyncio.run(store.lookup(TypeTag.PRODUCT, document.source_id))

    assert found == created
    assert created.type_tag == "shopifyProduct"
    assert created.slug == Slug("item-1")
    assert created.source_info == document.source_info


def test_lookup_is_scoped_by_type_tag(store: SqlAlchemyDocumentStore) -> None:
    document = _new_document()
    asyncio.run(store.create(document))

    assert asyncio.run(store.lookup(TypeTag.COLLECTION, document.source_id)) is None


def test_patch_rewrites_slug_and_snapshot(store: SqlAlchemyDocumentStore) -> None:
    created = asyncio.run(store.create(_new_document()))

    patched = asyncio.run(
        store.patch(created.id, DocumentUpdate(slug=Slug("renamed"), source_info={"title": "T"}))
    )

    assert patched.id == created.id
    assert patched.slug == Slug("renamed")
    assert patched.source_info == {"title": "T"}


def test_patch_of_unknown_document_fails(store: SqlAlchemyDocumentStore) -> None:
    update = DocumentUpdate(slug=Slug("x"), source_info={})

    with pytest.raises(StoreError, match="does not exist"):
        asyncio.run(store.patch("missing", update))


def test_duplicate_keys_are_rejected(store: SqlAlchemyDocumentStore) -> None:
    asyncio.run(store.create(_new_document()))

    with pytest.raises(StoreError):
        asyncio.run(store.create(_new_document()))


def test_missing_table_surfaces_as_store_error(sqlite_engine: Engine) -> None:
    document_store = SqlAlchemyDocumentStore(sqlite_engine, create_schema=False)

    with pytest.raises(StoreError) as excinfo:
        asyncio.run(document_store.lookup(TypeTag.PRODUCT, "gid://x"))

    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_bulk_sync_mirrors_and_then_skips(store: SqlAlchemyDocumentStore) -> None:
    pages = make_pages(3, 2)
    orchestrator = SyncOrchestrator(Reconciler(store, pacing_delay=0), concurrency=3)

    first = asyncio.run(orchestrator.sync_many(FakePageSource(pages)))
    second = asyncio.run(orchestrator.sync_many(FakePageSource(pages)))

    with store.engine.connect() as connection:
        rows = connection.execute(catalog_documents_table.select()).all()
    assert first.created == 5
    assert second.skipped == 5
    assert len(rows) == 5


def test_changed_entity_is_updated_in_place(store: SqlAlchemyDocumentStore) -> None:
    reconciler = Reconciler(store, pacing_delay=0)
    original = make_entity(1, title="Before")
    changed = make_entity(1, title="After")

    asyncio.run(reconciler.reconcile(original))
    result = asyncio.run(reconciler.reconcile(changed))

    assert result.operation is SyncOperation.UPDATED
    assert result.document.source_info == changed.payload


def test_syncing_client_releases_the_engine(
    store: SqlAlchemyDocumentStore,
    sqlite_engine: Engine,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    disposed: list[bool] = []
    monkeypatch.setattr(
        type(sqlite_engine), "dispose", lambda self, *args, **kwargs: disposed.append(True)
    )
    source = FakeCatalogSource({EntityKind.PRODUCT: make_pages(2)})

    async def run() -> SyncReport:
        config = SyncConfig(concurrency=2, pacing_delay_seconds=0)
        async with SyncingClient(source=source, store=store, config=config) as client:
            return await client.sync_products()

    report = asyncio.run(run())

    assert report.created == 2
    assert disposed == [True]
    assert source.closed
