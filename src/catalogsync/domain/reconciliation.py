"""Lookup-then-create-or-update reconciliation of one entity."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .matching import is_match
from .model import DocumentUpdate, NewDocument, ReconcileResult, SyncOperation
from .tagging import type_tag_for

if TYPE_CHECKING:
    from .model import RemoteEntity
    from .ports.persistence import DocumentStore

log = getLogger(__name__)


class Reconciler:
    """Bring the document for one remote entity in line with its current snapshot.

    Every call performs at most one write. The existence check and the write are
    not atomic, so the same key must not be reconciled concurrently.
    """

    def __init__(self, store: DocumentStore, *, pacing_delay: float) -> None:
        self._store = store
        self._pacing_delay = pacing_delay

    async def reconcile(self, entity: RemoteEntity) -> ReconcileResult:
        type_tag = type_tag_for(entity)

        # Keeps bursts of lookups under the store's request rate limit.
        await asyncio.sleep(self._pacing_delay)
        existing = await self._store.lookup(type_tag, entity.source_id)

        if existing is None:
            document = await self._store.create(NewDocument.from_entity(type_tag, entity))
            log.debug(f"Created {type_tag} {entity.source_id} ({entity.handle})")
            return ReconcileResult(SyncOperation.CREATED, entity, document)

        update = DocumentUpdate.from_entity(entity)
        if is_match(existing.as_mapping(), update.as_mapping()):
            log.debug(f"Skipped {type_tag} {entity.source_id}: already up to date")
            return ReconcileResult(SyncOperation.SKIP, entity, existing)

        document = await self._store.patch(existing.id, update)
        log.debug(f"Updated {type_tag} {entity.source_id} ({entity.handle})")
        return ReconcileResult(SyncOperation.UPDATED, entity, document)
