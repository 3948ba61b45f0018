"""Ports for persisting reconciled documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalogsync.domain.model import DocumentUpdate, NewDocument, TargetDocument, TypeTag


@runtime_checkable
class DocumentStore(Protocol):
    """Narrow document-store contract used by the reconciler.

    No locking is implied: callers must not reconcile the same key concurrently.
    """

    async def lookup(self, type_tag: TypeTag, source_id: str) -> TargetDocument | None: ...

    async def create(self, document: NewDocument) -> TargetDocument: ...

    async def patch(self, document_id: str, update: DocumentUpdate) -> TargetDocument: ...


__all__ = ["DocumentStore"]
