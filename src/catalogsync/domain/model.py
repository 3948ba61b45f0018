"""Value types shared by the pagination and reconciliation pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class EntityKind(StrEnum):
    """Discriminator values reported by the remote catalog (``__typename``)."""

    PRODUCT = "Product"
    COLLECTION = "Collection"


class TypeTag(StrEnum):
    """Document-store type tags entities are persisted under."""

    PRODUCT = "shopifyProduct"
    COLLECTION = "shopifyCollection"


class SyncOperation(StrEnum):
    """Outcome of reconciling one entity."""

    SKIP = "skip"
    CREATED = "created"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class RemoteEntity:
    """Snapshot of one catalog node as received from the remote API.

    ``payload`` holds the complete node, discriminator and identifiers
    included; it is embedded verbatim in the target document.
    """

    typename: str | None
    source_id: str
    handle: str
    payload: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> RemoteEntity:
        source_id = node.get("id")
        handle = node.get("handle")
        if not isinstance(source_id, str) or not source_id:
            raise ValueError("Remote node is missing an 'id'")
        if not isinstance(handle, str) or not handle:
            raise ValueError(f"Remote node {source_id} is missing a 'handle'")
        typename = node.get("__typename")
        return cls(
            typename=typename if isinstance(typename, str) else None,
            source_id=source_id,
            handle=handle,
            payload=dict(node),
        )


@dataclass(frozen=True, slots=True)
class PageResult:
    """One page of entities plus the cursor needed to request the next one."""

    entities: tuple[RemoteEntity, ...]
    has_next_page: bool
    end_cursor: str | None = None


@dataclass(frozen=True, slots=True)
class Slug:
    current: str

    def as_mapping(self) -> dict[str, Any]:
        return {"current": self.current}


@dataclass(frozen=True, slots=True)
class DocumentUpdate:
    """Fields rewritten on every sync; also the projection used for drift checks."""

    slug: Slug
    source_info: Mapping[str, Any]

    @classmethod
    def from_entity(cls, entity: RemoteEntity) -> DocumentUpdate:
        return cls(slug=Slug(entity.handle), source_info=dict(entity.payload))

    def as_mapping(self) -> dict[str, Any]:
        return {"slug": self.slug.as_mapping(), "source_info": dict(self.source_info)}


@dataclass(frozen=True, slots=True)
class NewDocument:
    type_tag: TypeTag
    source_id: str
    slug: Slug
    source_info: Mapping[str, Any]

    @classmethod
    def from_entity(cls, type_tag: TypeTag, entity: RemoteEntity) -> NewDocument:
        return cls(
            type_tag=type_tag,
            source_id=entity.source_id,
            slug=Slug(entity.handle),
            source_info=dict(entity.payload),
        )


@dataclass(frozen=True, slots=True)
class TargetDocument:
    """A persisted document, uniquely keyed by ``(type_tag, source_id)``."""

    id: str
    type_tag: str
    source_id: str
    slug: Slug | None
    source_info: Mapping[str, Any] | None

    def as_mapping(self) -> dict[str, Any]:
        mapping: dict[str, Any] = {
            "id": self.id,
            "type_tag": self.type_tag,
            "source_id": self.source_id,
        }
        if self.slug is not None:
            mapping["slug"] = self.slug.as_mapping()
        if self.source_info is not None:
            mapping["source_info"] = self.source_info
        return mapping


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    operation: SyncOperation
    entity: RemoteEntity
    document: TargetDocument


__all__ = [
    "DocumentUpdate",
    "EntityKind",
    "NewDocument",
    "PageResult",
    "ReconcileResult",
    "RemoteEntity",
    "Slug",
    "SyncOperation",
    "TargetDocument",
    "TypeTag",
]
