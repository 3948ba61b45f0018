"""Pagination and reconciliation pipeline for catalog sync."""

from __future__ import annotations

from .callbacks import SyncCallbacks, SyncReport
from .errors import (
    CatalogSyncError,
    DiscriminatorError,
    EntityNotFoundError,
    MissingDiscriminatorError,
    RemoteFetchError,
    StoreError,
    UnsupportedDiscriminatorError,
)
from .model import (
    DocumentUpdate,
    EntityKind,
    NewDocument,
    PageResult,
    ReconcileResult,
    RemoteEntity,
    Slug,
    SyncOperation,
    TargetDocument,
    TypeTag,
)
from .orchestrator import SyncOrchestrator
from .pagination import collect_entities, iter_entities
from .reconciliation import Reconciler
from .tagging import type_tag_for

__all__ = [
    "CatalogSyncError",
    "DiscriminatorError",
    "DocumentUpdate",
    "EntityKind",
    "EntityNotFoundError",
    "MissingDiscriminatorError",
    "NewDocument",
    "PageResult",
    "ReconcileResult",
    "Reconciler",
    "RemoteEntity",
    "RemoteFetchError",
    "Slug",
    "StoreError",
    "SyncCallbacks",
    "SyncOperation",
    "SyncOrchestrator",
    "SyncReport",
    "TargetDocument",
    "TypeTag",
    "UnsupportedDiscriminatorError",
    "collect_entities",
    "iter_entities",
    "type_tag_for",
]
