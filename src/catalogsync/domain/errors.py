"""Error taxonomy for catalog synchronisation."""

from __future__ import annotations


class CatalogSyncError(Exception):
    """Base class for errors raised while syncing catalog entities."""


class DiscriminatorError(CatalogSyncError, ValueError):
    """Raised when an entity's type discriminator cannot be mapped to a type tag."""


class MissingDiscriminatorError(DiscriminatorError):
    """Raised when an entity carries no type discriminator at all."""

    def __init__(self, source_id: str | None = None) -> None:
        suffix = f" (id={source_id})" if source_id else ""
        super().__init__(f"The supplied entity does not have a __typename{suffix}")
        self.source_id = source_id


class UnsupportedDiscriminatorError(DiscriminatorError):
    """Raised when an entity's type discriminator is not a recognised kind."""

    def __init__(self, discriminator: str) -> None:
        super().__init__(f"The __typename {discriminator!r} is not currently supported")
        self.discriminator = discriminator


class RemoteFetchError(CatalogSyncError):
    """Raised when the remote catalog API cannot be queried."""


class EntityNotFoundError(RemoteFetchError):
    """Raised when a handle does not resolve to a remote entity."""

    def __init__(self, kind: str, handle: str) -> None:
        super().__init__(f"No {kind} found for handle {handle!r}")
        self.kind = kind
        self.handle = handle


class StoreError(CatalogSyncError):
    """Raised when a document-store lookup or write fails."""
