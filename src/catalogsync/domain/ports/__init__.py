from __future__ import annotations

from .fetching import CatalogSource, EntityLookup, PageFetcher
from .persistence import DocumentStore

__all__ = ["CatalogSource", "DocumentStore", "EntityLookup", "PageFetcher"]
