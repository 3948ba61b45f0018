"""Public interface for the Sanity document store adapter."""

from __future__ import annotations

from .client import LOOKUP_QUERY, SanityDocumentStore
from .schema import SanityDocument

__all__ = ["LOOKUP_QUERY", "SanityDocument", "SanityDocumentStore"]
