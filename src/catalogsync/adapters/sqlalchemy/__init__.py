"""SQLAlchemy adapter for mirroring catalog documents into a relational database."""

from __future__ import annotations

from .store import SqlAlchemyDocumentStore, catalog_documents_table, metadata

__all__ = ["SqlAlchemyDocumentStore", "catalog_documents_table", "metadata"]
