"""SQLAlchemy-backed document store used as a local catalog mirror."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
    insert,
    select,
)
from sqlalchemy import update as sql_update
from sqlalchemy.exc import SQLAlchemyError

from catalogsync.config.storage import get_database_config
from catalogsync.domain.errors import StoreError
from catalogsync.domain.model import Slug, TargetDocument

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine, RowMapping

    from catalogsync.domain.model import DocumentUpdate, NewDocument, TypeTag

log = getLogger(__name__)

metadata = MetaData()

catalog_documents_table = Table(
    "catalog_documents",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("type_tag", String(64), nullable=False),
    Column("source_id", String(255), nullable=False),
    Column("slug", String(255), nullable=True),
    Column("source_info", JSON, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("type_tag", "source_id", name="uq_catalog_documents_type_source"),
)


def _row_to_document(row: RowMapping) -> TargetDocument:
    slug: str | None = row["slug"]
    source_info: dict[str, Any] | None = row["source_info"]
    return TargetDocument(
        id=row["id"],
        type_tag=row["type_tag"],
        source_id=row["source_id"],
        slug=Slug(slug) if slug is not None else None,
        source_info=source_info,
    )


class SqlAlchemyDocumentStore:
    """Document store over a single relational table.

    Statements are short and run synchronously on the event loop thread; the
    ``(type_tag, source_id)`` unique constraint backs the one-document-per-key rule.
    """

    def __init__(self, engine: Engine | None = None, *, create_schema: bool = True) -> None:
        self._engine = engine or create_engine(get_database_config().uri, future=True)
        if create_schema:
            metadata.create_all(self._engine, checkfirst=True)

    @property
    def engine(self) -> Engine:
        return self._engine

    async def lookup(self, type_tag: TypeTag, source_id: str) -> TargetDocument | None:
        statement = select(catalog_documents_table).where(
            catalog_documents_table.c.type_tag == str(type_tag),
            catalog_documents_table.c.source_id == source_id,
        )
        try:
            with self._engine.connect() as connection:
                row = connection.execute(statement).mappings().first()
        except SQLAlchemyError as exc:
            raise StoreError(f"Lookup of {type_tag} {source_id} failed: {exc}") from exc
        return _row_to_document(row) if row is not None else None

    async def create(self, document: NewDocument) -> TargetDocument:
        now = datetime.now(tz=UTC)
        document_id = str(uuid.uuid4())
        values = {
            "id": document_id,
            "type_tag": str(document.type_tag),
            "source_id": document.source_id,
            "slug": document.slug.current,
            "source_info": dict(document.source_info),
            "created_at": now,
            "updated_at": now,
        }
        try:
            with self._engine.begin() as connection:
                connection.execute(insert(catalog_documents_table).values(**values))
        except SQLAlchemyError as exc:
            raise StoreError(
                f"Create of {document.type_tag} {document.source_id} failed: {exc}"
            ) from exc
        return await self._get(document_id)

    async def patch(self, document_id: str, update: DocumentUpdate) -> TargetDocument:
        statement = (
            sql_update(catalog_documents_table)
            .where(catalog_documents_table.c.id == document_id)
            .values(
                slug=update.slug.current,
                source_info=dict(update.source_info),
                updated_at=datetime.now(tz=UTC),
            )
        )
        try:
            with self._engine.begin() as connection:
                result = connection.execute(statement)
        except SQLAlchemyError as exc:
            raise StoreError(f"Patch of document {document_id} failed: {exc}") from exc
        if result.rowcount == 0:
            raise StoreError(f"Document {document_id} does not exist")
        return await self._get(document_id)

    async def _get(self, document_id: str) -> TargetDocument:
        statement = select(catalog_documents_table).where(
            catalog_documents_table.c.id == document_id
        )
        try:
            with self._engine.connect() as connection:
                row = connection.execute(statement).mappings().one()
        except SQLAlchemyError as exc:
            raise StoreError(f"Reading document {document_id} failed: {exc}") from exc
        return _row_to_document(row)

    async def aclose(self) -> None:
        self._engine.dispose()
