"""Pydantic models describing Sanity HTTP API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from catalogsync.domain.model import Slug, TargetDocument

SOURCE_ID_FIELD = "shopifyId"
SOURCE_INFO_FIELD = "__sourceInfo"


class SanityBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SlugPayload(SanityBaseModel):
    current: str


class SanityDocument(SanityBaseModel):
    id: str = Field(alias="_id")
    type: str = Field(alias="_type")
    shopify_id: str = Field(alias=SOURCE_ID_FIELD)
    slug: SlugPayload | None = None
    source_info: dict[str, Any] | None = Field(default=None, alias=SOURCE_INFO_FIELD)

    def to_target(self) -> TargetDocument:
        return TargetDocument(
            id=self.id,
            type_tag=self.type,
            source_id=self.shopify_id,
            slug=Slug(self.slug.current) if self.slug is not None else None,
            source_info=self.source_info,
        )


class QueryResponse(SanityBaseModel):
    result: SanityDocument | None = None


class MutationResult(SanityBaseModel):
    id: str
    operation: str | None = None
    document: SanityDocument | None = None


class MutationResponse(SanityBaseModel):
    transaction_id: str | None = Field(default=None, alias="transactionId")
    results: list[MutationResult]


class ErrorDetails(SanityBaseModel):
    description: str | None = None
    type: str | None = None


class ErrorResponse(SanityBaseModel):
    error: ErrorDetails | str | None = None
    message: str | None = None

    def describe(self) -> str:
        if isinstance(self.error, ErrorDetails) and self.error.description:
            return self.error.description
        if isinstance(self.error, str):
            return self.message or self.error
        return self.message or "unknown error"
