"""Pydantic models describing Storefront API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StorefrontBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GraphQLErrorPayload(StorefrontBaseModel):
    message: str
    path: list[str | int] | None = None


class GraphQLResponse(StorefrontBaseModel):
    data: dict[str, Any] | None = None
    errors: list[GraphQLErrorPayload] | None = None


class PageInfo(StorefrontBaseModel):
    has_next_page: bool = Field(alias="hasNextPage")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class Edge(StorefrontBaseModel):
    cursor: str | None = None
    node: dict[str, Any]


class Connection(StorefrontBaseModel):
    page_info: PageInfo = Field(alias="pageInfo")
    edges: list[Edge]

    def unwind(self) -> tuple[list[dict[str, Any]], str | None]:
        """Return the nodes and the cursor that continues after them."""

        nodes = [edge.node for edge in self.edges]
        last_cursor = self.page_info.end_cursor
        if last_cursor is None and self.edges:
            last_cursor = self.edges[-1].cursor
        return nodes, last_cursor
