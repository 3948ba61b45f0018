"""Public interface for the Shopify Storefront adapter."""

from __future__ import annotations

from .client import ShopifyStorefrontSource
from .schema import Connection, GraphQLResponse, PageInfo

__all__ = [
    "Connection",
    "GraphQLResponse",
    "PageInfo",
    "ShopifyStorefrontSource",
]
