"""GraphQL documents for the Shopify Storefront API."""

from __future__ import annotations

from typing import Final

PRODUCT_FRAGMENT: Final[str] = """
fragment ProductFields on Product {
  __typename
  id
  handle
  title
  description
  descriptionHtml
  vendor
  productType
  tags
  availableForSale
  createdAt
  updatedAt
  publishedAt
  options {
    id
    name
    values
  }
  priceRange {
    minVariantPrice { amount currencyCode }
    maxVariantPrice { amount currencyCode }
  }
  images(first: 20) {
    edges {
      cursor
      node { id altText url width height }
    }
  }
  variants(first: 100) {
    edges {
      cursor
      node {
        __typename
        id
        title
        sku
        availableForSale
        selectedOptions { name value }
        price { amount currencyCode }
        compareAtPrice { amount currencyCode }
        image { id altText url width height }
      }
    }
  }
  collections(first: 50) {
    edges {
      cursor
      node { __typename id handle title }
    }
  }
}
"""

COLLECTION_FRAGMENT: Final[str] = """
fragment CollectionFields on Collection {
  __typename
  id
  handle
  title
  description
  descriptionHtml
  updatedAt
  image { id altText url width height }
  products(first: 100) {
    edges {
      cursor
      node { __typename id handle title }
    }
  }
}
"""

PRODUCTS_QUERY: Final[str] = (
    """
query ProductsQuery($first: Int!, $after: String) {
  products(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    edges {
      cursor
      node { ...ProductFields }
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

COLLECTIONS_QUERY: Final[str] = (
    """
query CollectionsQuery($first: Int!, $after: String) {
  collections(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    edges {
      cursor
      node { ...CollectionFields }
    }
  }
}
"""
    + COLLECTION_FRAGMENT
)

PRODUCT_BY_HANDLE_QUERY: Final[str] = (
    """
query ProductByHandleQuery($handle: String!) {
  product(handle: $handle) { ...ProductFields }
}
"""
    + PRODUCT_FRAGMENT
)

COLLECTION_BY_HANDLE_QUERY: Final[str] = (
    """
query CollectionByHandleQuery($handle: String!) {
  collection(handle: $handle) { ...CollectionFields }
}
"""
    + COLLECTION_FRAGMENT
)
