from __future__ import annotations

import pytest

from catalogsync.domain.errors import (
    DiscriminatorError,
    MissingDiscriminatorError,
    UnsupportedDiscriminatorError,
)
from catalogsync.domain.model import RemoteEntity, TypeTag
from catalogsync.domain.tagging import type_tag_for
from tests.support.catalog import make_entity


def test_products_and_collections_map_to_their_type_tags() -> None:
    assert type_tag_for(make_entity(1, typename="Product")) is TypeTag.PRODUCT
    assert type_tag_for(make_entity(2, typename="Collection")) is TypeTag.COLLECTION


def test_unknown_typename_is_rejected() -> None:
    entity = make_entity(3, typename="ProductVariant")

    with pytest.raises(UnsupportedDiscriminatorError, match="ProductVariant") as excinfo:
        type_tag_for(entity)

    assert excinfo.value.discriminator == "ProductVariant"


def test_missing_typename_is_rejected() -> None:
    entity = RemoteEntity(typename=None, source_id="gid://shopify/Product/9", handle="nine")

    with pytest.raises(MissingDiscriminatorError):
        type_tag_for(entity)


def test_node_without_typename_builds_an_untagged_entity() -> None:
    entity = make_entity(4, typename=None)

    assert entity.typename is None
    with pytest.raises(MissingDiscriminatorError, match="__typename"):
        type_tag_for(entity)


def test_discriminator_errors_share_a_base_class() -> None:
    assert issubclass(MissingDiscriminatorError, DiscriminatorError)
    assert issubclass(UnsupportedDiscriminatorError, DiscriminatorError)
