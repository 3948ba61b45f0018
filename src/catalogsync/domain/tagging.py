"""Map remote discriminators onto document-store type tags."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import MissingDiscriminatorError, UnsupportedDiscriminatorError
from .model import EntityKind, TypeTag

if TYPE_CHECKING:
    from .model import RemoteEntity

_TYPE_TAGS: dict[str, TypeTag] = {
    EntityKind.PRODUCT: TypeTag.PRODUCT,
    EntityKind.COLLECTION: TypeTag.COLLECTION,
}


def type_tag_for(entity: RemoteEntity) -> TypeTag:
    """Return the type tag ``entity`` is stored under."""

    if entity.typename is None:
        raise MissingDiscriminatorError(entity.source_id)
    try:
        return _TYPE_TAGS[entity.typename]
    except KeyError:
        raise UnsupportedDiscriminatorError(entity.typename) from None
