"""Partial deep comparison between stored documents and update projections."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def is_match(document: Mapping[str, Any], projection: Mapping[str, Any]) -> bool:
    """Return whether ``document`` already holds every value in ``projection``.

    Keys present only in ``document`` are ignored, at every nesting level.
    Sequences must have the same length and match element by element.
    """

    for key, expected in projection.items():
        if key not in document:
            return False
        if not _values_match(document[key], expected):
            return False
    return True


def _values_match(actual: object, expected: object) -> bool:
    if isinstance(expected, Mapping):
        return isinstance(actual, Mapping) and is_match(actual, expected)
    if isinstance(expected, Sequence) and not isinstance(expected, (str, bytes)):
        if not isinstance(actual, Sequence) or isinstance(actual, (str, bytes)):
            return False
        if len(actual) != len(expected):
            return False
        return all(_values_match(a, e) for a, e in zip(actual, expected, strict=True))
    return actual == expected
