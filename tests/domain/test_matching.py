from __future__ import annotations

from catalogsync.domain.matching import is_match


def test_extra_document_keys_are_ignored_at_every_level() -> None:
    document = {
        "id": "doc-1",
        "slug": {"current": "shirt", "_type": "slug"},
        "source_info": {"title": "Shirt", "legacyField": True},
    }
    projection = {"slug": {"current": "shirt"}, "source_info": {"title": "Shirt"}}

    assert is_match(document, projection)


def test_missing_or_different_values_do_not_match() -> None:
    document = {"slug": {"current": "shirt"}}

    assert not is_match(document, {"slug": {"current": "shirt-2"}})
    assert not is_match(document, {"source_info": {}})
    assert not is_match({"slug": "shirt"}, {"slug": {"current": "shirt"}})


def test_lists_compare_element_wise() -> None:
    document = {"tags": ["a", "b"], "images": [{"url": "x", "width": 10}]}

    assert is_match(document, {"tags": ["a", "b"], "images": [{"url": "x"}]})
    assert not is_match(document, {"tags": ["b", "a"]})
    assert not is_match(document, {"tags": ["a"]})
    assert not is_match({"tags": "ab"}, {"tags": ["a", "b"]})
