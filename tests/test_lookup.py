"""Unit tests for single-match document lookup."""

from __future__ import annotations

from json_assertions.lookup import Matched, lookup_index, lookup_key


def test_lookup_key_matches_present_key() -> None:
    """A present key yields its value, including JSON null."""
    assert lookup_key({"name": "Alice"}, "name") == Matched("Alice")
    assert lookup_key({"nickname": None}, "nickname") == Matched(None)


def test_lookup_key_rejects_missing_key_and_non_objects() -> None:
    """Missing keys and non-object nodes find nothing."""
    assert lookup_key({"name": "Alice"}, "missing") is None
    assert lookup_key(["name"], "name") is None
    assert lookup_key("name", "name") is None


def test_lookup_index_matches_in_range_positions() -> None:
    """Array elements are addressed by zero-based position."""
    assert lookup_index([10, 20, 30], 1) == Matched(20)
    assert lookup_index([10, 20, 30], 3) is None
    assert lookup_index([10, 20, 30], -1) is None


def test_lookup_index_rejects_non_arrays() -> None:
    """Objects and strings are not indexable."""
    assert lookup_index({"0": 1}, 0) is None
    assert lookup_index("abc", 0) is None
