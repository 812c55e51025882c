"""JSON value typing aliases, structural equality and diagnostic rendering."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Union

type JSONPrimitive = Union[str, int, float, bool, None]
type JSONValue = JSONPrimitive | list[JSONValue] | Mapping[str, JSONValue]
type JSONObject = Mapping[str, JSONValue]
type JSONArray = list[JSONValue]


def is_json_object(value: JSONValue) -> bool:
    """Return whether ``value`` is a JSON object node."""
    return isinstance(value, Mapping)


def is_json_array(value: JSONValue) -> bool:
    """Return whether ``value`` is a JSON array node.

    Strings are sequences in Python but never arrays in JSON.
    """
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def json_equal(left: JSONValue, right: JSONValue) -> bool:
    """Compare two JSON values structurally.

    Booleans and numbers are distinct JSON types, so ``True`` does not equal
    ``1`` here even though it does in Python. Object key order is ignored and
    array order is significant.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right

    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, Mapping):
        if not isinstance(right, Mapping) or len(left) != len(right):
            return False
        return all(name in right and json_equal(item, right[name]) for name, item in left.items())

    if is_json_array(left):
        if not is_json_array(right) or len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))

    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right

    return left == right


def render_json(value: JSONValue) -> str:
    """Render a JSON value canonically for failure messages."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
