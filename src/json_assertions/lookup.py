"""Single-match lookup into JSON documents by object key or array index."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .json_types import JSONValue, is_json_array


@dataclass(frozen=True)
class Matched:
    """The sub-value found by a lookup.

    Wrapping the value keeps a matched JSON ``null`` distinguishable from a
    lookup that found nothing.
    """

    value: JSONValue


def lookup_key(node: JSONValue, name: str) -> Optional[Matched]:
    """Look up ``name`` in an object node.

    Returns ``None`` when the node is not an object or lacks the key.
    """
    if not isinstance(node, Mapping) or name not in node:
        return None
    return Matched(node[name])


def lookup_index(node: JSONValue, position: int) -> Optional[Matched]:
    """Look up ``position`` in an array node.

    Negative positions never match; there is no counting from the end.
    """
    if not is_json_array(node) or position < 0 or position >= len(node):
        return None
    return Matched(node[position])
