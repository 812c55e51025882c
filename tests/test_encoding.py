"""Unit tests for the default host value encoder."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum

import pytest
from pydantic import BaseModel

from json_assertions.encoding import EncodingError, encode_value


class Colour(Enum):
    RED = "red"


class Tagged(BaseModel):
    name: str
    colour: Colour
    created: dt.date


@dataclass
class Pair:
    left: int
    right: tuple[int, int]


def test_pydantic_models_encode_in_json_mode() -> None:
    """Models encode with enum values and ISO dates."""
    value = Tagged(name="box", colour=Colour.RED, created=dt.date(2024, 1, 2))
    assert encode_value(value) == {"name": "box", "colour": "red", "created": "2024-01-02"}


def test_dataclasses_and_tuples_encode_as_objects_and_arrays() -> None:
    """Dataclasses become objects and tuples become arrays."""
    assert encode_value(Pair(left=1, right=(2, 3))) == {"left": 1, "right": [2, 3]}


def test_plain_json_values_pass_through() -> None:
    """JSON-compatible values are unchanged."""
    assert encode_value({"a": [1, "b", None, True]}) == {"a": [1, "b", None, True]}


def test_unknown_types_raise_encoding_error() -> None:
    """Values pydantic cannot serialise are reported as encoding errors."""
    with pytest.raises(EncodingError):
        encode_value(object())
