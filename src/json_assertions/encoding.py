"""Encoding host values into JSON documents."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from .json_types import JSONValue

type Encoder = Callable[[Any], JSONValue]


class EncodingError(RuntimeError):
    """Raised when a host value cannot be encoded as JSON."""


def encode_value(value: Any) -> JSONValue:
    """Encode a host value the way pydantic serialises it in JSON mode.

    Pydantic models, dataclasses, enums, dates, tuples and sets are all
    accepted alongside plain JSON-compatible Python values.

    Args:
        value (Any): Host value to encode.

    Returns:
        JSONValue: The encoded document.
    """
    try:
        return to_jsonable_python(value)
    except PydanticSerializationError as exc:
        raise EncodingError(f"Unable to encode {type(value).__name__} value as JSON: {exc}") from exc
