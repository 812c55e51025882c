"""Declarative assertions on JSON encodings, walked in lockstep with the encoded value."""

from __future__ import annotations

from .encoding import EncodingError, encode_value
from .interpreter import (
    JSONAssertionFailed,
    RunOptions,
    ShapeMismatchError,
    check,
    format_failures,
    interpret,
    run_test,
)
from .program import (
    All,
    Done,
    Program,
    Step,
    all_of,
    assert_equal_to,
    assert_with,
    chain,
    finalize,
    json_program,
    key,
    nth,
    pure,
    terminate,
)

__all__ = [
    "All",
    "Done",
    "EncodingError",
    "JSONAssertionFailed",
    "Program",
    "RunOptions",
    "ShapeMismatchError",
    "Step",
    "all_of",
    "assert_equal_to",
    "assert_with",
    "chain",
    "check",
    "encode_value",
    "finalize",
    "format_failures",
    "interpret",
    "json_program",
    "key",
    "nth",
    "pure",
    "run_test",
    "terminate",
]
