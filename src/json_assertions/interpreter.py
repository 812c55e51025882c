"""Run programs against a document and the host value it was encoded from."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional

from .encoding import Encoder, encode_value
from .json_types import JSONValue
from .lookup import Matched, lookup_index, lookup_key
from .program import All, Done, Program, Step
from .steps import Assert, DescendByIndex, DescendByKey, Terminate

logger = logging.getLogger(__name__)

_NO_MATCH = "failed to match any targets"
_FAILED_ASSERTION = "failed assertion"


class ShapeMismatchError(RuntimeError):
    """Raised when a projection produces a host value of the wrong declared shape."""


class JSONAssertionFailed(AssertionError):
    """Raised by ``check`` when a program reports failures."""

    def __init__(self, failures: list[str]) -> None:
        super().__init__(format_failures(failures))
        self.failures = failures


@dataclass(frozen=True)
class RunOptions:
    """Options for one interpreter run.

    ``index_in_failures`` appends the missing position to array lookup
    failures; by default they only name the array itself.
    """

    root_label: str = "subject"
    index_in_failures: bool = False


@dataclass(frozen=True)
class _Frame:
    program: Program[Any, Any, Any]
    node: JSONValue
    host: Any
    path: str


def interpret(
    program: Program[Any, Any, Any],
    document: JSONValue,
    host: Any,
    *,
    options: RunOptions = RunOptions(),
) -> list[str]:
    """Walk ``document`` and ``host`` in lockstep and collect failure messages.

    Args:
        program (Program): The test to run.
        document (JSONValue): Root JSON document.
        host (Any): Host value corresponding to the root document.
        options (RunOptions): Path labelling options.

    Returns:
        list[str]: Failure messages in program order; empty when every
        assertion held.
    """
    failures: list[str] = []
    pending = [_Frame(program, document, host, options.root_label)]
    while pending:
        frame = pending.pop()
        if isinstance(frame.program, All):
            pending.extend(
                _Frame(member, frame.node, frame.host, frame.path)
                for member in reversed(frame.program.programs)
            )
            continue
        failure, following = _advance(frame, options=options)
        if failure is not None:
            logger.debug("JSON assertion failure: %s", failure)
            failures.append(failure)
        if following is not None:
            pending.append(following)
    return failures


def run_test(
    program: Program[Any, Any, Any],
    host: Any,
    *,
    encoder: Encoder = encode_value,
    options: RunOptions = RunOptions(),
) -> list[str]:
    """Encode ``host`` and run ``program`` against the resulting document."""
    document = encoder(host)
    logger.debug("Running JSON program against encoded %s", type(host).__name__)
    return interpret(program, document, host, options=options)


def check(
    program: Program[Any, Any, Any],
    host: Any,
    *,
    encoder: Encoder = encode_value,
    options: RunOptions = RunOptions(),
) -> None:
    """Like ``run_test`` but raise ``JSONAssertionFailed`` on any failure."""
    failures = run_test(program, host, encoder=encoder, options=options)
    if failures:
        raise JSONAssertionFailed(failures)


def format_failures(failures: Iterable[str]) -> str:
    """Join failure messages into one report."""
    return "\n".join(failures)


def _advance(frame: _Frame, *, options: RunOptions) -> tuple[Optional[str], Optional[_Frame]]:
    program = frame.program
    if isinstance(program, Done):
        return None, None
    if not isinstance(program, Step):
        raise TypeError(f"Unsupported program node {type(program).__name__}")

    instruction = program.instruction
    if isinstance(instruction, DescendByKey):
        path = f'{frame.path}["{instruction.name}"]'
        matched = lookup_key(frame.node, instruction.name)
        if matched is None:
            return f"{path} {_NO_MATCH}", None
        return None, _descend(frame, instruction, matched, path)

    if isinstance(instruction, DescendByIndex):
        path = f"{frame.path}[{instruction.position}]"
        matched = lookup_index(frame.node, instruction.position)
        if matched is None:
            failed_path = path if options.index_in_failures else frame.path
            return f"{failed_path} {_NO_MATCH}", None
        return None, _descend(frame, instruction, matched, path)

    if isinstance(instruction, Assert):
        message = instruction.predicate(frame.node)
        if message is not None:
            return f"{frame.path} {_FAILED_ASSERTION}\n{message}", None
        return None, _Frame(instruction.continuation, frame.node, frame.host, frame.path)

    if isinstance(instruction, Terminate):
        return None, None

    raise TypeError(f"Unsupported instruction {type(instruction).__name__}")


def _descend(
    frame: _Frame,
    instruction: DescendByKey[Any, Any, Any] | DescendByIndex[Any, Any, Any],
    matched: Matched,
    path: str,
) -> _Frame:
    host = instruction.project(frame.host)
    shape = instruction.shape
    if shape is not None and not isinstance(host, shape):
        raise ShapeMismatchError(
            f"{path}: projection produced {type(host).__name__}, expected {shape.__name__}"
        )
    return _Frame(instruction.continuation(host), matched.value, host, path)
