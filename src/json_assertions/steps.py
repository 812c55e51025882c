"""Instruction set for one step of a parallel walk over a document and a host value.

Every instruction is an immutable value. ``I`` is the host shape before the
step, ``J`` the host shape after it, and ``A`` whatever the continuation
produces (the rest of the program, once a program is built around it).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, Optional, TypeVar, Union

from .json_types import JSONValue

I = TypeVar("I")
J = TypeVar("J")
A = TypeVar("A")
B = TypeVar("B")

type Predicate = Callable[[JSONValue], Optional[str]]


@dataclass(frozen=True)
class DescendByKey(Generic[I, J, A]):
    """Descend into the value stored under ``name`` in an object node."""

    name: str
    project: Callable[[I], J]
    continuation: Callable[[J], A]
    shape: Optional[type] = None

    def map(self, fn: Callable[[A], B]) -> DescendByKey[I, J, B]:
        """Post-compose ``fn`` onto the continuation."""
        continuation = self.continuation
        return replace(self, continuation=lambda host: fn(continuation(host)))


@dataclass(frozen=True)
class DescendByIndex(Generic[I, J, A]):
    """Descend into the element at ``position`` in an array node."""

    position: int
    project: Callable[[I], J]
    continuation: Callable[[J], A]
    shape: Optional[type] = None

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError(f"Array position must be non-negative, got {self.position}")

    def map(self, fn: Callable[[A], B]) -> DescendByIndex[I, J, B]:
        """Post-compose ``fn`` onto the continuation."""
        continuation = self.continuation
        return replace(self, continuation=lambda host: fn(continuation(host)))


@dataclass(frozen=True)
class Assert(Generic[I, A]):
    """Check the current node; the host value and its shape are unchanged.

    The predicate returns ``None`` when the node is acceptable and a
    diagnostic message otherwise.
    """

    predicate: Predicate
    continuation: A

    def map(self, fn: Callable[[A], B]) -> Assert[I, B]:
        """Apply ``fn`` to the continuation."""
        return Assert(self.predicate, fn(self.continuation))


@dataclass(frozen=True)
class Terminate:
    """End the branch, erasing the host shape to ``None``."""

    def map(self, fn: Callable[[Any], Any]) -> Terminate:
        """Terminating has no continuation to transform."""
        del fn
        return self


type Instruction = Union[
    DescendByKey[Any, Any, Any],
    DescendByIndex[Any, Any, Any],
    Assert[Any, Any],
    Terminate,
]
