"""Programs built from steps, and the public builder functions.

A program is a tree: ``Done`` ends it with a result, ``Step`` holds one
pending instruction whose continuation yields the rest of the program, and
``All`` runs several programs against the same starting point. Programs are
immutable and can be run any number of times.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any, Generic, Optional, ParamSpec, TypeVar

from .encoding import Encoder, encode_value
from .json_types import JSONValue, json_equal, render_json
from .steps import Assert, DescendByIndex, DescendByKey, Instruction, Predicate, Terminate

I = TypeVar("I")
J = TypeVar("J")
K = TypeVar("K")
A = TypeVar("A")
B = TypeVar("B")
_P = ParamSpec("_P")


class Program(Generic[I, J, A]):
    """A test walking from host shape ``I`` to host shape ``J``, producing ``A``."""

    def bind(self, continuation: Callable[[A], Program[J, K, B]]) -> Program[I, K, B]:
        """Continue with the program ``continuation`` builds from this result.

        ``Done``, ``Step`` and ``All`` each override this; the base class is
        never instantiated directly.
        """
        raise NotImplementedError

    def then(self, following: Program[J, K, B]) -> Program[I, K, B]:
        """Continue with ``following``, discarding this program's result."""
        return self.bind(lambda _result: following)

    def map(self, fn: Callable[[A], B]) -> Program[I, J, B]:
        """Transform the final result of the program."""
        return self.bind(lambda result: Done(fn(result)))


@dataclass(frozen=True)
class Done(Program[I, I, A]):
    """No more steps."""

    result: A

    def bind(self, continuation: Callable[[A], Program[I, K, B]]) -> Program[I, K, B]:
        return continuation(self.result)


@dataclass(frozen=True)
class Step(Program[I, J, A]):
    """One pending instruction."""

    instruction: Instruction

    def bind(self, continuation: Callable[[A], Program[J, K, B]]) -> Program[I, K, B]:
        return Step(self.instruction.map(lambda rest: rest.bind(continuation)))


@dataclass(frozen=True)
class All(Program[I, J, A]):
    """Independent programs run against the same document node and host value.

    Binding a continuation appends it to every member, so an empty ``All``
    never reaches its continuation.
    """

    programs: tuple[Program[I, J, A], ...]

    def bind(self, continuation: Callable[[A], Program[J, K, B]]) -> Program[I, K, B]:
        return All(tuple(program.bind(continuation) for program in self.programs))


def identity(value: I) -> I:
    """Default projection: the host value corresponds to the whole node."""
    return value


def pure(value: A) -> Program[I, I, A]:
    """A program that does nothing and produces ``value``."""
    return Done(value)


def key(
    name: str,
    project: Callable[[I], J] = identity,
    *,
    shape: Optional[type] = None,
) -> Program[I, J, J]:
    """Descend into object key ``name``.

    Args:
        name (str): Object key that must exist in the current node.
        project (Callable[[I], J]): Morphism from the current host value to the
            host value corresponding to the key's contents.
        shape (Optional[type]): When given, the projected host value must be an
            instance of this type; a mismatch raises ``ShapeMismatchError`` when
            the step runs.

    Returns:
        Program[I, J, J]: A program producing the projected host value.
    """
    return Step(DescendByKey(name, project, Done, shape))


def nth(
    position: int,
    project: Callable[[I], J] = identity,
    *,
    shape: Optional[type] = None,
) -> Program[I, J, J]:
    """Descend into array element ``position``.

    Args:
        position (int): Zero-based index that must exist in the current node.
        project (Callable[[I], J]): Morphism from the current host value to the
            host value corresponding to the element.
        shape (Optional[type]): Optional runtime check on the projected value.

    Returns:
        Program[I, J, J]: A program producing the projected host value.
    """
    return Step(DescendByIndex(position, project, Done, shape))


def assert_with(predicate: Predicate) -> Program[I, I, None]:
    """Check the current node with ``predicate``.

    The predicate returns ``None`` to accept the node or a message describing
    why it was rejected.
    """
    return Step(Assert(predicate, Done(None)))


def assert_equal_to(expected: Any, *, encoder: Encoder = encode_value) -> Program[I, I, None]:
    """Check that the current node equals the encoding of ``expected``.

    ``expected`` is encoded once, here, so the program can be run repeatedly
    without encoding it again.
    """
    expected_json = encoder(expected)

    def _predicate(actual: JSONValue) -> Optional[str]:
        if json_equal(actual, expected_json):
            return None
        return "\n".join(
            [
                f"Expected: {render_json(expected_json)}",
                f"     Got: {render_json(actual)}",
            ]
        )

    return assert_with(_predicate)


def terminate() -> Program[Any, None, Any]:
    """End the branch.

    The host shape becomes ``None``, which lets branches ending in different
    shapes be combined with ``all_of``.
    """
    return Step(Terminate())


def finalize(program: Program[I, J, A]) -> Program[I, None, A]:
    """Append ``terminate()`` so the program can be run or combined directly."""
    return program.bind(lambda _result: terminate())


def all_of(*programs: Program[I, J, A]) -> Program[I, J, A]:
    """Combine programs that each start from the current node and host value."""
    for program in programs:
        if not isinstance(program, Program):
            raise TypeError(f"all_of expects programs, got {type(program).__name__}")
    return All(programs)


def chain(*programs: Program[Any, Any, Any]) -> Program[Any, Any, Any]:
    """Run programs one after another, each starting where the previous ended.

    Folds from the right so running a long chain never builds deeply nested
    continuations.
    """
    if not programs:
        return pure(None)
    return functools.reduce(
        lambda rest, first: first.then(rest),
        reversed(programs[:-1]),
        programs[-1],
    )


def json_program(
    factory: Callable[_P, Generator[Program[Any, Any, Any], Any, A]],
) -> Callable[_P, Program[Any, Any, A]]:
    """Build a program from a generator function.

    The generator yields programs and receives each one's result::

        @json_program
        def person_name():
            name = yield key("name", lambda person: person.name)
            yield assert_equal_to(name)

    The generator is replayed from the start for every continuation, so it
    must not have side effects. This keeps the built program reusable.
    """

    @functools.wraps(factory)
    def _build(*args: _P.args, **kwargs: _P.kwargs) -> Program[Any, Any, A]:
        return _replay(lambda: factory(*args, **kwargs), ())

    return _build


def _replay(
    start: Callable[[], Generator[Program[Any, Any, Any], Any, A]],
    sent: tuple[Any, ...],
) -> Program[Any, Any, A]:
    generator = start()
    try:
        yielded = next(generator)
        for value in sent:
            yielded = generator.send(value)
    except StopIteration as stop:
        return Done(stop.value)
    finally:
        generator.close()

    if not isinstance(yielded, Program):
        raise TypeError(f"json_program generators must yield programs, got {type(yielded).__name__}")
    return yielded.bind(lambda result: _replay(start, (*sent, result)))
