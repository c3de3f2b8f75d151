"""Deferred values: computations pending the final parse state.

The scan pass cannot know everything it needs when it meets a construct: a
footnote reference may precede its definition, and link abbreviations or
metadata may be declared at the end of the file. Every parser therefore
returns a ``Deferred`` that wraps a function from the final, frozen parse
state to the value. The whole document becomes one deferred tree which is
resolved exactly once, after scanning has finished.

Example:
    >>> from orgweave.deferred import Deferred, concat
    >>> a = Deferred.pure((1,))
    >>> b = Deferred(lambda state: (len(state.footnotes),))
    >>> doc = concat([a, b, Deferred.empty()])
    >>> doc.resolve(frozen_state)  # doctest: +SKIP
    (1, 0)

Thread Safety:
    Deferred instances are immutable. Resolution is pure as long as the
    wrapped functions are.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from orgweave.errors import StateError

if TYPE_CHECKING:
    from orgweave.state import FrozenState


class Deferred[T]:
    """A value computed from the final parse state.

    Combinators build larger deferred values without running anything;
    ``resolve`` is the only terminal operation.
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[FrozenState], T]) -> None:
        self._run = run

    @classmethod
    def pure(cls, value: T) -> Deferred[T]:
        """Lift a plain value; the state is ignored."""
        return cls(lambda _state: value)

    @classmethod
    def empty(cls) -> Deferred[tuple[Any, ...]]:
        """Identity for tuple concatenation."""
        return _EMPTY

    def map[U](self, func: Callable[[T], U]) -> Deferred[U]:
        """Apply ``func`` to the eventual value."""
        run = self._run
        return Deferred(lambda state: func(run(state)))

    def combine[U, V](self, other: Deferred[U], func: Callable[[T, U], V]) -> Deferred[V]:
        """Combine two deferred values once both are resolved."""
        left = self._run
        right = other._run
        return Deferred(lambda state: func(left(state), right(state)))

    def __add__(self, other: Deferred[Any]) -> Deferred[Any]:
        if other is _EMPTY:
            return self
        if self is _EMPTY:
            return other
        return self.combine(other, lambda a, b: a + b)

    def resolve(self, state: FrozenState) -> T:
        """Force the value against the final parse state.

        Raises:
            StateError: If ``state`` is not a frozen parse state.
        """
        from orgweave.state import FrozenState

        if not isinstance(state, FrozenState):
            raise StateError(
                f"deferred values resolve against a FrozenState, got {type(state).__name__}"
            )
        return self._run(state)

    def __repr__(self) -> str:
        return f"Deferred({self._run!r})"


_EMPTY: Deferred[tuple[Any, ...]] = Deferred(lambda _state: ())


def pure[T](value: T) -> Deferred[T]:
    """Module-level alias for ``Deferred.pure``."""
    return Deferred.pure(value)


def sequence[T](items: Iterable[Deferred[T]]) -> Deferred[tuple[T, ...]]:
    """Turn deferred values into one deferred tuple, preserving order."""
    runs = [item._run for item in items]
    if not runs:
        return _EMPTY
    return Deferred(lambda state: tuple(run(state) for run in runs))


def concat[T](items: Iterable[Deferred[tuple[T, ...]]]) -> Deferred[tuple[T, ...]]:
    """Concatenate deferred tuples into one deferred tuple.

    Evaluation is a flat loop, so documents with many blocks do not build a
    deep chain of nested closures.
    """
    runs = [item._run for item in items if item is not _EMPTY]
    if not runs:
        return _EMPTY
    if len(runs) == 1:
        return Deferred(runs[0])

    def run_all(state: FrozenState) -> tuple[T, ...]:
        out: list[T] = []
        for run in runs:
            out.extend(run(state))
        return tuple(out)

    return Deferred(run_all)


__all__ = [
    "Deferred",
    "concat",
    "pure",
    "sequence",
]
