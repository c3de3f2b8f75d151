"""Line cursor utilities for the orgweave parser.

Provides the mixin the block parsers use to walk the input one line at a
time. Every alternative in the block grammar saves ``_pos`` before it starts
and the dispatcher restores it when the alternative gives up.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import overload


def split_lines(text: str) -> list[str]:
    """Split text into lines without their terminators.

    A trailing newline does not produce a final empty line.

    Examples:
        >>> split_lines("a\\nb\\n")
        ['a', 'b']
        >>> split_lines("a\\n\\n")
        ['a', '']
        >>> split_lines("")
        []
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class LineWindow(Sequence[str]):
    """Lines ``lines[start:]`` with the first one replaced by ``head``.

    Lets a sub-parser continue over the rest of its parent's input without
    copying it.

    Examples:
        >>> window = LineWindow(["[fn:1] a", "b", "c"], 0, "a")
        >>> list(window)
        ['a', 'b', 'c']
    """

    __slots__ = ("_head", "_lines", "_start")

    def __init__(self, lines: Sequence[str], start: int, head: str) -> None:
        if not 0 <= start < len(lines):
            raise IndexError(start)
        self._lines = lines
        self._start = start
        self._head = head

    def __len__(self) -> int:
        return len(self._lines) - self._start

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index: int | slice) -> str | list[str]:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(index)
        if index == 0:
            return self._head
        return self._lines[self._start + index]


class LineNavigationMixin:
    """Mixin providing line cursor navigation methods.

    Required Host Attributes:
        - _lines: Sequence[str]
        - _pos: int

    """

    _lines: Sequence[str]
    _pos: int

    def _at_end(self) -> bool:
        """Check if every line has been consumed."""
        return self._pos >= len(self._lines)

    def _current_line(self) -> str:
        """Line under the cursor. Callers check ``_at_end`` first."""
        return self._lines[self._pos]

    def _advance(self, count: int = 1) -> None:
        self._pos += count
