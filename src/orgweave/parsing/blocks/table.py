"""Table parsing for orgweave.

Org tables are runs of lines starting with ``|``::

    | Name  | Qty |
    |-------+-----|
    | <l>   | <r> |
    | apple |   3 |

Rows come in three kinds. A rule row (``|-``) separates the header; an
alignment row holds only empty cells and ``<l>``/``<c>``/``<r>`` cookies
(optionally with a width, ``<l10>``); every other row carries content.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred, sequence
from orgweave.nodes import Alignment, Attr, Plain, Table
from orgweave.tokens import StartType

if TYPE_CHECKING:
    from collections.abc import Callable

    from orgweave.lexer import LineScanner
    from orgweave.nodes import Block, Inline
    from orgweave.parsing.blocks.core import Blocks

_ALIGN_COOKIE_RE = re.compile(r"^<([lcr])[0-9]*>$")
_ALIGNMENTS: dict[str, Alignment] = {"l": "left", "c": "center", "r": "right"}

type Row = Deferred[tuple[Block, ...]]


def split_cells(text: str) -> list[str]:
    """Split the text after a row's leading pipe into raw cells.

    A trailing pipe closes the last cell rather than opening an empty one.

    Examples:
        >>> split_cells(" a | b |")
        [' a ', ' b ']
        >>> split_cells(" a | b")
        [' a ', ' b']
        >>> split_cells("")
        ['']
    """
    text = text.rstrip()
    cells = text.split("|")
    if len(cells) > 1 and text.endswith("|"):
        cells.pop()
    return cells


def parse_alignment_row(cells: list[str]) -> list[Alignment] | None:
    """Alignments of an alignment row, or None for any other row.

    A row with only empty cells is a content row.

    Examples:
        >>> parse_alignment_row([" <l> ", "", "<r10>"])
        ['left', None, 'right']
        >>> parse_alignment_row([" ", " "]) is None
        True
    """
    alignments: list[Alignment] = []
    for cell in cells:
        cell = cell.strip()
        if not cell:
            alignments.append(None)
            continue
        match = _ALIGN_COOKIE_RE.match(cell)
        if match is None:
            return None
        alignments.append(_ALIGNMENTS[match.group(1)])
    if all(alignment is None for alignment in alignments):
        return None
    return alignments


@dataclass(slots=True)
class TableBuilder:
    """Fold state while reading the rows of one table."""

    alignments: list[Alignment] = field(default_factory=list)
    header: Row | None = None
    rows: list[Row] = field(default_factory=list)
    # Cell counts of the content rows in reading order. A promoted header
    # was the first content row, so widths[0] is always the reference row.
    widths: list[int] = field(default_factory=list)

    def add_rule(self) -> None:
        """A rule under exactly one body row turns that row into the header."""
        if self.header is None and len(self.rows) == 1:
            self.header = self.rows.pop()

    def add_alignments(self, alignments: list[Alignment]) -> None:
        self.alignments = alignments

    def add_row(self, row: Row, width: int) -> None:
        self.rows.append(row)
        self.widths.append(width)

    def column_count(self) -> int:
        """Cells in the header, else in the first body row, else 0."""
        return self.widths[0] if self.widths else 0

    def normalized_alignments(self) -> tuple[Alignment, ...]:
        """Alignments padded with None or truncated to the column count."""
        count = self.column_count()
        padded = self.alignments + [None] * max(0, count - len(self.alignments))
        return tuple(padded[:count])


class TableParsingMixin:
    """Mixin for Org table parsing.

    Required Host Attributes:
        - _scanner: LineScanner
        - _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    Required Host Methods:
        - _parse_block_attributes() -> BlockAttributes
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None

    """

    _scanner: LineScanner
    _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    def _try_parse_table(self) -> Deferred[Blocks] | None:
        attrs = self._parse_block_attributes()
        if self._at_end() or self._scanner.match(self._current_line(), StartType.TABLE_ROW) is None:
            return None

        builder = TableBuilder()
        while not self._at_end():
            start = self._scanner.match(self._current_line(), StartType.TABLE_ROW)
            if start is None:
                break
            self._advance()

            if start.type is StartType.TABLE_RULE:
                builder.add_rule()
                continue
            cells = split_cells(start.value)
            alignments = parse_alignment_row(cells)
            if alignments is not None:
                builder.add_alignments(alignments)
            else:
                builder.add_row(self._table_row(cells), len(cells))

        alignments = builder.normalized_alignments()
        header = builder.header if builder.header is not None else Deferred.pure(())
        rows = sequence(builder.rows)
        caption = attrs.caption if attrs.caption is not None else Deferred.pure(())
        attr = Attr(identifier=attrs.name or "", keyvalues=attrs.keyvalues)

        def build(parts: tuple) -> Blocks:
            header_cells, body, caption_inlines = parts
            return (Table(alignments, header_cells, body, caption_inlines, attr),)

        return sequence([header, rows, caption]).map(build)

    def _table_row(self, cells: list[str]) -> Row:
        """Inline-parse every cell of a content row into a Plain."""
        return sequence(
            self._inline(cell).map(lambda inlines: Plain(inlines)) for cell in cells
        )


__all__ = [
    "TableBuilder",
    "TableParsingMixin",
    "parse_alignment_row",
    "split_cells",
]
