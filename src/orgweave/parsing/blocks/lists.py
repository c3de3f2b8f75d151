"""List parsing for orgweave.

Org has three list forms::

    - bullet item           (also + item, or * item when indented)
    1. ordered item         (also 1) item)
    - term :: definition    (definition list)

The first item fixes the list's marker indentation and its item width (the
indentation, the marker and the whitespace after it). Later items must start
at the same indentation; continuation lines must be indented by at least the
item width and lose exactly that many columns. An item's first line and its
continuation lines are parsed again as blocks, so nested lists, tables and
regions inside items go through the full block grammar.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred, sequence
from orgweave.nodes import (
    BulletList,
    DefinitionItem,
    DefinitionList,
    ListItem,
    OrderedList,
    Para,
    Plain,
)
from orgweave.tokens import StartType
from orgweave.utils.text import strip_indent

if TYPE_CHECKING:
    from orgweave.lexer import LineScanner
    from orgweave.nodes import Block, Inline
    from orgweave.parsing.blocks.core import Blocks
    from orgweave.state import ParseState
    from orgweave.tokens import LineStart

_DEFINITION_RE = re.compile(r"^(.*?)[ \t]::(?:[ \t](.*))?$")

type ItemBlocks = tuple[Block, ...]


def split_definition(text: str) -> tuple[str, str] | None:
    """Split an item's text at the first `` :: `` marker.

    Examples:
        >>> split_definition("Emacs :: a text editor")
        ('Emacs', 'a text editor')
        >>> split_definition("Emacs ::")
        ('Emacs', '')
        >>> split_definition("a::b") is None
        True
    """
    match = _DEFINITION_RE.match(text)
    if match is None:
        return None
    return match.group(1), match.group(2) or ""


def compact_items(items: list[ItemBlocks]) -> list[ItemBlocks]:
    """Demote the final paragraph of a list when it is the only one.

    A list whose items hold no paragraph apart from the one closing the last
    item renders tight; that paragraph becomes Plain.
    """
    if not items or not items[-1] or not isinstance(items[-1][-1], Para):
        return items
    paragraphs = sum(isinstance(block, Para) for item in items for block in item)
    if paragraphs != 1:
        return items
    last = items[-1]
    return [*items[:-1], (*last[:-1], Plain(last[-1].children))]


class ListParsingMixin:
    """Mixin for bullet, ordered and definition lists.

    Required Host Attributes:
        - _scanner: LineScanner
        - _state: ParseState
        - _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    Required Host Methods:
        - _parse_nested_content(text) -> Deferred[Blocks]
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None

    """

    _scanner: LineScanner
    _state: ParseState
    _pos: int
    _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    def _try_parse_list(self) -> Deferred[Blocks] | None:
        start = self._pos
        for attempt in (
            self._try_parse_definition_list,
            self._try_parse_bullet_list,
            self._try_parse_ordered_list,
        ):
            result = attempt()
            if result is not None:
                return result
            self._pos = start
        return None

    # =========================================================================
    # List forms
    # =========================================================================

    def _try_parse_bullet_list(self) -> Deferred[Blocks] | None:
        items = self._collect_items(StartType.BULLET)
        if not items:
            return None
        contents = sequence(self._item_content(text) for _start, text in items)
        return contents.map(
            lambda blocks: (BulletList(tuple(ListItem(b) for b in compact_items(list(blocks)))),)
        )

    def _try_parse_ordered_list(self) -> Deferred[Blocks] | None:
        items = self._collect_items(StartType.ORDERED)
        if not items:
            return None
        first_number = int(items[0][0].marker)
        contents = sequence(self._item_content(text) for _start, text in items)
        return contents.map(
            lambda blocks: (
                OrderedList(
                    tuple(ListItem(b) for b in compact_items(list(blocks))),
                    start=first_number,
                ),
            )
        )

    def _try_parse_definition_list(self) -> Deferred[Blocks] | None:
        items = self._collect_items(StartType.BULLET, definitions=True)
        if not items:
            return None

        terms: list[Deferred[tuple[Inline, ...]]] = []
        bodies: list[Deferred[ItemBlocks]] = []
        for _start, text in items:
            term, _sep, body = text.partition("\n")
            split = split_definition(term)
            if split is None:
                return None
            terms.append(self._inline(split[0]))
            bodies.append(self._item_content(split[1] + _sep + body))

        def build(parts: tuple) -> Blocks:
            term_inlines, definitions = parts
            compacted = compact_items(list(definitions))
            return (
                DefinitionList(
                    tuple(DefinitionItem(t, d) for t, d in zip(term_inlines, compacted, strict=True))
                ),
            )

        return sequence([sequence(terms), sequence(bodies)]).map(build)

    # =========================================================================
    # Items
    # =========================================================================

    def _collect_items(
        self,
        marker_type: StartType,
        *,
        definitions: bool = False,
    ) -> list[tuple[LineStart, str]]:
        """Read the items of one list.

        Returns:
            (marker, item text) pairs; empty when the cursor is not at an
            item of this form.
        """
        first = self._scanner.match(self._current_line(), marker_type)
        if first is None:
            return []

        items: list[tuple[LineStart, str]] = []
        while not self._at_end():
            marker = self._scanner.match(self._current_line(), marker_type)
            if marker is None or marker.indent != first.indent:
                break
            if definitions and split_definition(marker.value) is None:
                break
            self._advance()
            items.append((marker, self._read_item_text(marker.value, first.width)))
        return items

    def _read_item_text(self, first_line: str, width: int) -> str:
        """Join an item's first line with its continuation lines.

        One blank line may follow the first line. After that, runs of lines
        indented by at least ``width`` columns, each run optionally followed by
        blank lines, belong to the item.
        """
        tab_stop = self._scanner.tab_stop
        parts = [first_line + "\n"]
        if not self._at_end() and self._scanner.is_blank(self._current_line()):
            parts.append("\n")
            self._advance()

        while not self._at_end() and not self._scanner.is_blank(self._current_line()):
            if strip_indent(self._current_line(), width, tab_stop) is None:
                break
            while not self._at_end():
                stripped = strip_indent(self._current_line(), width, tab_stop)
                if stripped is None:
                    break
                parts.append(stripped + "\n")
                self._advance()
            while not self._at_end() and self._scanner.is_blank(self._current_line()):
                parts.append("\n")
                self._advance()
        return "".join(parts)

    def _item_content(self, text: str) -> Deferred[ItemBlocks]:
        """Parse an item's text as blocks in list context."""
        with self._state.list_item():
            return self._parse_nested_content(text)


__all__ = ["ListParsingMixin", "compact_items", "split_definition"]
