"""Headers, drawers and footnote definitions.

Org:
    ** Release notes :docs:release:
    :PROPERTIES:
    :CUSTOM_ID: notes
    :CLASS: wide
    :END:

    :NOTES:
    Drawer content is parsed as blocks.
    :END:

    [fn:1] Footnote bodies run up to the next footnote or header.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred
from orgweave.nodes import Attr, Div, Header, Span
from orgweave.parsing.cursor import LineWindow
from orgweave.tokens import StartType
from orgweave.utils.logger import get_logger

if TYPE_CHECKING:
    from orgweave.lexer import LineScanner
    from orgweave.nodes import Inline
    from orgweave.parsing.blocks.core import Blocks
    from orgweave.registry import HeaderRegistry
    from orgweave.state import ParseState

logger = get_logger(__name__)

_TAGS_RE = re.compile(r"(?:^|[ \t]+):((?:[\w@%#]+:)+)[ \t]*$")
_PROPERTY_RE = re.compile(r"^[ \t]*:([^\s:]+):(.*)$")


def split_tags(title: str) -> tuple[str, tuple[str, ...]]:
    """Separate trailing ``:tag1:tag2:`` from a header title.

    Examples:
        >>> split_tags("Plans :work:urgent:")
        ('Plans', ('work', 'urgent'))
        >>> split_tags("Ratio 1:2")
        ('Ratio 1:2', ())
    """
    match = _TAGS_RE.search(title)
    if match is None:
        return title, ()
    return title[: match.start()], tuple(match.group(1).split(":")[:-1])


def tag_span(tag: str) -> Span:
    return Span(Attr(classes=("tag",), keyvalues=(("data-tag-name", tag),)))


def properties_to_attr(properties: list[tuple[str, str]]) -> Attr:
    """Turn PROPERTIES drawer entries into header attributes.

    ``CUSTOM_ID`` becomes the identifier and ``CLASS`` the class list; the
    remaining entries are kept as key-values with lower-cased keys.
    """
    identifier = ""
    classes: tuple[str, ...] = ()
    keyvalues: list[tuple[str, str]] = []
    for key, value in properties:
        key = key.lower()
        if key == "custom_id":
            identifier = identifier or value
        elif key == "class":
            classes = tuple(value.split())
        else:
            keyvalues.append((key, value))
    return Attr(identifier, classes, tuple(keyvalues))


class SectionParsingMixin:
    """Mixin for headers, drawers and footnote definitions.

    Required Host Attributes:
        - _lines: Sequence[str]
        - _pos: int
        - _scanner: LineScanner
        - _state: ParseState
        - _registry: HeaderRegistry
        - _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    Required Host Methods:
        - _parse_nested_content(text) -> Deferred[Blocks]
        - _parse_nested_lines(lines, stop) -> tuple[Deferred[Blocks], int]
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None

    """

    _lines: Sequence[str]
    _pos: int
    _scanner: LineScanner
    _state: ParseState
    _registry: HeaderRegistry
    _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    # =========================================================================
    # Headers
    # =========================================================================

    def _try_parse_header(self) -> Deferred[Blocks] | None:
        """Header line plus an optional PROPERTIES drawer directly below it.

        The registry sees the raw title text and the drawer's attributes and
        returns the attributes stamped onto the Header.
        """
        start = self._scanner.match(self._current_line(), StartType.HEADER)
        if start is None:
            return None
        self._advance()

        title, tags = split_tags(start.value)
        properties = self._parse_properties_drawer()
        attr = properties_to_attr(properties or [])
        attr = self._registry.register(start.width, title.strip(), attr)

        level = start.width
        tag_spans = tuple(tag_span(tag) for tag in tags)
        return self._inline(title).map(
            lambda inlines: (Header(level, attr, inlines + tag_spans),)
        )

    def _parse_properties_drawer(self) -> list[tuple[str, str]] | None:
        """Consume a PROPERTIES drawer under the cursor, if there is one."""
        if self._at_end():
            return None
        drawer = self._scanner.match(self._current_line(), StartType.DRAWER)
        if drawer is None or drawer.value != "PROPERTIES":
            return None

        start = self._pos
        self._advance()
        properties: list[tuple[str, str]] = []
        while not self._at_end():
            line = self._current_line()
            if self._scanner.is_drawer_end(line):
                self._advance()
                return properties
            match = _PROPERTY_RE.match(line)
            if match is None:
                break
            properties.append((match.group(1), match.group(2).strip()))
            self._advance()

        self._pos = start
        return None

    # =========================================================================
    # Drawers
    # =========================================================================

    def _try_parse_drawer(self) -> Deferred[Blocks] | None:
        """``:NAME:`` through ``:END:``, kept or dropped by the export settings.

        Inclusion is decided now, with the settings declared so far.
        """
        start = self._scanner.match(self._current_line(), StartType.DRAWER)
        if start is None:
            return None
        name = start.value
        self._advance()

        content: list[str] = []
        while True:
            if self._at_end():
                logger.debug("Unterminated :%s: drawer; reading it as text", name)
                return None
            line = self._current_line()
            self._advance()
            if self._scanner.is_drawer_end(line):
                break
            content.append(line + "\n")

        if not self._state.export_settings.keeps_drawer(name):
            return Deferred.empty()

        attr = Attr(classes=(name, "drawer"))
        body = self._parse_nested_content("".join(content) + "\n")
        return body.map(lambda blocks: (Div(attr, blocks),))

    # =========================================================================
    # Footnote definitions
    # =========================================================================

    def _try_parse_footnote_definition(self) -> Deferred[Blocks] | None:
        """Store ``[fn:label] body`` in the footnote table. Emits nothing.

        The body is the rest of the marker line and every following block up
        to the next footnote marker or header.
        """
        line = self._current_line()
        start = self._scanner.match(line, StartType.FOOTNOTE)
        if start is None:
            return None

        lines = LineWindow(self._lines, self._pos, line[start.width :].lstrip(" \t"))
        body, consumed = self._parse_nested_lines(lines, self._ends_footnote)
        self._advance(consumed)
        self._state.add_footnote(start.value, body)
        return Deferred.empty()

    def _ends_footnote(self, line: str) -> bool:
        return (
            self._scanner.match(line, StartType.FOOTNOTE) is not None
            or self._scanner.match(line, StartType.HEADER) is not None
        )


__all__ = [
    "SectionParsingMixin",
    "properties_to_attr",
    "split_tags",
    "tag_span",
]
