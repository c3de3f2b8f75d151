"""Begin/end region parsing.

Org:
    #+BEGIN_QUOTE
    Quoted *text*.
    #+END_QUOTE

Content lines lose exactly the indentation of the opening line; a non-blank
line indented less than that ends the attempt. A leading comma protects lines
that would otherwise read as structure (``,* not a header``, ``,#+END_SRC``)
and is removed.

Region types:
    comment             -> nothing
    html, latex, ascii  -> RawBlock in that format
    example             -> CodeBlock with class ``example``
    quote               -> BlockQuote of the parsed content
    verse               -> one Para, lines joined by hard breaks
    src                 -> source block (see ``source``)
    anything else       -> Div with the type as class
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred, sequence
from orgweave.nodes import Attr, BlockQuote, CodeBlock, Div, LineBreak, Para, RawBlock
from orgweave.tokens import StartType
from orgweave.utils.logger import get_logger
from orgweave.utils.text import strip_indent

if TYPE_CHECKING:
    from orgweave.lexer import LineScanner
    from orgweave.nodes import Inline
    from orgweave.parsing.blocks.core import Blocks

logger = get_logger(__name__)

RAW_FORMATS = frozenset({"html", "latex", "ascii"})


def unescape_commas(line: str) -> str:
    """Drop the protective comma in front of ``*`` and ``#+``.

    Examples:
        >>> unescape_commas(",* not a header")
        '* not a header'
        >>> unescape_commas(",#+END_SRC")
        '#+END_SRC'
        >>> unescape_commas(",, kept")
        ',, kept'
    """
    if line.startswith((",*", ",#+")):
        return line[1:]
    return line


class RegionParsingMixin:
    """Mixin for ``#+BEGIN_x`` ... ``#+END_x`` regions.

    Required Host Attributes:
        - _scanner: LineScanner
        - _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    Required Host Methods:
        - _parse_block_attributes() -> BlockAttributes
        - _parse_source_block(attrs, start) -> Deferred[Blocks] | None
        - _parse_nested_content(text) -> Deferred[Blocks]
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None

    """

    _scanner: LineScanner
    _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    def _try_parse_region(self) -> Deferred[Blocks] | None:
        attrs = self._parse_block_attributes()
        if self._at_end():
            return None
        start = self._scanner.match(self._current_line(), StartType.BEGIN)
        if start is None:
            return None
        self._advance()

        region_type = start.value
        if region_type == "src":
            return self._parse_source_block(attrs, start)

        text = self._read_region_content(region_type, start.indent)
        if text is None:
            return None

        if region_type == "comment":
            return Deferred.empty()
        if region_type in RAW_FORMATS:
            return Deferred.pure((RawBlock(region_type, text),))
        if region_type == "example":
            return Deferred.pure((CodeBlock(Attr(classes=("example",)), text),))
        if region_type == "verse":
            return self._verse(text)

        content = self._parse_nested_content(text + "\n")
        if region_type == "quote":
            return content.map(lambda blocks: (BlockQuote(blocks),))
        attr = Attr(classes=(region_type,))
        return content.map(lambda blocks: (Div(attr, blocks),))

    def _read_region_content(self, region_type: str, indent: int) -> str | None:
        """Read content lines up to and including the END line.

        Returns:
            The content, one newline-terminated line per content line, or
            None when a line is under-indented or the region never ends.
        """
        tab_stop = self._scanner.tab_stop
        lines: list[str] = []
        while not self._at_end():
            line = self._current_line()
            self._advance()
            if self._scanner.is_region_end(line, region_type):
                return "".join(lines)
            if self._scanner.is_blank(line):
                lines.append("\n")
                continue
            stripped = strip_indent(line, indent, tab_stop)
            if stripped is None:
                logger.debug(
                    "Line %r is indented less than its #+BEGIN_%s line; not a region",
                    line,
                    region_type,
                )
                return None
            lines.append(unescape_commas(stripped) + "\n")

        logger.debug("Unterminated #+BEGIN_%s region; reading it as text", region_type)
        return None

    def _verse(self, text: str) -> Deferred[Blocks]:
        """Inline-parse each line on its own and join them with hard breaks."""
        lines = sequence(self._inline(line) for line in text.splitlines())

        def join(parsed: tuple[tuple[Inline, ...], ...]) -> Blocks:
            inlines: list[Inline] = []
            for index, line in enumerate(parsed):
                if index:
                    inlines.append(LineBreak())
                inlines.extend(line)
            return (Para(tuple(inlines)),)

        return lines.map(join)


__all__ = ["RAW_FORMATS", "RegionParsingMixin", "unescape_commas"]
