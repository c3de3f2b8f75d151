"""Core block parsing: the dispatcher and the single-line block forms.

The block grammar is an ordered list of alternatives. Each alternative either
consumes at least one line and returns deferred blocks, or returns None to
decline. The dispatcher saves the cursor before each attempt and restores it
when an alternative declines, so alternatives may read ahead freely.

Order matters: tables and regions claim their attribute lines (``#+NAME:``,
``#+CAPTION:``) before the metadata line rule sees them, and the paragraph
rule comes last because it accepts anything.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred, concat
from orgweave.nodes import Attr, CodeBlock, HorizontalRule, Para, Plain, RawBlock
from orgweave.parsing.settings import apply_export_options, parse_link_format
from orgweave.tokens import StartType
from orgweave.utils.logger import get_logger

if TYPE_CHECKING:
    from orgweave.config import ParseConfig
    from orgweave.lexer import LineScanner
    from orgweave.nodes import Block, Inline
    from orgweave.state import ParseState

logger = get_logger(__name__)

type Blocks = tuple[Block, ...]
type BlockAlternative = Callable[[], Deferred[Blocks] | None]

_META_LINE_RE = re.compile(r"^([^\s:]+):[ \t]*(.*)$")


class BlockParsingCoreMixin:
    """Block dispatch and simple line-level blocks.

    Required Host Attributes:
        - _lines: Sequence[str]
        - _pos: int
        - _state: ParseState
        - _scanner: LineScanner
        - _config: ParseConfig
        - _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    Required Host Methods:
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None
        - every ``_try_parse_*`` alternative listed in ``_block_grammar``

    """

    _lines: Sequence[str]
    _pos: int
    _state: ParseState
    _scanner: LineScanner
    _config: ParseConfig
    _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    def _block_grammar(self) -> tuple[BlockAlternative, ...]:
        """Alternatives tried in order at the start of every block."""
        return (
            self._parse_blank_lines,
            self._try_parse_table,
            self._try_parse_region,
            self._try_parse_figure,
            self._try_parse_example_lines,
            self._try_parse_drawer,
            self._try_parse_special_line,
            self._try_parse_header,
            self._try_parse_horizontal_rule,
            self._try_parse_list,
            self._try_parse_latex_environment,
            self._try_parse_footnote_definition,
        )

    def _parse_blocks(self, stop: Callable[[str], bool] | None = None) -> Deferred[Blocks]:
        """Parse blocks until the input is exhausted.

        With ``stop``, parsing also ends before any block after the first
        whose opening line satisfies it.
        """
        parts: list[Deferred[Blocks]] = []
        while not self._at_end():
            if parts and stop is not None and stop(self._current_line()):
                break
            parts.append(self._parse_block())
        return concat(parts)

    def _parse_block(self) -> Deferred[Blocks]:
        """Parse one block with the first alternative that accepts.

        Falls back to a paragraph, which always accepts.
        """
        start = self._pos
        for alternative in self._block_grammar():
            result = alternative()
            if result is not None:
                return result
            self._pos = start
        return self._parse_paragraph()

    # =========================================================================
    # Single-line forms
    # =========================================================================

    def _parse_blank_lines(self) -> Deferred[Blocks] | None:
        """Skip a run of blank lines. Produces nothing."""
        if not self._scanner.is_blank(self._current_line()):
            return None
        while not self._at_end() and self._scanner.is_blank(self._current_line()):
            self._advance()
        return Deferred.empty()

    def _try_parse_example_lines(self) -> Deferred[Blocks] | None:
        """Run of ``: text`` lines as an example code block."""
        lines: list[str] = []
        while not self._at_end():
            start = self._scanner.match(self._current_line(), StartType.EXAMPLE_LINE)
            if start is None:
                break
            lines.append(start.value + "\n")
            self._advance()
        if not lines:
            return None
        return Deferred.pure((CodeBlock(Attr(classes=("example",)), "".join(lines)),))

    def _try_parse_horizontal_rule(self) -> Deferred[Blocks] | None:
        if self._scanner.match(self._current_line(), StartType.HORIZONTAL_RULE) is None:
            return None
        self._advance()
        return Deferred.pure((HorizontalRule(),))

    def _try_parse_special_line(self) -> Deferred[Blocks] | None:
        """Metadata, ``#+OPTIONS:``, ``#+LINK:`` and comment lines.

        All of them act on the parse state, if at all, and produce no blocks.
        """
        line = self._current_line()
        meta = self._scanner.match(line, StartType.META_LINE)
        if meta is not None:
            match = _META_LINE_RE.match(meta.value)
            if match is None:
                return None
            self._apply_keyword(match.group(1).lower(), match.group(2))
            self._advance()
            return Deferred.empty()

        if self._scanner.match(line, StartType.COMMENT_LINE) is not None:
            self._advance()
            return Deferred.empty()
        return None

    def _apply_keyword(self, key: str, value: str) -> None:
        if key == "options":
            apply_export_options(value, self._state, self._config.ignored_export_settings)
            return
        if key == "link":
            link_format = parse_link_format(value)
            if link_format is not None:
                self._state.add_link_format(*link_format)
                return
        self._state.add_meta(key, self._inline(value))

    def _try_parse_latex_environment(self) -> Deferred[Blocks] | None:
        """``\\begin{env}`` through ``\\end{env}`` as raw LaTeX."""
        start = self._scanner.match(self._current_line(), StartType.LATEX_ENV)
        if start is None:
            return None
        env = start.value
        self._advance()

        content: list[str] = []
        while not self._at_end():
            line = self._current_line()
            self._advance()
            if self._scanner.is_latex_end(line, env):
                text = "\\begin{" + env + "}\n" + "".join(content) + "\\end{" + env + "}\n"
                return Deferred.pure((RawBlock("latex", text),))
            content.append(line + "\n")

        logger.debug("Unterminated LaTeX environment %r; reading it as text", env)
        return None

    # =========================================================================
    # Paragraphs
    # =========================================================================

    def _parse_paragraph(self) -> Deferred[Blocks]:
        """Paragraph: the current line and every following line up to a block start.

        A paragraph that runs to the end of its input is Plain, as is one
        inside a list item that is directly followed by another list item.
        """
        lines = [self._current_line()]
        self._advance()
        while not self._at_end() and not self._scanner.ends_paragraph(self._current_line()):
            lines.append(self._current_line())
            self._advance()

        plain = self._at_end() or (
            self._state.in_list and self._scanner.list_start(self._current_line()) is not None
        )
        node = Plain if plain else Para
        return self._inline("\n".join(lines)).map(lambda inlines: (node(inlines),))


__all__ = ["BlockParsingCoreMixin", "Blocks"]
