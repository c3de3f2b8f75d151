"""Source code blocks and their results.

Org:
    #+NAME: square
    #+BEGIN_SRC python -n :exports both :results output
    print(7 ** 2)
    #+END_SRC

    #+RESULTS: square
    : 49

The opening line carries an optional language, switches (``-n``, ``+n``,
``-l "(ref:%s)"``; recognized and dropped) and ``:key value`` header
arguments. When header arguments are present they are kept on the CodeBlock
as ``rundoc-`` prefixed key-values and the block gets the ``rundoc-block``
class, so that literate-programming tools can find them.

The ``:exports`` argument decides what survives: ``code`` (the default),
``results``, ``both`` or ``none``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred, concat
from orgweave.nodes import NULL_ATTR, Attr, CodeBlock, Div, Plain, Span
from orgweave.utils.logger import get_logger

if TYPE_CHECKING:
    from orgweave.lexer import LineScanner
    from orgweave.nodes import Inline
    from orgweave.parsing.blocks.attributes import BlockAttributes
    from orgweave.parsing.blocks.core import Blocks
    from orgweave.tokens import LineStart

logger = get_logger(__name__)

RUNDOC_PREFIX = "rundoc-"
RUNDOC_BLOCK_CLASS = "rundoc-block"

LANGUAGE_ALIASES: dict[str, str] = {
    "C": "c",
    "C++": "cpp",
    "emacs-lisp": "commonlisp",
    "js": "javascript",
    "lisp": "commonlisp",
    "R": "r",
    "sh": "bash",
    "sqlite": "sql",
}

_SWITCH_RE = re.compile(r"^[-+][A-Za-z]$")
_TOKEN_RE = re.compile(r'"[^"]*"|\S+')


def translate_language(language: str) -> str:
    """Map an Org language name to the conventional highlighter name.

    Examples:
        >>> translate_language("emacs-lisp")
        'commonlisp'
        >>> translate_language("python")
        'python'
    """
    return LANGUAGE_ALIASES.get(language, language)


@dataclass(frozen=True, slots=True)
class SourceHeader:
    """Parsed ``#+BEGIN_SRC`` line.

    Attributes:
        language: Language token as written, if any
        switches: Switches as written (``-n``, ``-l "..."``)
        arguments: Header arguments in order; a key without a value is "yes"

    """

    language: str | None = None
    switches: tuple[str, ...] = ()
    arguments: tuple[tuple[str, str], ...] = ()

    def classes(self) -> tuple[str, ...]:
        classes: list[str] = []
        if self.language is not None:
            classes.append(translate_language(self.language))
        if self.arguments:
            classes.append(RUNDOC_BLOCK_CLASS)
        return tuple(classes)

    def keyvalues(self) -> tuple[tuple[str, str], ...]:
        if not self.arguments:
            return ()
        pairs = [(RUNDOC_PREFIX + "language", self.language or "")]
        pairs.extend((RUNDOC_PREFIX + key, value) for key, value in self.arguments)
        return tuple(pairs)


def parse_source_header(text: str) -> SourceHeader:
    """Parse the text after ``#+BEGIN_SRC``.

    An argument value runs up to the next ``:key``, so values may contain
    spaces. Tokens that fit nowhere are skipped.

    Examples:
        >>> parse_source_header(" python -n :exports both :var x=1 y=2")
        SourceHeader(language='python', switches=('-n',), arguments=(('exports', 'both'), ('var', 'x=1 y=2')))
        >>> parse_source_header(" sh :eval").arguments
        (('eval', 'yes'),)
    """
    tokens = _TOKEN_RE.findall(text)
    pos = 0
    language = None
    if tokens and not tokens[0].startswith(":") and not _SWITCH_RE.match(tokens[0]):
        language = tokens[0]
        pos = 1

    switches: list[str] = []
    while pos < len(tokens):
        token = tokens[pos]
        if token == "-l" and pos + 1 < len(tokens) and tokens[pos + 1].startswith('"'):
            switches.append(f"{token} {tokens[pos + 1]}")
            pos += 2
        elif _SWITCH_RE.match(token):
            switches.append(token)
            pos += 1
        else:
            break

    arguments: list[tuple[str, str]] = []
    while pos < len(tokens):
        token = tokens[pos]
        pos += 1
        if not token.startswith(":") or len(token) == 1:
            logger.debug("Skipping stray source block header token %r", token)
            continue
        values: list[str] = []
        while pos < len(tokens) and not tokens[pos].startswith(":"):
            values.append(tokens[pos])
            pos += 1
        arguments.append((token[1:], " ".join(values) if values else "yes"))

    return SourceHeader(language=language, switches=tuple(switches), arguments=tuple(arguments))


def exports_code(attr: Attr) -> bool:
    """Whether the code itself is exported."""
    exports = attr.get(RUNDOC_PREFIX + "exports")
    return exports not in ("none", "results")


def exports_results(attr: Attr) -> bool:
    """Whether the results block is exported."""
    exports = attr.get(RUNDOC_PREFIX + "exports")
    return exports in ("results", "both")


def caption_label(caption: tuple[Inline, ...], code: CodeBlock) -> Div:
    """Wrap a code block with its caption as a leading label."""
    label = Plain((Span(Attr(classes=("label",)), caption),))
    return Div(NULL_ATTR, (label, code))


class SourceBlockMixin:
    """Mixin for ``#+BEGIN_SRC`` regions.

    Required Host Attributes:
        - _scanner: LineScanner
        - _pos: int

    Required Host Methods:
        - _read_region_content(region_type, indent) -> str | None
        - _parse_block() -> Deferred[Blocks]
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None

    """

    _scanner: LineScanner
    _pos: int

    def _parse_source_block(
        self,
        attrs: BlockAttributes,
        start: LineStart,
    ) -> Deferred[Blocks] | None:
        """Parse a source block whose opening line has been consumed."""
        header = parse_source_header(start.marker)
        text = self._read_region_content("src", start.indent)
        if text is None:
            return None
        results = self._parse_results()

        attr = Attr(attrs.name or "", header.classes(), header.keyvalues())
        code = CodeBlock(attr, text)

        parts: list[Deferred[Blocks]] = []
        if exports_code(attr):
            if attrs.caption is None:
                parts.append(Deferred.pure((code,)))
            else:
                parts.append(attrs.caption.map(lambda caption: (caption_label(caption, code),)))
        if results is not None and exports_results(attr):
            parts.append(results)
        return concat(parts)

    def _parse_results(self) -> Deferred[Blocks] | None:
        """Optional ``#+RESULTS:`` line and the block after it.

        Blank lines may separate the source block from the marker. Without a
        marker nothing is consumed.
        """
        start = self._pos
        while not self._at_end() and self._scanner.is_blank(self._current_line()):
            self._advance()
        if self._at_end() or not self._scanner.is_results_marker(self._current_line()):
            self._pos = start
            return None
        self._advance()
        if self._at_end():
            self._pos = start
            return None
        return self._parse_block()


__all__ = [
    "LANGUAGE_ALIASES",
    "RUNDOC_BLOCK_CLASS",
    "RUNDOC_PREFIX",
    "SourceBlockMixin",
    "SourceHeader",
    "exports_code",
    "exports_results",
    "parse_source_header",
    "translate_language",
]
