"""Block parser producing a resolved Org document.

Parsing runs in two phases:

1. Scan: the block grammar walks the lines once and builds a single
   deferred block sequence, recording metadata, link formats, footnotes and
   export settings in the ParseState as it goes.
2. Resolve: the state is frozen and the deferred tree is forced against it
   exactly once, so forward references (a footnote used before it is
   defined, a ``#+LINK:`` at the end of the file) see the final values.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `LineNavigationMixin`: Line cursor traversal
- `BlockParsingMixin`: Block grammar (dispatch, regions, tables, lists, ...)

Thread Safety:
- Parser produces an immutable tree (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share the resulting Document across threads

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from orgweave.config import ParseConfig, get_parse_config
from orgweave.errors import StateError
from orgweave.lexer import LineScanner
from orgweave.nodes import Document
from orgweave.parsing import BlockParsingMixin, LineNavigationMixin, parse_inlines, split_lines
from orgweave.registry import AutoIdentifierRegistry
from orgweave.state import ParseState
from orgweave.utils.logger import get_logger

if TYPE_CHECKING:
    from orgweave.deferred import Deferred
    from orgweave.parsing.blocks.core import Blocks
    from orgweave.registry import HeaderRegistry
    from orgweave.state import FrozenState

logger = get_logger(__name__)


class Parser(
    LineNavigationMixin,
    BlockParsingMixin,
):
    """Org-mode block parser.

    Usage:
        >>> parser = Parser("* Hello\\n\\nWorld")
        >>> document = parser.parse()
        >>> document.children[0]
        Header(level=1, attr=Attr(identifier='hello', ...), children=(Text(content='Hello'),))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local)
        once, when the parser is created.

    """

    __slots__ = (
        "_lines",
        "_pos",
        "_source_file",
        "_config",
        "_scanner",
        "_inline",
        # Shared with every sub-parser of one document
        "_state",
        "_registry",
        "_frozen",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Org source text
            source_file: Optional source file path for log messages

        """
        config = get_parse_config()
        # Two trailing newlines close whatever block the input ends in.
        self._lines = split_lines(source + "\n\n")
        self._pos = 0
        self._source_file = source_file
        self._config: ParseConfig = config
        self._scanner = LineScanner(config.tab_stop)
        self._inline: Callable[[str], Deferred] = config.inline_parser or parse_inlines
        self._state = ParseState(export_settings=config.export_settings)
        factory = config.header_registry_factory or AutoIdentifierRegistry
        self._registry: HeaderRegistry = factory()
        self._frozen: FrozenState | None = None

    @property
    def state(self) -> FrozenState:
        """The final parse state, available once ``parse`` has run.

        Inline parsers and renderers consult its link formatters and
        footnote table.

        Raises:
            StateError: If the document has not been parsed yet.
        """
        if self._frozen is None:
            raise StateError("the parse state is only available after parse()")
        return self._frozen

    def parse(self) -> Document:
        """Scan the source, freeze the state and resolve the document.

        Returns:
            Document with the blocks, the metadata and the footnote table

        Raises:
            StateError: If called more than once on the same instance.
        """
        if self._frozen is not None:
            raise StateError("Parser instances are single-use; create a new one")

        logger.debug("Parsing %s (%d lines)", self._source_file or "<string>", len(self._lines))
        blocks = self._parse_blocks()

        frozen = self._state.freeze()
        self._frozen = frozen
        return Document(
            children=blocks.resolve(frozen),
            meta=frozen.resolve_meta(),
            footnotes=frozen.resolve_footnotes(),
        )

    def _parse_nested_content(self, content: str) -> Deferred[Blocks]:
        """Parse nested content as blocks (list items, drawers, regions).

        Creates a sub-parser to handle nested block-level content.
        Configuration, parse state and header registry are shared with this
        parser.

        Returns:
            Deferred blocks, resolved with the rest of the document

        """
        blocks, _consumed = self._parse_nested_lines(split_lines(content))
        return blocks

    def _parse_nested_lines(
        self,
        lines: Sequence[str],
        stop: Callable[[str], bool] | None = None,
    ) -> tuple[Deferred[Blocks], int]:
        """Parse ``lines`` with a sub-parser.

        Returns:
            (deferred blocks, number of lines consumed)

        """
        sub_parser = Parser("", self._source_file)
        sub_parser._lines = lines

        # Inherit configuration from the parent parser
        sub_parser._config = self._config
        sub_parser._scanner = self._scanner
        sub_parser._inline = self._inline

        # Share document-wide state
        sub_parser._state = self._state
        sub_parser._registry = self._registry

        blocks = sub_parser._parse_blocks(stop)
        return blocks, sub_parser._pos


__all__ = ["Parser"]
