"""
orgweave: Org-mode block parser for Python

Reads Org-mode text into a typed, immutable document tree: sections,
paragraphs, lists, tables, source blocks with their results, drawers,
footnotes and document metadata. Forward references (footnotes used before
they are defined, link abbreviations declared at the end of a file) are
resolved in one pass after scanning.

Quick Start:
    >>> from orgweave import parse
    >>> doc = parse("#+TITLE: Notes\\n* Intro\\nSome /text/.")
    >>> doc.meta["title"]
    MetaInlines(children=(Text(content='Notes'),))
    >>> doc.children[0].attr.identifier
    'intro'

Configuration:
    >>> from orgweave import ParseConfig
    >>> doc = parse("\\tindented", config=ParseConfig(tab_stop=8))

Zero runtime dependencies.
"""

from orgweave.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from orgweave.deferred import Deferred
from orgweave.errors import ConfigError, OrgweaveError, StateError
from orgweave.nodes import (
    NULL_ATTR,
    Attr,
    Block,
    BlockQuote,
    BulletList,
    Code,
    CodeBlock,
    DefinitionItem,
    DefinitionList,
    Div,
    Document,
    Emphasis,
    Header,
    HorizontalRule,
    Image,
    Inline,
    LineBreak,
    Link,
    ListItem,
    MetaInlines,
    MetaList,
    MetaValue,
    Note,
    OrderedList,
    Para,
    Plain,
    RawBlock,
    SoftBreak,
    Span,
    Strikethrough,
    Strong,
    Table,
    Text,
    Underline,
    Verbatim,
)
from orgweave.parser import Parser
from orgweave.registry import AutoIdentifierRegistry, HeaderRegistry, NullRegistry
from orgweave.state import ExportSettings, FrozenState, ParseState

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    config: ParseConfig | None = None,
    source_file: str | None = None,
) -> Document:
    """Parse Org source into a typed document.

    Args:
        source: Org source text
        config: Parse configuration; the context's current config if None
        source_file: Optional source file path for log messages

    Returns:
        Document root node

    Example:
        >>> doc = parse("| a | b |\\n|---+---|\\n| 1 | 2 |")
        >>> len(doc.children[0].header)
        2
    """
    if config is None:
        return Parser(source, source_file).parse()

    with parse_config_context(config):
        return Parser(source, source_file).parse()


__all__ = [
    "NULL_ATTR",
    "Attr",
    "AutoIdentifierRegistry",
    "Block",
    "BlockQuote",
    "BulletList",
    "Code",
    "CodeBlock",
    "ConfigError",
    "Deferred",
    "DefinitionItem",
    "DefinitionList",
    "Div",
    "Document",
    "Emphasis",
    "ExportSettings",
    "FrozenState",
    "Header",
    "HeaderRegistry",
    "HorizontalRule",
    "Image",
    "Inline",
    "LineBreak",
    "Link",
    "ListItem",
    "MetaInlines",
    "MetaList",
    "MetaValue",
    "Note",
    "NullRegistry",
    "OrderedList",
    "OrgweaveError",
    "Para",
    "ParseConfig",
    "ParseState",
    "Parser",
    "Plain",
    "RawBlock",
    "SoftBreak",
    "Span",
    "StateError",
    "Strikethrough",
    "Strong",
    "Table",
    "Text",
    "Underline",
    "Verbatim",
    "__version__",
    "get_parse_config",
    "parse",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
