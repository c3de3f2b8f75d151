"""Typed document nodes for orgweave.

All nodes are frozen dataclasses with slots for:
- Immutability: resolved trees can be shared freely
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Block (block-level elements)
├── Header
├── Para / Plain
├── CodeBlock / RawBlock
├── BlockQuote / Div
├── Table
├── BulletList / OrderedList / DefinitionList
└── HorizontalRule
Inline (inline elements)
├── Text / SoftBreak / LineBreak
├── Emphasis / Strong / Underline / Strikethrough
├── Code / Verbatim
├── Link / Image / Span
└── Note

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# =============================================================================
# Attributes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attr:
    """Identifier, classes and key-value pairs attached to a node.

    Org: ``#+NAME:``, ``:PROPERTIES:`` drawers, ``#+ATTR_HTML:``

    """

    identifier: str = ""
    classes: tuple[str, ...] = ()
    keyvalues: tuple[tuple[str, str], ...] = ()

    def get(self, key: str) -> str | None:
        """Look up the first value stored under ``key``."""
        for k, v in self.keyvalues:
            if k == key:
                return v
        return None


NULL_ATTR = Attr()


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text:
    """Plain text run."""

    content: str


@dataclass(frozen=True, slots=True)
class SoftBreak:
    """Newline inside a paragraph."""


@dataclass(frozen=True, slots=True)
class LineBreak:
    """Hard line break.

    Org: ``\\\\`` at end of line, and between the lines of a verse block.

    """


@dataclass(frozen=True, slots=True)
class Emphasis:
    """Org: /italic/"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong:
    """Org: *bold*"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Underline:
    """Org: _underlined_"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strikethrough:
    """Org: +struck+"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Code:
    """Org: ~code~"""

    content: str


@dataclass(frozen=True, slots=True)
class Verbatim:
    """Org: =verbatim="""

    content: str


@dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink.

    Org: [[target][description]] or [[target]]

    """

    url: str
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Image:
    """Image.

    The title of a figure image carries the ``fig:`` prefix; the children are
    the alternative text (the caption for figures).

    """

    url: str
    title: str = ""
    children: tuple[Inline, ...] = ()
    attr: Attr = NULL_ATTR


@dataclass(frozen=True, slots=True)
class Span:
    """Generic inline container (header tags, caption labels)."""

    attr: Attr
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class Note:
    """Footnote reference, resolved to the footnote's blocks.

    Org: [fn:label] or [1]

    """

    children: tuple[Block, ...]


type Inline = (
    Text
    | SoftBreak
    | LineBreak
    | Emphasis
    | Strong
    | Underline
    | Strikethrough
    | Code
    | Verbatim
    | Link
    | Image
    | Span
    | Note
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Header:
    """Section header.

    Org: ``** Title :tag1:tag2:`` optionally followed by a PROPERTIES drawer

    """

    level: int
    attr: Attr
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Para:
    """Paragraph."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Plain:
    """Inline content without paragraph semantics.

    Used for tight list items, table cells and caption labels.

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Literal text block (source code, examples)."""

    attr: Attr
    text: str


@dataclass(frozen=True, slots=True)
class RawBlock:
    """Format-specific passthrough (``html``, ``latex``, ``ascii``)."""

    format: str
    text: str


@dataclass(frozen=True, slots=True)
class BlockQuote:
    """Org: #+BEGIN_QUOTE ... #+END_QUOTE"""

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class Div:
    """Generic block container (drawers, custom regions, labelled code)."""

    attr: Attr
    children: tuple[Block, ...]


type Alignment = Literal["left", "center", "right"] | None


@dataclass(frozen=True, slots=True)
class Table:
    """Table.

    Org:
        | A | B |
        |---+---|
        | 1 | 2 |

    Every cell is one Plain block. ``header`` is empty when the table has no
    header row. ``alignments`` always has as many entries as the reference
    row (the header, else the first body row).

    """

    alignments: tuple[Alignment, ...]
    header: tuple[Block, ...]
    rows: tuple[tuple[Block, ...], ...]
    caption: tuple[Inline, ...] = ()
    attr: Attr = NULL_ATTR


@dataclass(frozen=True, slots=True)
class ListItem:
    """Item of a bullet or ordered list."""

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class DefinitionItem:
    """Item of a definition list.

    Org: - term :: definition

    """

    term: tuple[Inline, ...]
    children: tuple[Block, ...]


def _items_are_tight(items: tuple[ListItem, ...] | tuple[DefinitionItem, ...]) -> bool:
    return not any(isinstance(block, Para) for item in items for block in item.children)


@dataclass(frozen=True, slots=True)
class BulletList:
    """Org: - item, + item, or * item (indented)"""

    items: tuple[ListItem, ...]

    @property
    def tight(self) -> bool:
        """True when no item holds a paragraph at its top level."""
        return _items_are_tight(self.items)


@dataclass(frozen=True, slots=True)
class OrderedList:
    """Org: 1. item or 1) item"""

    items: tuple[ListItem, ...]
    start: int = 1

    @property
    def tight(self) -> bool:
        """True when no item holds a paragraph at its top level."""
        return _items_are_tight(self.items)


@dataclass(frozen=True, slots=True)
class DefinitionList:
    """List of term/definition pairs."""

    items: tuple[DefinitionItem, ...]

    @property
    def tight(self) -> bool:
        """True when no definition holds a paragraph at its top level."""
        return _items_are_tight(self.items)


@dataclass(frozen=True, slots=True)
class HorizontalRule:
    """Org: ----- (five or more dashes)"""


type Block = (
    Header
    | Para
    | Plain
    | CodeBlock
    | RawBlock
    | BlockQuote
    | Div
    | Table
    | BulletList
    | OrderedList
    | DefinitionList
    | HorizontalRule
)


# =============================================================================
# Metadata and Document
# =============================================================================


@dataclass(frozen=True, slots=True)
class MetaInlines:
    """Metadata value holding inline content (``#+TITLE: ...``)."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class MetaList:
    """Metadata value collecting repeated declarations of one key."""

    items: tuple[MetaValue, ...]


type MetaValue = MetaInlines | MetaList


@dataclass(frozen=True, slots=True)
class Document:
    """Root of a resolved document.

    Attributes:
        children: Top-level blocks in document order
        meta: Metadata declared with ``#+KEY: value`` lines (keys lower-cased)
        footnotes: Resolved footnote definitions keyed by label

    """

    children: tuple[Block, ...]
    meta: dict[str, MetaValue] = field(default_factory=dict)
    footnotes: dict[str, tuple[Block, ...]] = field(default_factory=dict)
