"""Block parsing subsystem for the orgweave parser.

Provides mixins for parsing block-level Org content:
- Paragraphs, example lines, horizontal rules, LaTeX environments
- Metadata, ``#+OPTIONS:``, ``#+LINK:`` and comment lines
- Attribute lines (``#+NAME:``, ``#+CAPTION:``, ``#+ATTR_HTML:``)
- Figures
- Begin/end regions and source blocks
- Tables
- Lists (bullet, ordered, definition)
- Headers, drawers and footnote definitions

Architecture:
Block parsing is split into logical modules:
- core: Block dispatch and single-line blocks
- attributes: Attribute lines shared by tables, figures and regions
- figure: Captioned images
- regions: ``#+BEGIN_x`` regions
- source: ``#+BEGIN_SRC`` header arguments and results
- table: Org tables
- lists: List forms and item continuation
- sections: Headers, drawers and footnote definitions

"""

from orgweave.parsing.blocks.attributes import AttributeParsingMixin
from orgweave.parsing.blocks.core import BlockParsingCoreMixin
from orgweave.parsing.blocks.figure import FigureParsingMixin
from orgweave.parsing.blocks.lists import ListParsingMixin
from orgweave.parsing.blocks.regions import RegionParsingMixin
from orgweave.parsing.blocks.sections import SectionParsingMixin
from orgweave.parsing.blocks.source import SourceBlockMixin
from orgweave.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    AttributeParsingMixin,
    FigureParsingMixin,
    RegionParsingMixin,
    SourceBlockMixin,
    TableParsingMixin,
    ListParsingMixin,
    SectionParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _lines: Sequence[str]
        - _pos: int
        - _state: ParseState
        - _scanner: LineScanner
        - _registry: HeaderRegistry
        - _config: ParseConfig
        - _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    Required Host Methods:
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None
        - _parse_nested_content(text) -> Deferred[Blocks]
        - _parse_nested_lines(lines, stop) -> tuple[Deferred[Blocks], int]

    """


__all__ = [
    "AttributeParsingMixin",
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "FigureParsingMixin",
    "ListParsingMixin",
    "RegionParsingMixin",
    "SectionParsingMixin",
    "SourceBlockMixin",
    "TableParsingMixin",
]
