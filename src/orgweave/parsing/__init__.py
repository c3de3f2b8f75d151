"""Parsing subsystem for orgweave.

Provides the mixins composed into ``Parser`` and the default inline parser:
- cursor: Line cursor navigation
- blocks: Block grammar
- inline: Default inline parser
- settings: ``#+OPTIONS:`` and ``#+LINK:`` handling

"""

from orgweave.parsing.blocks import BlockParsingMixin
from orgweave.parsing.cursor import LineNavigationMixin, split_lines
from orgweave.parsing.inline import parse_inlines

__all__ = [
    "BlockParsingMixin",
    "LineNavigationMixin",
    "parse_inlines",
    "split_lines",
]
