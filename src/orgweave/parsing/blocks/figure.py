"""Figure parsing: a captioned image link on a line of its own.

Org:
    #+CAPTION: Throughput per worker
    #+NAME: throughput
    [[file:plots/throughput.png]]
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from orgweave.nodes import Attr, Image, Para
from orgweave.parsing.inline import is_image_filename

if TYPE_CHECKING:
    from orgweave.deferred import Deferred
    from orgweave.parsing.blocks.core import Blocks

_SELF_TARGET_RE = re.compile(r"^[ \t]*\[\[([^\[\]\n]+)\]\][ \t]*$")


def figure_title(name: str | None) -> str:
    """Image title marking a figure: the figure name behind ``fig:``."""
    name = name or ""
    if name.startswith("fig:"):
        return name
    return "fig:" + name


class FigureParsingMixin:
    """Mixin for captioned figures.

    Required Host Methods:
        - _parse_block_attributes() -> BlockAttributes
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None

    """

    def _try_parse_figure(self) -> Deferred[Blocks] | None:
        """Attributes with a caption followed by a lone image link.

        Without a caption, or when the line below the attributes is not an
        image link, the alternative declines and the lines are read as
        something else.
        """
        attrs = self._parse_block_attributes()
        if attrs.caption is None or self._at_end():
            return None

        match = _SELF_TARGET_RE.match(self._current_line())
        if match is None:
            return None
        target = match.group(1).strip()
        if not is_image_filename(target):
            return None
        self._advance()

        url = target[5:] if target.startswith("file:") else target
        title = figure_title(attrs.name)
        attr = Attr(keyvalues=attrs.keyvalues)
        return attrs.caption.map(
            lambda caption: (Para((Image(url, title, caption, attr),)),)
        )


__all__ = ["FigureParsingMixin", "figure_title"]
