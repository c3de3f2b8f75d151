"""Block attribute lines: ``#+NAME:``, ``#+CAPTION:`` and ``#+ATTR_HTML:``.

Attribute lines sit directly above a table, figure or region and decorate it::

    #+NAME: fig-results
    #+CAPTION: Measured latency
    #+ATTR_HTML: :width 80% :alt Latency plot
    [[./latency.png]]

Keys are case-insensitive. Several CAPTION or ATTR_HTML lines are joined
with a space; for NAME the first line wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred

if TYPE_CHECKING:
    from orgweave.nodes import Inline

_ATTRIBUTE_LINE_RE = re.compile(r"^[ \t]*#\+([^\s:]+):[ \t]*(.*)$")
_KEY_RE = re.compile(r"(?:^|(?<=\s)):(\S+)")


@dataclass(frozen=True, slots=True)
class BlockAttributes:
    """Attributes collected from the lines above a block.

    Attributes:
        name: Value of the first ``#+NAME:`` line
        caption: Deferred inline content of the joined ``#+CAPTION:`` lines
        keyvalues: Pairs from the joined ``#+ATTR_HTML:`` lines

    """

    name: str | None = None
    caption: Deferred[tuple[Inline, ...]] | None = None
    keyvalues: tuple[tuple[str, str], ...] = ()


def parse_key_values(text: str) -> tuple[tuple[str, str], ...]:
    """Parse ``:key value`` pairs.

    A key is a whitespace-delimited word starting with ``:``; its value is
    everything up to the next key. Text before the first key is ignored.

    Examples:
        >>> parse_key_values(":width 80% :alt A plot")
        (('width', '80%'), ('alt', 'A plot'))
        >>> parse_key_values(":hidden")
        (('hidden', ''),)
    """
    matches = list(_KEY_RE.finditer(text))
    pairs: list[tuple[str, str]] = []
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        pairs.append((match.group(1), text[match.end() : end].strip()))
    return tuple(pairs)


class AttributeParsingMixin:
    """Mixin collecting attribute lines above a block.

    Required Host Attributes:
        - _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    Required Host Methods:
        - _at_end() -> bool
        - _current_line() -> str
        - _advance(count) -> None

    """

    _inline: Callable[[str], Deferred[tuple[Inline, ...]]]

    def _parse_block_attributes(self) -> BlockAttributes:
        """Consume attribute lines under the cursor. Never fails.

        Stops at the first line that is not a NAME, CAPTION or ATTR_HTML
        line; zero attribute lines give empty attributes.
        """
        name: str | None = None
        captions: list[str] = []
        html: list[str] = []

        while not self._at_end():
            match = _ATTRIBUTE_LINE_RE.match(self._current_line())
            if match is None:
                break
            key = match.group(1).upper()
            value = match.group(2).rstrip()
            if key == "NAME":
                if name is None:
                    name = value
            elif key == "CAPTION":
                captions.append(value)
            elif key == "ATTR_HTML":
                html.append(value)
            else:
                break
            self._advance()

        caption = self._inline(" ".join(captions)) if captions else None
        return BlockAttributes(
            name=name,
            caption=caption,
            keyvalues=parse_key_values(" ".join(html)),
        )


__all__ = ["AttributeParsingMixin", "BlockAttributes", "parse_key_values"]
