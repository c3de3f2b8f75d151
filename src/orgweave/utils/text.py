"""Text processing utilities for orgweave.

Example:
    >>> from orgweave.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[-\s]+")


def slugify(text: str, separator: str = "-") -> str:
    """Convert header text to an identifier.

    Keeps Unicode word characters, drops punctuation, and collapses runs of
    whitespace and hyphens into ``separator``.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("  Café -- au lait ")
        'café-au-lait'
        >>> slugify("***")
        ''
    """
    if not text:
        return ""
    text = _NON_WORD.sub("", text.lower().strip())
    text = _SEPARATORS.sub(separator, text)
    return text.strip(separator)


def expand_indent(text: str, tab_stop: int) -> int:
    """Width of the leading whitespace of ``text``.

    Spaces count one column, tabs count ``tab_stop`` columns.

    Examples:
        >>> expand_indent("  x", 4)
        2
        >>> expand_indent("\\t x", 4)
        5
    """
    width = 0
    for char in text:
        if char == " ":
            width += 1
        elif char == "\t":
            width += tab_stop
        else:
            break
    return width


def strip_indent(line: str, width: int, tab_stop: int) -> str | None:
    """Remove exactly ``width`` columns of indentation from ``line``.

    Returns None if the line is indented by less than ``width`` columns, or if
    a tab would overshoot the requested width.

    Examples:
        >>> strip_indent("    code", 2, 4)
        '  code'
        >>> strip_indent(" x", 2, 4) is None
        True
        >>> strip_indent("\\tx", 4, 4)
        'x'
    """
    col = 0
    pos = 0
    while col < width:
        if pos >= len(line):
            return None
        char = line[pos]
        if char == " ":
            col += 1
        elif char == "\t":
            col += tab_stop
        else:
            return None
        pos += 1
    if col != width:
        return None
    return line[pos:]
