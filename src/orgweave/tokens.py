"""Line-start tokens produced by the lexer.

The lexer never interprets content. It reports which structural form a line
opens and the structural width of its lead-in (header level, list marker
width, region indentation), and leaves the rest to the block parsers.

Thread Safety:
LineStart is frozen (immutable). StartType is an enum.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class StartType(Enum):
    """Structural forms a line can open."""

    BLANK = auto()
    HEADER = auto()  # ** Title
    BULLET = auto()  # - item
    ORDERED = auto()  # 1. item
    BEGIN = auto()  # #+BEGIN_type
    DRAWER = auto()  # :NAME:
    TABLE_ROW = auto()  # | cell |
    TABLE_RULE = auto()  # |---+---|
    META_LINE = auto()  # #+KEY: value
    COMMENT_LINE = auto()  # # comment
    EXAMPLE_LINE = auto()  # : literal
    HORIZONTAL_RULE = auto()  # -----
    FOOTNOTE = auto()  # [fn:label]
    LATEX_ENV = auto()  # \begin{env}


@dataclass(frozen=True, slots=True)
class LineStart:
    """Classification of a line's lead-in.

    Attributes:
        type: Which form the line opens
        width: Structural width: header level, list marker width (indent,
            marker and following whitespace), or indentation for regions
        value: Form-specific payload: text after the lead-in, region type,
            drawer name, footnote label or LaTeX environment name
        indent: Columns of indentation before the lead-in
        marker: Raw marker text (bullet character, ordered list number)

    """

    type: StartType
    width: int = 0
    value: str = ""
    indent: int = 0
    marker: str = ""

    def __repr__(self) -> str:
        return f"LineStart({self.type.name}, width={self.width}, value={self.value!r})"
