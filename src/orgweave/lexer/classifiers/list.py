"""List marker classifier mixin."""

from orgweave.tokens import LineStart, StartType


class ListClassifierMixin:
    """Mixin providing bullet and ordered list marker classification.

    Required Host Attributes:
        - _tab_stop: int

    """

    _tab_stop: int

    def _measure_marker(self, line: str, pos: int) -> tuple[int, int] | None:
        """Measure the whitespace after a marker ending at ``pos``.

        Returns:
            (columns of whitespace, position after it), or None when the
            marker is not followed by at least one space or tab.
        """
        cols = 0
        line_len = len(line)
        while pos < line_len and line[pos] in " \t":
            cols += self._tab_stop if line[pos] == "\t" else 1
            pos += 1
        if cols == 0:
            return None
        return cols, pos

    def _leading_indent(self, line: str) -> tuple[int, int]:
        """Return (columns, characters) of leading indentation."""
        cols = 0
        pos = 0
        while pos < len(line) and line[pos] in " \t":
            cols += self._tab_stop if line[pos] == "\t" else 1
            pos += 1
        return cols, pos

    def _try_classify_bullet(self, line: str) -> LineStart | None:
        """Try to classify a line as a bullet list item.

        Bullets are ``-``, ``+`` or ``*``; a ``*`` in column 0 is a header
        and never a bullet.

        Returns:
            LineStart with width = indent + marker + following whitespace.
        """
        indent, pos = self._leading_indent(line)
        if pos >= len(line):
            return None
        bullet = line[pos]
        if bullet not in "-+*" or (bullet == "*" and indent == 0):
            return None

        measured = self._measure_marker(line, pos + 1)
        if measured is None:
            return None
        spaces, content_pos = measured

        return LineStart(
            StartType.BULLET,
            width=indent + 1 + spaces,
            value=line[content_pos:],
            indent=indent,
            marker=bullet,
        )

    def _try_classify_ordered(self, line: str) -> LineStart | None:
        """Try to classify a line as an ordered list item (``1.`` or ``1)``)."""
        indent, pos = self._leading_indent(line)
        digits_start = pos
        while pos < len(line) and line[pos] in "0123456789":
            pos += 1
        if pos == digits_start or pos >= len(line) or line[pos] not in ".)":
            return None
        number = line[digits_start:pos]

        measured = self._measure_marker(line, pos + 1)
        if measured is None:
            return None
        spaces, content_pos = measured

        return LineStart(
            StartType.ORDERED,
            width=indent + len(number) + 1 + spaces,
            value=line[content_pos:],
            indent=indent,
            marker=number,
        )
