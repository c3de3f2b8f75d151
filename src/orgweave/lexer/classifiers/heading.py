"""Header and horizontal rule classifier mixins."""

from orgweave.tokens import LineStart, StartType


class HeaderClassifierMixin:
    """Mixin providing section header classification."""

    def _try_classify_header(self, line: str) -> LineStart | None:
        """Try to classify a line as a section header.

        Headers start in column 0 with one or more ``*`` followed by at least
        one space. Anything else (``*bold*``, `` * item``) is not a header.

        Returns:
            LineStart with width = header level and value = the title text,
            or None.
        """
        level = 0
        line_len = len(line)
        while level < line_len and line[level] == "*":
            level += 1

        if level == 0 or level >= line_len or line[level] != " ":
            return None

        return LineStart(StartType.HEADER, width=level, value=line[level:].strip())


class ThematicClassifierMixin:
    """Mixin providing horizontal rule classification."""

    def _try_classify_horizontal_rule(self, line: str) -> LineStart | None:
        """A line of five or more dashes, optionally surrounded by whitespace."""
        content = line.strip()
        if len(content) < 5 or content.strip("-"):
            return None
        return LineStart(StartType.HORIZONTAL_RULE, width=len(content))
