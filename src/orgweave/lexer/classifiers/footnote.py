"""Footnote marker and LaTeX environment classifier mixins."""

import re

from orgweave.tokens import LineStart, StartType

_NOTE_MARKER_RE = re.compile(r"\[(fn:[^\]\s]+|[0-9]+)\]")
_LATEX_BEGIN_RE = re.compile(r"^[ \t]*\\begin\{([A-Za-z0-9]+\*?)\}[ \t]*$")


class FootnoteClassifierMixin:
    """Mixin providing footnote definition marker classification."""

    def _try_classify_footnote(self, line: str) -> LineStart | None:
        """``[fn:label]`` or ``[12]`` in column 0.

        Returns:
            LineStart with value = label (``fn:label`` or ``12``) and width =
            length of the marker.
        """
        match = _NOTE_MARKER_RE.match(line)
        if match is None:
            return None
        return LineStart(StartType.FOOTNOTE, width=match.end(), value=match.group(1))


class LatexClassifierMixin:
    """Mixin providing raw LaTeX environment classification."""

    def _try_classify_latex_env(self, line: str) -> LineStart | None:
        """``\\begin{name}`` alone on a line. Value is the environment name."""
        match = _LATEX_BEGIN_RE.match(line)
        if match is None:
            return None
        return LineStart(StartType.LATEX_ENV, value=match.group(1))

    def is_latex_end(self, line: str, env_name: str) -> bool:
        return line.strip() == "\\end{" + env_name + "}"
