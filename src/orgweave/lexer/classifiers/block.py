"""Classifier mixins for keyword lines, regions and drawers."""

import re

from orgweave.tokens import LineStart, StartType
from orgweave.utils.text import expand_indent

_BEGIN_RE = re.compile(r"^([ \t]*)#\+begin_([\w-]+)(.*)$", re.IGNORECASE)
_DRAWER_RE = re.compile(r"^[ \t]*:([^\s:]+):[ \t]*$")
_DRAWER_END_RE = re.compile(r"^[ \t]*:end:[ \t]*$", re.IGNORECASE)
_RESULTS_RE = re.compile(r"^[ \t]*#\+results(?:\[[^\]\n]*\])?:(.*)$", re.IGNORECASE)


class RegionClassifierMixin:
    """Mixin providing ``#+BEGIN_x``/``#+END_x`` classification.

    Required Host Attributes:
        - _tab_stop: int

    """

    _tab_stop: int

    def _try_classify_begin(self, line: str) -> LineStart | None:
        """Classify an opening region line.

        Returns:
            LineStart with width = indentation columns, value = lower-cased
            region type, marker = the rest of the line (header arguments).
        """
        match = _BEGIN_RE.match(line)
        if match is None:
            return None
        indent = expand_indent(match.group(1), self._tab_stop)
        return LineStart(
            StartType.BEGIN,
            width=indent,
            value=match.group(2).lower(),
            indent=indent,
            marker=match.group(3),
        )

    def is_region_end(self, line: str, region_type: str) -> bool:
        """Whether ``line`` closes a region of ``region_type``."""
        content = line.lstrip(" \t")
        closer = "#+end_" + region_type
        if content[: len(closer)].lower() != closer:
            return False
        rest = content[len(closer) :]
        return not rest or rest[0] in " \t"


class DrawerClassifierMixin:
    """Mixin providing drawer line classification."""

    def _try_classify_drawer(self, line: str) -> LineStart | None:
        """Classify ``:NAME:`` alone on a line. ``:END:`` never opens a drawer."""
        match = _DRAWER_RE.match(line)
        if match is None:
            return None
        name = match.group(1).upper()
        if name == "END":
            return None
        return LineStart(StartType.DRAWER, value=name)

    def is_drawer_end(self, line: str) -> bool:
        return _DRAWER_END_RE.match(line) is not None


class KeywordClassifierMixin:
    """Mixin providing metadata, comment, example and results line checks."""

    def _try_classify_meta_line(self, line: str) -> LineStart | None:
        """``#+`` after optional indentation. Value is the text after ``#+``."""
        content = line.lstrip(" \t")
        if not content.startswith("#+"):
            return None
        return LineStart(StartType.META_LINE, value=content[2:])

    def _try_classify_comment_line(self, line: str) -> LineStart | None:
        """``# text`` or a lone ``#``."""
        content = line.lstrip(" \t")
        if content == "#" or content.startswith(("# ", "#\t")):
            return LineStart(StartType.COMMENT_LINE, value=content[2:])
        return None

    def _try_classify_example_line(self, line: str) -> LineStart | None:
        """``: text`` or a lone ``:``. Value is the literal text."""
        content = line.lstrip(" \t")
        if content == ":":
            return LineStart(StartType.EXAMPLE_LINE, value="")
        if content.startswith(": "):
            return LineStart(StartType.EXAMPLE_LINE, value=content[2:])
        return None

    def is_results_marker(self, line: str) -> bool:
        """``#+RESULTS:`` line introducing the output of a source block."""
        return _RESULTS_RE.match(line) is not None
