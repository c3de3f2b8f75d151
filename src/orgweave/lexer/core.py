"""Line-start recognizer for Org-mode block structure.

The scanner answers one question about a single line: which block form, if
any, does it open, and how wide is the structural lead-in? It is used by the
block parsers to check their lead-in conditions and by the paragraph rule to
decide where a paragraph ends.

Thread Safety:
LineScanner instances hold only configuration; share them freely.

"""

from __future__ import annotations

from orgweave.lexer.classifiers import (
    DrawerClassifierMixin,
    FootnoteClassifierMixin,
    HeaderClassifierMixin,
    KeywordClassifierMixin,
    LatexClassifierMixin,
    ListClassifierMixin,
    RegionClassifierMixin,
    TableClassifierMixin,
    ThematicClassifierMixin,
)
from orgweave.tokens import LineStart, StartType

# Classifier consulted for each form by LineScanner.match. Both table row
# kinds share one classifier, which reports the actual kind.
_CLASSIFIERS: dict[StartType, str] = {
    StartType.HEADER: "_try_classify_header",
    StartType.BULLET: "_try_classify_bullet",
    StartType.ORDERED: "_try_classify_ordered",
    StartType.BEGIN: "_try_classify_begin",
    StartType.DRAWER: "_try_classify_drawer",
    StartType.TABLE_ROW: "_try_classify_table_row",
    StartType.TABLE_RULE: "_try_classify_table_row",
    StartType.META_LINE: "_try_classify_meta_line",
    StartType.COMMENT_LINE: "_try_classify_comment_line",
    StartType.EXAMPLE_LINE: "_try_classify_example_line",
    StartType.HORIZONTAL_RULE: "_try_classify_horizontal_rule",
    StartType.FOOTNOTE: "_try_classify_footnote",
    StartType.LATEX_ENV: "_try_classify_latex_env",
}


class LineScanner(
    HeaderClassifierMixin,
    ThematicClassifierMixin,
    ListClassifierMixin,
    RegionClassifierMixin,
    DrawerClassifierMixin,
    KeywordClassifierMixin,
    TableClassifierMixin,
    FootnoteClassifierMixin,
    LatexClassifierMixin,
):
    """Classify the lead-in of single lines.

    Usage:
        >>> scanner = LineScanner()
        >>> scanner.classify("** Tasks :work:")
        LineStart(HEADER, width=2, value='Tasks :work:')
        >>> scanner.classify("plain text") is None
        True

    """

    __slots__ = ("_tab_stop",)

    def __init__(self, tab_stop: int = 4) -> None:
        self._tab_stop = tab_stop

    @property
    def tab_stop(self) -> int:
        return self._tab_stop

    @staticmethod
    def is_blank(line: str) -> bool:
        return not line.strip()

    def classify(self, line: str) -> LineStart | None:
        """Return the block form ``line`` opens, or None for plain text.

        Forms are checked in a fixed order so that a line matching several
        lead-ins gets a deterministic answer: example lines before drawers,
        horizontal rules before bullets, metadata lines before comments.
        """
        if self.is_blank(line):
            return LineStart(StartType.BLANK)
        return (
            self._try_classify_example_line(line)
            or self._try_classify_horizontal_rule(line)
            or self._try_classify_meta_line(line)
            or self._try_classify_comment_line(line)
            or self._try_classify_footnote(line)
            or self._try_classify_table_row(line)
            or self._try_classify_drawer(line)
            or self._try_classify_header(line)
            or self._try_classify_latex_env(line)
            or self._try_classify_bullet(line)
            or self._try_classify_ordered(line)
        )

    def ends_paragraph(self, line: str) -> bool:
        """Whether ``line`` stops a running paragraph.

        Blank lines and the start of any other block form end a paragraph.
        """
        return self.classify(line) is not None

    def list_start(self, line: str) -> LineStart | None:
        """Bullet or ordered list marker at the start of ``line``."""
        return self._try_classify_bullet(line) or self._try_classify_ordered(line)

    def match(self, line: str, start_type: StartType) -> LineStart | None:
        """Check ``line`` against a single form, ignoring all others.

        Table rows of either kind match TABLE_ROW and TABLE_RULE alike; the
        returned token carries the actual kind.
        """
        if start_type is StartType.BLANK:
            return LineStart(StartType.BLANK) if self.is_blank(line) else None
        return getattr(self, _CLASSIFIERS[start_type])(line)
