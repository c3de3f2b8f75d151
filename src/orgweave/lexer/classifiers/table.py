"""Table row classifier mixin."""

from orgweave.tokens import LineStart, StartType


class TableClassifierMixin:
    """Mixin providing table row classification."""

    def _try_classify_table_row(self, line: str) -> LineStart | None:
        """Rows start with ``|`` after optional indentation.

        Returns:
            TABLE_RULE for separator rows (``|-``), TABLE_ROW otherwise; value
            is the text after the leading pipe.
        """
        content = line.lstrip(" \t")
        if not content.startswith("|"):
            return None
        rest = content[1:]
        if rest.startswith("-"):
            return LineStart(StartType.TABLE_RULE, value=rest)
        return LineStart(StartType.TABLE_ROW, value=rest)
