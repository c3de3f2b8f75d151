"""Line-start classifiers for the orgweave lexer.

Each classifier is a mixin that decides whether a single line opens a
particular block form. Classifiers are pure: they look at one line and never
move a cursor.
"""

from orgweave.lexer.classifiers.block import (
    DrawerClassifierMixin,
    KeywordClassifierMixin,
    RegionClassifierMixin,
)
from orgweave.lexer.classifiers.footnote import (
    FootnoteClassifierMixin,
    LatexClassifierMixin,
)
from orgweave.lexer.classifiers.heading import (
    HeaderClassifierMixin,
    ThematicClassifierMixin,
)
from orgweave.lexer.classifiers.list import (
    ListClassifierMixin,
)
from orgweave.lexer.classifiers.table import (
    TableClassifierMixin,
)

__all__ = [
    "DrawerClassifierMixin",
    "FootnoteClassifierMixin",
    "HeaderClassifierMixin",
    "KeywordClassifierMixin",
    "LatexClassifierMixin",
    "ListClassifierMixin",
    "RegionClassifierMixin",
    "TableClassifierMixin",
    "ThematicClassifierMixin",
]
