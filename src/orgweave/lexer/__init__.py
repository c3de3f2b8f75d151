"""Lexical line-start recognition for orgweave.

Provides LineScanner, which classifies the structural lead-in of a line
(header stars, list markers, region and drawer delimiters, keyword lines)
without interpreting the line's content.
"""

from orgweave.lexer.core import LineScanner

__all__ = ["LineScanner"]
