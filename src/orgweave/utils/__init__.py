"""Utility modules for orgweave.

Provides:
- text: slugify and indentation helpers
- logger: get_logger for logging
"""

from orgweave.utils.logger import get_logger
from orgweave.utils.text import expand_indent, slugify, strip_indent

__all__ = [
    "expand_indent",
    "get_logger",
    "slugify",
    "strip_indent",
]
