"""Logger lookup for orgweave modules.

Every module logs through ``get_logger(__name__)`` so all records land
under the ``orgweave`` namespace. No handlers are attached; applications
opt in with the usual ``logging`` configuration.

What gets logged:
    DEBUG: multi-line forms abandoned as text (unterminated regions,
        drawers and LaTeX environments), region lines indented less than
        the opening line, skipped ``#+OPTIONS:`` settings and stray source
        block header tokens.
    WARNING: footnote labels defined twice and footnotes that refer to
        themselves.

Example:
    >>> import logging
    >>> logging.getLogger("orgweave").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

_ROOT = "orgweave"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the orgweave namespace.

    Names already under ``orgweave`` are used as is.

    Example:
        >>> get_logger("tools").name
        'orgweave.tools'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
