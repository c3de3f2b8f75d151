"""Document-level settings lines: ``#+OPTIONS:`` and ``#+LINK:``.

Both act on the parse state during the scan and produce no blocks.

``#+OPTIONS:`` holds whitespace separated ``key:value`` settings. Values are
either single tokens or parenthesized elisp lists::

    #+OPTIONS: ^:nil d:(not "LOGBOOK" "NOTES") toc:nil

``#+LINK:`` declares a link abbreviation::

    #+LINK: gh https://github.com/%s
    #+LINK: search https://duckduckgo.com/?q=%h
    #+LINK: wiki https://en.wikipedia.org/wiki/

``%s`` is replaced by the link target, ``%h`` by the URL-encoded target;
without either, the target is appended.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from urllib.parse import quote

from orgweave.state import LinkFormatter, ParseState
from orgweave.utils.logger import get_logger

logger = get_logger(__name__)

_SETTING_RE = re.compile(r"(?P<key>[^\s:]+|:):(?P<value>\([^)]*\)|\S+)")
_LINK_FORMAT_RE = re.compile(r"^([A-Za-z][A-Za-z0-9_-]*)[ \t]*(.*)$")
_QUOTED_RE = re.compile(r'"([^"]*)"')

_ELISP_FALSE = frozenset({"nil", "{}", "()"})


def elisp_boolean(value: str) -> bool:
    """Interpret an elisp value as a boolean.

    ``nil``, ``{}`` and ``()`` are false; everything else is true.
    """
    return value.strip().lower() not in _ELISP_FALSE


def parse_drawer_setting(value: str) -> tuple[bool, tuple[str, ...]]:
    """Interpret the value of the ``d:`` export setting.

    Returns:
        (exclude_drawers, drawers) as stored on ExportSettings.

    Examples:
        >>> parse_drawer_setting('(not "LOGBOOK" "NOTES")')
        (True, ('LOGBOOK', 'NOTES'))
        >>> parse_drawer_setting('("NOTES")')
        (False, ('NOTES',))
        >>> parse_drawer_setting("t")
        (True, ())
        >>> parse_drawer_setting("nil")
        (False, ())
    """
    value = value.strip()
    if value.startswith("(") and value not in _ELISP_FALSE:
        names = tuple(name.upper() for name in _QUOTED_RE.findall(value))
        inner = value[1:].lstrip()
        if inner.startswith("not") and inner[3:4] in (" ", "\t", '"', ")"):
            return True, names
        return False, names
    if elisp_boolean(value):
        return True, ()
    return False, ()


def apply_export_options(
    text: str,
    state: ParseState,
    ignored: Collection[str],
) -> None:
    """Apply the settings of one ``#+OPTIONS:`` line to ``state``.

    Settings without an effect on the block tree (``ignored``) are accepted
    silently; unknown settings are skipped.
    """
    for match in _SETTING_RE.finditer(text):
        key = match.group("key")
        value = match.group("value")
        if key == "^":
            state.update_export_settings(sub_superscripts=elisp_boolean(value))
        elif key == "d":
            exclude, drawers = parse_drawer_setting(value)
            state.update_export_settings(exclude_drawers=exclude, drawers=drawers)
        elif key not in ignored:
            logger.debug("Skipping unknown export setting %s:%s", key, value)


def make_link_formatter(template: str) -> LinkFormatter:
    """Build the function expanding a link target through ``template``.

    Examples:
        >>> make_link_formatter("https://x.org/%s/view")("a b")
        'https://x.org/a b/view'
        >>> make_link_formatter("https://x.org/?q=%h")("a b")
        'https://x.org/?q=a%20b'
        >>> make_link_formatter("https://x.org/")("page")
        'https://x.org/page'
    """
    if "%s" in template:
        before, after = template.split("%s", 1)
        return lambda target: before + target + after
    if "%h" in template:
        before, after = template.split("%h", 1)
        return lambda target: before + quote(target, safe="") + after
    return lambda target: template + target


def parse_link_format(text: str) -> tuple[str, LinkFormatter] | None:
    """Parse the value of a ``#+LINK:`` line.

    Returns:
        (link type, formatter), or None when the value does not start with a
        link type.
    """
    match = _LINK_FORMAT_RE.match(text.strip())
    if match is None:
        return None
    return match.group(1), make_link_formatter(match.group(2))


__all__ = [
    "apply_export_options",
    "elisp_boolean",
    "make_link_formatter",
    "parse_drawer_setting",
    "parse_link_format",
]
