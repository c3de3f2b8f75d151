"""Default inline parser for Org-mode text.

Covers the inline forms the block layer depends on:

- Links ``[[target][description]]`` and ``[[target]]``, expanded through the
  document's ``#+LINK:`` abbreviations; bare image targets become images
- Footnote references ``[fn:label]`` and ``[1]``, resolved to the footnote
  body from the final parse state
- Emphasis ``*strong*``, ``/emphasis/``, ``_underline_``, ``+strike+``,
  ``=verbatim=`` and ``~code~``
- Hard breaks (``\\\\`` at end of line) and soft breaks

Anything else is text. The parser is pluggable: ``ParseConfig.inline_parser``
accepts any callable with the signature of ``parse_inlines``.

Example:
    >>> from orgweave.parsing.inline import parse_inlines
    >>> inlines = parse_inlines("see [[https://orgmode.org][Org]]")
    >>> inlines.resolve(frozen_state)  # doctest: +SKIP
    (Text(content='see '), Link(url='https://orgmode.org', children=(Text(content='Org'),)))

"""

from __future__ import annotations

import re
from collections.abc import Mapping
from contextvars import ContextVar
from typing import TYPE_CHECKING

from orgweave.deferred import Deferred, concat
from orgweave.nodes import (
    Code,
    Emphasis,
    Image,
    Inline,
    LineBreak,
    Link,
    Note,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
    Underline,
    Verbatim,
)
from orgweave.utils.logger import get_logger

if TYPE_CHECKING:
    from orgweave.state import FrozenState, LinkFormatter

logger = get_logger(__name__)

type Inlines = tuple[Inline, ...]

_INLINE_RE = re.compile(
    r"(?P<link>\[\[(?P<target>[^\[\]\n]+)\](?:\[(?P<desc>[^\[\]\n]*)\])?\])"
    r"|(?P<note>\[(?P<label>fn:[^\]\s]+|[0-9]+)\])"
    r"|(?P<linebreak>\\\\[ \t]*(?:\n[ \t]*|$))"
    r"|(?P<newline>[ \t]*\n[ \t]*)"
    r"|(?<!\w)(?P<marker>[*/_+=~])(?P<body>\S(?:[^\n]*?\S)?)(?P=marker)(?!\w)"
)

_CONTAINERS = {
    "*": Strong,
    "/": Emphasis,
    "_": Underline,
    "+": Strikethrough,
}
_LITERALS = {
    "=": Verbatim,
    "~": Code,
}

IMAGE_EXTENSIONS = ("jpeg", "jpg", "png", "gif", "svg")
_IMAGE_SCHEMES = ("file", "http", "https")

# Labels of the footnotes currently being resolved, to stop self-reference.
_resolving_notes: ContextVar[frozenset[str]] = ContextVar(
    "orgweave_resolving_notes",
    default=frozenset(),
)


def is_image_filename(target: str) -> bool:
    """Whether a link target names an image.

    The target needs an image extension and either no URL scheme or one of
    ``file``, ``http`` and ``https``.

    Examples:
        >>> is_image_filename("figures/plot.PNG")
        True
        >>> is_image_filename("https://example.org/cat.jpg")
        True
        >>> is_image_filename("ftp://example.org/cat.jpg")
        False
        >>> is_image_filename("notes.org")
        False
    """
    stem, dot, extension = target.rpartition(".")
    if not dot or not stem or extension.lower() not in IMAGE_EXTENSIONS:
        return False
    scheme, colon, _rest = target.partition(":")
    return not colon or scheme.lower() in _IMAGE_SCHEMES


def expand_link_target(target: str, formatters: Mapping[str, LinkFormatter]) -> str:
    """Turn a link target into a URL.

    ``file:`` prefixes are dropped and ``type:rest`` targets whose type was
    declared with ``#+LINK:`` go through the declared formatter.
    """
    if target.startswith("file:"):
        return target[5:]
    link_type, colon, rest = target.partition(":")
    if colon and link_type in formatters:
        return formatters[link_type](rest)
    if not colon and target in formatters:
        return formatters[target]("")
    return target


def merge_text(inlines: Inlines) -> Inlines:
    """Join adjacent Text nodes and drop empty ones."""
    merged: list[Inline] = []
    for node in inlines:
        if isinstance(node, Text):
            if not node.content:
                continue
            if merged and isinstance(merged[-1], Text):
                merged[-1] = Text(merged[-1].content + node.content)
                continue
        merged.append(node)
    return tuple(merged)


def parse_inlines(text: str) -> Deferred[Inlines]:
    """Parse a span of Org text into deferred inline content.

    Surrounding whitespace is trimmed. Links and footnote references depend
    on declarations that may come later in the document, so the result is
    only available once the parse state is final.
    """
    text = text.strip()
    if not text:
        return Deferred.pure(())
    return concat(_scan(text)).map(merge_text)


def _scan(text: str) -> list[Deferred[Inlines]]:
    parts: list[Deferred[Inlines]] = []
    pos = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > pos:
            parts.append(Deferred.pure((Text(text[pos : match.start()]),)))
        pos = match.end()

        if match.group("link") is not None:
            parts.append(_link(match.group("target"), match.group("desc")))
        elif match.group("note") is not None:
            parts.append(_note_reference(match.group("label")))
        elif match.group("linebreak") is not None:
            parts.append(Deferred.pure((LineBreak(),)))
        elif match.group("newline") is not None:
            parts.append(Deferred.pure((SoftBreak(),)))
        else:
            parts.append(_emphasis(match.group("marker"), match.group("body")))

    if pos < len(text):
        parts.append(Deferred.pure((Text(text[pos:]),)))
    return parts


def _emphasis(marker: str, body: str) -> Deferred[Inlines]:
    literal = _LITERALS.get(marker)
    if literal is not None:
        return Deferred.pure((literal(body),))
    container = _CONTAINERS[marker]
    return concat(_scan(body)).map(lambda children: (container(merge_text(children)),))


def _link(target: str, description: str | None) -> Deferred[Inlines]:
    target = target.strip()
    url = Deferred(lambda state: expand_link_target(target, state.link_formatters))

    if not description:
        if is_image_filename(target):
            return url.map(lambda resolved: (Image(resolved),))
        return url.map(lambda resolved: (Link(resolved, (Text(target),)),))

    children = concat(_scan(description.strip())).map(merge_text)
    return url.combine(children, lambda resolved, inlines: (Link(resolved, inlines),))


def _note_reference(label: str) -> Deferred[Inlines]:
    def resolve(state: FrozenState) -> Inlines:
        body = state.footnotes.get(label)
        if body is None:
            return (Text(f"[{label}]"),)

        active = _resolving_notes.get()
        if label in active:
            logger.warning("Footnote %r refers to itself; leaving the inner reference empty", label)
            return (Note(()),)

        token = _resolving_notes.set(active | {label})
        try:
            return (Note(body.resolve(state)),)
        finally:
            _resolving_notes.reset(token)

    return Deferred(resolve)


__all__ = [
    "IMAGE_EXTENSIONS",
    "Inlines",
    "expand_link_target",
    "is_image_filename",
    "merge_text",
    "parse_inlines",
]
