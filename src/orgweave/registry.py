"""Header registry: final identifiers for section headers.

The block parser assembles a header's raw attributes (from its PROPERTIES
drawer) and hands them to a registry, which returns the attributes actually
stamped onto the Header node. The default registry derives identifiers from
the header title and keeps them unique within one document.

Example:
    >>> registry = AutoIdentifierRegistry()
    >>> registry.register(1, "Intro", Attr()).identifier
    'intro'
    >>> registry.register(2, "Intro", Attr()).identifier
    'intro-1'

"""

from __future__ import annotations

from dataclasses import replace
from typing import Protocol, runtime_checkable

from orgweave.nodes import Attr
from orgweave.utils.text import slugify


@runtime_checkable
class HeaderRegistry(Protocol):
    """Contract for header identifier assignment.

    One instance serves one top-level parse, including its sub-parsers.
    """

    def register(self, level: int, title: str, attr: Attr) -> Attr: ...


class AutoIdentifierRegistry:
    """Assign slug identifiers to headers that lack an explicit one.

    Explicit identifiers (``CUSTOM_ID``) are kept as given but reserved, so
    generated identifiers never collide with them.
    """

    __slots__ = ("_used", "fallback")

    def __init__(self, fallback: str = "section") -> None:
        self._used: set[str] = set()
        self.fallback = fallback

    def register(self, level: int, title: str, attr: Attr) -> Attr:
        if attr.identifier:
            self._used.add(attr.identifier)
            return attr

        base = slugify(title) or self.fallback
        identifier = base
        suffix = 0
        while identifier in self._used:
            suffix += 1
            identifier = f"{base}-{suffix}"
        self._used.add(identifier)
        return replace(attr, identifier=identifier)


class NullRegistry:
    """Registry that leaves header attributes untouched."""

    __slots__ = ()

    def register(self, level: int, title: str, attr: Attr) -> Attr:
        return attr


__all__ = [
    "AutoIdentifierRegistry",
    "HeaderRegistry",
    "NullRegistry",
]
