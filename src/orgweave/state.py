"""Parse state shared by every block parser during one scan.

Two types split the lifecycle:

- ``ParseState``: mutable, written in place while the scan runs. Block
  parsers record metadata declarations, link formats, footnote bodies and
  export settings here, and read export settings back (drawer inclusion is
  decided while scanning).
- ``FrozenState``: read-only snapshot produced by ``ParseState.freeze()``.
  Deferred values resolve against it and nothing else.

Once frozen, a ParseState rejects further writes with StateError.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from orgweave.errors import StateError
from orgweave.utils.logger import get_logger

if TYPE_CHECKING:
    from orgweave.deferred import Deferred
    from orgweave.nodes import Block, Inline, MetaValue

logger = get_logger(__name__)

type LinkFormatter = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class ExportSettings:
    """Export policy declared through ``#+OPTIONS:`` lines.

    Attributes:
        exclude_drawers: If True, ``drawers`` lists drawers to drop; if False,
            it lists the only drawers to keep
        drawers: Upper-cased drawer names
        sub_superscripts: ``^:`` setting. Recorded for custom inline parsers;
            the default inline parser does not read it

    """

    exclude_drawers: bool = True
    drawers: tuple[str, ...] = ("LOGBOOK",)
    sub_superscripts: bool = True

    def keeps_drawer(self, name: str) -> bool:
        """Whether a drawer called ``name`` survives into the output.

        PROPERTIES drawers never do.
        """
        name = name.upper()
        if name == "PROPERTIES":
            return False
        if self.exclude_drawers:
            return name not in self.drawers
        return name in self.drawers


@dataclass(frozen=True, slots=True)
class FrozenState:
    """Final parse state, visible to deferred values during resolution."""

    meta_declarations: tuple[tuple[str, Deferred[tuple[Inline, ...]]], ...]
    link_formatters: Mapping[str, LinkFormatter]
    footnotes: Mapping[str, Deferred[tuple[Block, ...]]]
    export_settings: ExportSettings

    def resolve_meta(self) -> dict[str, MetaValue]:
        """Fold metadata declarations into the final mapping.

        The first declaration of a key gives MetaInlines; repeated
        declarations are collected in order into a MetaList.
        """
        from orgweave.nodes import MetaInlines, MetaList

        meta: dict[str, MetaValue] = {}
        for key, value in self.meta_declarations:
            entry = MetaInlines(value.resolve(self))
            previous = meta.get(key)
            if previous is None:
                meta[key] = entry
            elif isinstance(previous, MetaList):
                meta[key] = MetaList((*previous.items, entry))
            else:
                meta[key] = MetaList((previous, entry))
        return meta

    def resolve_footnotes(self) -> dict[str, tuple[Block, ...]]:
        """Resolve every footnote body, keyed by label."""
        return {label: body.resolve(self) for label, body in self.footnotes.items()}


@dataclass(slots=True)
class ParseState:
    """Mutable state of a single scan.

    Sub-parsers for nested content (list items, drawers, regions) share their
    parent's instance.
    """

    export_settings: ExportSettings = field(default_factory=ExportSettings)
    meta_declarations: list[tuple[str, Deferred[tuple[Inline, ...]]]] = field(
        default_factory=list
    )
    link_formatters: dict[str, LinkFormatter] = field(default_factory=dict)
    footnotes: dict[str, Deferred[tuple[Block, ...]]] = field(default_factory=dict)
    list_depth: int = 0
    _frozen: bool = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def in_list(self) -> bool:
        """Whether the scan is inside a list item."""
        return self.list_depth > 0

    def _check_writable(self) -> None:
        if self._frozen:
            raise StateError("parse state is frozen; the scan has already finished")

    def add_meta(self, key: str, value: Deferred[tuple[Inline, ...]]) -> None:
        """Record a ``#+KEY: value`` declaration."""
        self._check_writable()
        self.meta_declarations.append((key, value))

    def add_link_format(self, link_type: str, formatter: LinkFormatter) -> None:
        """Register a ``#+LINK:`` abbreviation. Later declarations win."""
        self._check_writable()
        self.link_formatters[link_type] = formatter

    def add_footnote(self, label: str, body: Deferred[tuple[Block, ...]]) -> None:
        """Store a footnote definition. Later definitions of a label win."""
        self._check_writable()
        if label in self.footnotes:
            logger.warning("Footnote %r defined more than once; keeping the last definition", label)
        self.footnotes[label] = body

    def update_export_settings(self, **changes: Any) -> None:
        """Replace export settings with ``changes`` applied."""
        self._check_writable()
        self.export_settings = replace(self.export_settings, **changes)

    @contextmanager
    def list_item(self) -> Iterator[None]:
        """Mark the scan as being inside a list item for the block's duration."""
        self.list_depth += 1
        try:
            yield
        finally:
            self.list_depth -= 1

    def freeze(self) -> FrozenState:
        """End the scan and return the read-only view used for resolution."""
        self._frozen = True
        return FrozenState(
            meta_declarations=tuple(self.meta_declarations),
            link_formatters=MappingProxyType(dict(self.link_formatters)),
            footnotes=MappingProxyType(dict(self.footnotes)),
            export_settings=self.export_settings,
        )


__all__ = [
    "ExportSettings",
    "FrozenState",
    "LinkFormatter",
    "ParseState",
]
