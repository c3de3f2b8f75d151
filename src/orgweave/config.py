"""ContextVar-based parse configuration for orgweave.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is read once when a Parser is created; sub-parsers for nested
content inherit it from their parent rather than reading the context again.

Usage:
    from orgweave.config import ParseConfig, parse_config_context
    from orgweave.parser import Parser

    with parse_config_context(ParseConfig(tab_stop=8)):
        document = Parser(source).parse()

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from orgweave.errors import ConfigError
from orgweave.state import ExportSettings

if TYPE_CHECKING:
    from orgweave.deferred import Deferred
    from orgweave.nodes import Inline
    from orgweave.registry import HeaderRegistry

# Org export options that are understood but have no effect on the block tree.
DEFAULT_IGNORED_EXPORT_SETTINGS: frozenset[str] = frozenset(
    {
        "'",
        "*",
        "-",
        ":",
        "<",
        "\\n",
        "arch",
        "author",
        "c",
        "creator",
        "date",
        "e",
        "email",
        "f",
        "H",
        "inline",
        "num",
        "p",
        "pri",
        "prop",
        "stat",
        "tags",
        "tasks",
        "tex",
        "timestamp",
        "title",
        "toc",
        "todo",
        "|",
    }
)


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        tab_stop: Columns a tab counts for when measuring indentation
        export_settings: Export settings in effect before any ``#+OPTIONS:``
        ignored_export_settings: ``#+OPTIONS:`` keys accepted without effect
        inline_parser: Replaces the default inline parser; receives a text
            span and returns deferred inline content
        header_registry_factory: Creates the registry that assigns header
            identifiers, once per top-level parse

    """

    tab_stop: int = 4
    export_settings: ExportSettings = field(default_factory=ExportSettings)
    ignored_export_settings: frozenset[str] = DEFAULT_IGNORED_EXPORT_SETTINGS
    inline_parser: Callable[[str], Deferred[tuple[Inline, ...]]] | None = None
    header_registry_factory: Callable[[], HeaderRegistry] | None = None

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            raise ConfigError("tab_stop", f"must be at least 1, got {self.tab_stop}")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> ParseConfig:
        """Create ParseConfig from dictionary.

        Unknown keys are ignored. A nested ``export_settings`` dict is turned
        into ExportSettings, and list values for drawer names and ignored
        settings are converted to the tuple/frozenset the fields expect.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "tab_stop": 8,
            ...     "export_settings": {"exclude_drawers": False, "drawers": ["NOTES"]},
            ...     "unknown_key": "ignored",
            ... })
            >>> config.export_settings.drawers
            ('NOTES',)

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        settings = filtered.get("export_settings")
        if isinstance(settings, dict):
            settings = dict(settings)
            if "drawers" in settings:
                settings["drawers"] = tuple(name.upper() for name in settings["drawers"])
            filtered["export_settings"] = ExportSettings(**settings)
        if "ignored_export_settings" in filtered:
            filtered["ignored_export_settings"] = frozenset(filtered["ignored_export_settings"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "orgweave_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(tab_stop=8)):
        ...     get_parse_config().tab_stop
        8

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_IGNORED_EXPORT_SETTINGS",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
