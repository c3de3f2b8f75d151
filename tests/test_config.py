"""Tests for ContextVar-based parse configuration.

Validates defaults, validation, dict loading, and context isolation across
threads.
"""

from threading import Thread

import pytest

from orgweave import (
    ConfigError,
    Parser,
    ParseConfig,
    Plain,
    SoftBreak,
    Text,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from orgweave.config import DEFAULT_IGNORED_EXPORT_SETTINGS
from orgweave.state import ExportSettings


@pytest.fixture(autouse=True)
def _reset_config():
    yield
    reset_parse_config()


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.tab_stop == 4
        assert config.export_settings == ExportSettings()
        assert config.ignored_export_settings == DEFAULT_IGNORED_EXPORT_SETTINGS
        assert config.inline_parser is None
        assert config.header_registry_factory is None

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.tab_stop = 8  # type: ignore[misc]

    @pytest.mark.parametrize("tab_stop", [0, -2])
    def test_tab_stop_must_be_positive(self, tab_stop: int) -> None:
        with pytest.raises(ConfigError, match=r"ParseConfig\.tab_stop") as excinfo:
            ParseConfig(tab_stop=tab_stop)
        assert excinfo.value.field == "tab_stop"


class TestFromDict:
    """ParseConfig.from_dict loading."""

    def test_unknown_keys_ignored(self) -> None:
        config = ParseConfig.from_dict({"tab_stop": 8, "colour": "blue"})
        assert config.tab_stop == 8

    def test_nested_export_settings(self) -> None:
        config = ParseConfig.from_dict(
            {"export_settings": {"exclude_drawers": False, "drawers": ["notes", "Clock"]}}
        )
        assert config.export_settings == ExportSettings(
            exclude_drawers=False, drawers=("NOTES", "CLOCK")
        )

    def test_ignored_settings_become_frozenset(self) -> None:
        config = ParseConfig.from_dict({"ignored_export_settings": ["toc", "num"]})
        assert config.ignored_export_settings == frozenset({"toc", "num"})

    def test_validation_still_applies(self) -> None:
        with pytest.raises(ConfigError):
            ParseConfig.from_dict({"tab_stop": 0})


class TestConfigContext:
    """Context manager, setters and thread isolation."""

    def test_context_restores_previous(self) -> None:
        assert get_parse_config().tab_stop == 4
        with parse_config_context(ParseConfig(tab_stop=2)):
            assert get_parse_config().tab_stop == 2
        assert get_parse_config().tab_stop == 4

    def test_context_restores_after_exception(self) -> None:
        with pytest.raises(ValueError), parse_config_context(ParseConfig(tab_stop=2)):
            raise ValueError("boom")
        assert get_parse_config().tab_stop == 4

    def test_set_and_reset(self) -> None:
        set_parse_config(ParseConfig(tab_stop=8))
        assert get_parse_config().tab_stop == 8
        reset_parse_config()
        assert get_parse_config().tab_stop == 4

    def test_parser_reads_config_at_creation(self) -> None:
        with parse_config_context(ParseConfig(tab_stop=2)):
            parser = Parser("- a\n\tb")
        doc = parser.parse()
        assert len(doc.children) == 1
        (item,) = doc.children[0].items
        assert item.children == (Plain((Text("a"), SoftBreak(), Text("b"))),)

    def test_parse_with_config_leaves_context_untouched(self) -> None:
        parse("text", config=ParseConfig(tab_stop=8))
        assert get_parse_config().tab_stop == 4

    def test_thread_isolation(self) -> None:
        seen: dict[str, int] = {}

        def worker() -> None:
            seen["thread"] = get_parse_config().tab_stop

        set_parse_config(ParseConfig(tab_stop=8))
        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert seen["thread"] == 4
        assert get_parse_config().tab_stop == 8
