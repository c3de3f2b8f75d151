"""Tests for ``#+OPTIONS:`` and ``#+LINK:`` handling."""

import logging

import pytest

from orgweave import Link, Para, Parser, Text, parse
from orgweave.config import DEFAULT_IGNORED_EXPORT_SETTINGS
from orgweave.errors import StateError
from orgweave.parsing.settings import (
    apply_export_options,
    elisp_boolean,
    make_link_formatter,
    parse_drawer_setting,
    parse_link_format,
)
from orgweave.state import ParseState


class TestElispValues:
    @pytest.mark.parametrize("value", ["nil", "NIL", "()", "{}", " nil "])
    def test_false(self, value: str) -> None:
        assert elisp_boolean(value) is False

    @pytest.mark.parametrize("value", ["t", "yes", "1", "(x)"])
    def test_true(self, value: str) -> None:
        assert elisp_boolean(value) is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ('(not "LOGBOOK" "notes")', (True, ("LOGBOOK", "NOTES"))),
            ('("NOTES")', (False, ("NOTES",))),
            ("(not)", (True, ())),
            ("t", (True, ())),
            ("nil", (False, ())),
            ("()", (False, ())),
        ],
    )
    def test_drawer_setting(self, value: str, expected: tuple) -> None:
        assert parse_drawer_setting(value) == expected


class TestExportOptions:
    def _apply(self, text: str) -> ParseState:
        state = ParseState()
        apply_export_options(text, state, DEFAULT_IGNORED_EXPORT_SETTINGS)
        return state

    def test_sub_superscripts(self) -> None:
        assert self._apply("^:nil").export_settings.sub_superscripts is False
        assert self._apply("^:{}").export_settings.sub_superscripts is False
        assert self._apply("^:t").export_settings.sub_superscripts is True

    def test_drawers(self) -> None:
        settings = self._apply('toc:nil d:(not "CLOCK") num:2').export_settings
        assert settings.exclude_drawers is True
        assert settings.drawers == ("CLOCK",)

    def test_later_setting_wins(self) -> None:
        assert self._apply("^:nil ^:t").export_settings.sub_superscripts is True

    def test_ignored_settings_are_silent(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="orgweave"):
            self._apply("toc:nil H:3 ::t")
        assert "Skipping" not in caplog.text

    def test_unknown_settings_logged(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="orgweave"):
            state = self._apply("frobnicate:yes")
        assert "Skipping unknown export setting frobnicate:yes" in caplog.text
        assert state.export_settings == ParseState().export_settings

    def test_options_line_through_parser(self) -> None:
        parser = Parser("#+OPTIONS: ^:nil\n\nText")
        doc = parser.parse()
        assert parser.state.export_settings.sub_superscripts is False
        assert doc.meta == {}
        assert doc.children == (Para((Text("Text"),)),)

    def test_state_unavailable_before_parse(self) -> None:
        with pytest.raises(StateError):
            Parser("x").state

    def test_parser_is_single_use(self) -> None:
        parser = Parser("x")
        parser.parse()
        with pytest.raises(StateError, match="single-use"):
            parser.parse()


class TestLinkFormats:
    def test_placeholder(self) -> None:
        assert make_link_formatter("https://github.com/%s/issues")("org/repo") == (
            "https://github.com/org/repo/issues"
        )

    def test_encoded_placeholder(self) -> None:
        assert make_link_formatter("https://ddg.gg/?q=%h")("a&b c") == "https://ddg.gg/?q=a%26b%20c"

    def test_append(self) -> None:
        assert make_link_formatter("https://en.wikipedia.org/wiki/")("Org") == (
            "https://en.wikipedia.org/wiki/Org"
        )

    def test_parse_link_format(self) -> None:
        link_type, formatter = parse_link_format("gh   https://github.com/%s")
        assert link_type == "gh"
        assert formatter("x") == "https://github.com/x"
        assert parse_link_format("") is None
        assert parse_link_format("!bad x") is None

    def test_declared_abbreviation_expands_links(self) -> None:
        doc = parse("#+LINK: gh https://github.com/%s\n\nSee [[gh:org/repo][the repo]].")
        assert doc.children == (
            Para(
                (
                    Text("See "),
                    Link("https://github.com/org/repo", (Text("the repo"),)),
                    Text("."),
                )
            ),
        )

    def test_declaration_after_use(self) -> None:
        doc = parse("See [[wiki:Org]].\n#+LINK: wiki https://en.wikipedia.org/wiki/")
        (para,) = doc.children
        assert para.children[1] == Link("https://en.wikipedia.org/wiki/Org", (Text("wiki:Org"),))

    def test_bare_link_type(self) -> None:
        doc = parse("#+LINK: home https://example.org/\n\n[[home]]")
        assert doc.children == (Para((Link("https://example.org/", (Text("home"),)),)),)

    def test_undeclared_type_untouched(self) -> None:
        doc = parse("[[mailto:me@example.org][mail]]")
        assert doc.children[0].children == (Link("mailto:me@example.org", (Text("mail"),)),)

    def test_link_line_is_not_metadata(self) -> None:
        assert parse("#+LINK: gh https://github.com/%s").meta == {}
