"""Tests for the scan-time parse state and its frozen snapshot."""

import logging

import pytest

from orgweave.deferred import Deferred
from orgweave.errors import StateError
from orgweave.nodes import MetaInlines, MetaList, Para, Text
from orgweave.state import ExportSettings, ParseState


def _text(value: str) -> Deferred:
    return Deferred.pure((Text(value),))


class TestExportSettings:
    """Drawer inclusion policy."""

    def test_defaults_drop_logbook_only(self) -> None:
        settings = ExportSettings()
        assert settings.keeps_drawer("NOTES")
        assert not settings.keeps_drawer("LOGBOOK")
        assert not settings.keeps_drawer("logbook")

    def test_properties_never_kept(self) -> None:
        assert not ExportSettings(exclude_drawers=True, drawers=()).keeps_drawer("PROPERTIES")
        assert not ExportSettings(exclude_drawers=False, drawers=("PROPERTIES",)).keeps_drawer(
            "PROPERTIES"
        )

    def test_include_list(self) -> None:
        settings = ExportSettings(exclude_drawers=False, drawers=("NOTES",))
        assert settings.keeps_drawer("notes")
        assert not settings.keeps_drawer("CLOCK")


class TestParseState:
    """Writes during the scan."""

    def test_list_item_nesting(self) -> None:
        state = ParseState()
        assert not state.in_list
        with state.list_item():
            with state.list_item():
                assert state.list_depth == 2
            assert state.in_list
        assert not state.in_list

    def test_list_item_restores_on_error(self) -> None:
        state = ParseState()
        with pytest.raises(RuntimeError), state.list_item():
            raise RuntimeError("boom")
        assert state.list_depth == 0

    def test_later_footnote_wins_with_warning(self, caplog) -> None:
        state = ParseState()
        state.add_footnote("fn:a", Deferred.pure((Para((Text("first"),)),)))
        with caplog.at_level(logging.WARNING):
            state.add_footnote("fn:a", Deferred.pure((Para((Text("second"),)),)))

        assert "defined more than once" in caplog.text
        frozen = state.freeze()
        assert frozen.resolve_footnotes() == {"fn:a": (Para((Text("second"),)),)}

    def test_update_export_settings(self) -> None:
        state = ParseState()
        state.update_export_settings(sub_superscripts=False)
        assert state.export_settings.sub_superscripts is False
        assert state.export_settings.drawers == ("LOGBOOK",)

    def test_later_link_format_wins(self) -> None:
        state = ParseState()
        state.add_link_format("gh", lambda t: "old/" + t)
        state.add_link_format("gh", lambda t: "new/" + t)
        assert state.freeze().link_formatters["gh"]("x") == "new/x"


class TestFreeze:
    """The frozen snapshot and the end of writes."""

    @pytest.mark.parametrize(
        "write",
        [
            lambda s: s.add_meta("title", Deferred.pure(())),
            lambda s: s.add_link_format("gh", str),
            lambda s: s.add_footnote("1", Deferred.empty()),
            lambda s: s.update_export_settings(sub_superscripts=False),
        ],
    )
    def test_writes_after_freeze_fail(self, write) -> None:
        state = ParseState()
        state.freeze()
        assert state.frozen
        with pytest.raises(StateError, match="frozen"):
            write(state)

    def test_snapshot_is_read_only(self) -> None:
        frozen = ParseState().freeze()
        with pytest.raises(TypeError):
            frozen.footnotes["x"] = Deferred.empty()

    def test_single_meta_declaration(self) -> None:
        state = ParseState()
        state.add_meta("title", _text("Notes"))
        assert state.freeze().resolve_meta() == {"title": MetaInlines((Text("Notes"),))}

    def test_repeated_meta_collects_in_order(self) -> None:
        state = ParseState()
        for name in ("Ann", "Bob", "Cy"):
            state.add_meta("author", _text(name))

        meta = state.freeze().resolve_meta()
        assert meta["author"] == MetaList(
            (
                MetaInlines((Text("Ann"),)),
                MetaInlines((Text("Bob"),)),
                MetaInlines((Text("Cy"),)),
            )
        )
