"""Tests for ``#+BEGIN_x`` ... ``#+END_x`` regions."""

import logging

import pytest

from orgweave import (
    Attr,
    BlockQuote,
    CodeBlock,
    Div,
    LineBreak,
    Para,
    RawBlock,
    SoftBreak,
    Strong,
    Text,
    parse,
)
from orgweave.parsing.blocks.regions import unescape_commas

EXAMPLE = Attr(classes=("example",))


class TestCommaEscapes:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            (",* heading", "* heading"),
            (",#+END_SRC", "#+END_SRC"),
            (",,* kept", ",,* kept"),
            (", plain", ", plain"),
            ("no comma", "no comma"),
        ],
    )
    def test_unescape(self, line: str, expected: str) -> None:
        assert unescape_commas(line) == expected


class TestRegionTypes:
    def test_quote(self) -> None:
        doc = parse("#+BEGIN_QUOTE\nQuoted *text*.\n#+END_QUOTE")
        assert doc.children == (
            BlockQuote((Para((Text("Quoted "), Strong((Text("text"),)), Text("."))),)),
        )

    def test_example_keeps_text_literally(self) -> None:
        doc = parse("#+BEGIN_EXAMPLE\n*not bold*\n,* not a header\n#+END_EXAMPLE")
        assert doc.children == (CodeBlock(EXAMPLE, "*not bold*\n* not a header\n"),)

    def test_raw_formats(self) -> None:
        doc = parse("#+BEGIN_HTML\n<b>hi</b>\n#+END_HTML\n#+begin_latex\n\\LaTeX\n#+end_latex")
        assert doc.children == (
            RawBlock("html", "<b>hi</b>\n"),
            RawBlock("latex", "\\LaTeX\n"),
        )

    def test_comment_region_vanishes(self) -> None:
        doc = parse("#+BEGIN_COMMENT\nsecret\n#+END_COMMENT\nshown")
        assert doc.children == (Para((Text("shown"),)),)

    def test_verse_joins_lines_with_hard_breaks(self) -> None:
        doc = parse("#+BEGIN_VERSE\nRoses are red\n  violets are *blue*\n#+END_VERSE")
        assert doc.children == (
            Para(
                (
                    Text("Roses are red"),
                    LineBreak(),
                    Text("violets are "),
                    Strong((Text("blue"),)),
                )
            ),
        )

    def test_custom_region_becomes_div(self) -> None:
        doc = parse("#+BEGIN_WARNING\nCareful.\n#+END_WARNING")
        assert doc.children == (Div(Attr(classes=("warning",)), (Para((Text("Careful."),)),)),)

    def test_empty_region(self) -> None:
        assert parse("#+BEGIN_EXAMPLE\n#+END_EXAMPLE").children == (CodeBlock(EXAMPLE, ""),)

    def test_blank_lines_kept(self) -> None:
        doc = parse("#+BEGIN_EXAMPLE\na\n\n   \nb\n#+END_EXAMPLE")
        assert doc.children == (CodeBlock(EXAMPLE, "a\n\n\nb\n"),)


class TestIndentation:
    def test_indent_of_opening_line_removed(self) -> None:
        doc = parse("  #+BEGIN_EXAMPLE\n    deeper\n  level\n  #+END_EXAMPLE")
        assert doc.children == (CodeBlock(EXAMPLE, "  deeper\nlevel\n"),)

    def test_under_indented_line_cancels_region(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="orgweave"):
            doc = parse("  #+BEGIN_EXAMPLE\n x\n  #+END_EXAMPLE")
        assert not any(isinstance(block, CodeBlock) for block in doc.children)
        assert "indented less" in caplog.text


class TestUnterminated:
    def test_falls_back_to_paragraph(self) -> None:
        doc = parse("#+BEGIN_QUOTE\ntext")
        assert doc.children == (Para((Text("#+BEGIN_QUOTE"), SoftBreak(), Text("text"))),)

    def test_mismatched_end(self) -> None:
        doc = parse("#+BEGIN_QUOTE\ntext\n#+END_EXAMPLE")
        assert not any(isinstance(block, BlockQuote) for block in doc.children)

    def test_logs_at_debug(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="orgweave"):
            parse("#+BEGIN_EXAMPLE\nnever closed")
        assert "Unterminated #+BEGIN_example" in caplog.text


class TestRegionAttributes:
    def test_name_above_quote_is_consumed(self) -> None:
        doc = parse("#+NAME: q\n#+BEGIN_QUOTE\nx\n#+END_QUOTE")
        assert doc.meta == {}
        assert doc.children == (BlockQuote((Para((Text("x"),)),)),)
