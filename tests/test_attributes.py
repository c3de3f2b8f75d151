"""Tests for block attribute lines and captioned figures."""

from orgweave import Attr, Image, Link, Para, Table, Text, parse
from orgweave.parsing.blocks.attributes import parse_key_values
from orgweave.parsing.blocks.figure import figure_title


class TestKeyValues:
    def test_pairs(self) -> None:
        assert parse_key_values(":width 80% :alt A plot") == (("width", "80%"), ("alt", "A plot"))

    def test_key_without_value(self) -> None:
        assert parse_key_values(":hidden :id x") == (("hidden", ""), ("id", "x"))

    def test_text_before_first_key_ignored(self) -> None:
        assert parse_key_values("junk :a 1") == (("a", "1"),)

    def test_colon_inside_value_is_not_a_key(self) -> None:
        assert parse_key_values(":href http://x.org/a:b") == (("href", "http://x.org/a:b"),)

    def test_empty(self) -> None:
        assert parse_key_values("") == ()


class TestAttributeLines:
    def test_first_name_wins(self) -> None:
        doc = parse("#+NAME: first\n#+NAME: second\n| x |")
        assert doc.children[0].attr.identifier == "first"

    def test_keys_are_case_insensitive(self) -> None:
        doc = parse("#+name: t\n#+caption: Lower\n#+attr_html: :class wide\n| x |")
        table = doc.children[0]
        assert isinstance(table, Table)
        assert table.attr == Attr("t", (), (("class", "wide"),))
        assert table.caption == (Text("Lower"),)

    def test_attr_html_lines_joined(self) -> None:
        doc = parse("#+ATTR_HTML: :a 1\n#+ATTR_HTML: :b 2\n| x |")
        assert doc.children[0].attr.keyvalues == (("a", "1"), ("b", "2"))

    def test_other_keyword_stops_collection(self) -> None:
        doc = parse("#+NAME: t\n#+TITLE: Doc\n| x |")
        table = doc.children[0]
        assert table.attr.identifier == ""
        assert doc.meta["name"].children == (Text("t"),)
        assert doc.meta["title"].children == (Text("Doc"),)


class TestFigures:
    def test_figure_title(self) -> None:
        assert figure_title("plot") == "fig:plot"
        assert figure_title("fig:plot") == "fig:plot"
        assert figure_title(None) == "fig:"

    def test_captioned_image(self) -> None:
        doc = parse(
            "#+CAPTION: Throughput per worker\n"
            "#+NAME: throughput\n"
            "#+ATTR_HTML: :width 50%\n"
            "[[file:plots/throughput.png]]"
        )
        assert doc.children == (
            Para(
                (
                    Image(
                        "plots/throughput.png",
                        "fig:throughput",
                        (Text("Throughput per worker"),),
                        Attr(keyvalues=(("width", "50%"),)),
                    ),
                ),
            ),
        )

    def test_unnamed_figure(self) -> None:
        doc = parse("#+CAPTION: Cat\n[[./cat.jpg]]")
        (para,) = doc.children
        (image,) = para.children
        assert image.url == "./cat.jpg"
        assert image.title == "fig:"

    def test_image_without_caption_is_inline(self) -> None:
        doc = parse("[[./cat.jpg]]")
        assert doc.children == (Para((Image("./cat.jpg"),)),)

    def test_caption_over_non_image_link(self) -> None:
        doc = parse("#+CAPTION: Site\n[[https://orgmode.org]]")
        assert doc.meta["caption"].children == (Text("Site"),)
        assert doc.children == (
            Para((Link("https://orgmode.org", (Text("https://orgmode.org"),)),)),
        )
