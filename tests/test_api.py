"""Tests for the top-level orgweave API."""

import pytest

import orgweave
from orgweave import (
    BulletList,
    CodeBlock,
    Document,
    Header,
    MetaInlines,
    Note,
    OrderedList,
    Para,
    Table,
    Text,
    parse,
)

SAMPLE = """\
#+TITLE: Field notes
#+AUTHOR: Ann

* Setup :env:
:PROPERTIES:
:CUSTOM_ID: setup
:END:

Install the tools[fn:1] first.

#+BEGIN_SRC sh
make install
#+END_SRC

* Results
| run | time |
|-----+------|
| a   | 1.2  |

1. first
2. second
   - detail

[fn:1] See the README.
"""


class TestPublicSurface:
    def test_version(self) -> None:
        assert isinstance(orgweave.__version__, str)

    def test_all_names_exported(self) -> None:
        for name in orgweave.__all__:
            assert hasattr(orgweave, name), name


class TestParseDocument:
    def test_structure(self) -> None:
        doc = parse(SAMPLE)
        assert isinstance(doc, Document)
        assert [type(block) for block in doc.children] == [
            Header,
            Para,
            CodeBlock,
            Header,
            Table,
            OrderedList,
        ]

    def test_meta(self) -> None:
        doc = parse(SAMPLE)
        assert doc.meta == {
            "title": MetaInlines((Text("Field notes"),)),
            "author": MetaInlines((Text("Ann"),)),
        }

    def test_header_identifiers(self) -> None:
        doc = parse(SAMPLE)
        headers = [block for block in doc.children if isinstance(block, Header)]
        assert [h.attr.identifier for h in headers] == ["setup", "results"]

    def test_footnote_resolved_inline(self) -> None:
        doc = parse(SAMPLE)
        para = doc.children[1]
        note = para.children[1]
        assert isinstance(note, Note)
        assert note.children == (Para((Text("See the README."),)),)
        assert doc.footnotes["fn:1"] == note.children

    def test_nested_list(self) -> None:
        doc = parse(SAMPLE)
        ordered = doc.children[-1]
        assert ordered.start == 1
        assert isinstance(ordered.items[1].children[-1], BulletList)

    def test_source_file_only_affects_logging(self) -> None:
        assert parse(SAMPLE, source_file="notes.org") == parse(SAMPLE)

    def test_documents_are_immutable(self) -> None:
        doc = parse("x")
        with pytest.raises(AttributeError):
            doc.children = ()  # type: ignore[misc]
