"""Tests for source blocks, header arguments and results."""

import pytest

from orgweave import NULL_ATTR, Attr, CodeBlock, Div, Plain, Span, Text, parse
from orgweave.parsing.blocks.source import (
    SourceHeader,
    exports_code,
    exports_results,
    parse_source_header,
    translate_language,
)

RESULT = CodeBlock(Attr(classes=("example",)), "hi\n")


class TestSourceHeader:
    """Parsing the text after ``#+BEGIN_SRC``."""

    def test_empty(self) -> None:
        assert parse_source_header("") == SourceHeader()

    def test_language_only(self) -> None:
        header = parse_source_header(" emacs-lisp")
        assert header.language == "emacs-lisp"
        assert header.classes() == ("commonlisp",)
        assert header.keyvalues() == ()

    def test_switches_are_recognized(self) -> None:
        header = parse_source_header(' python -n -r -l "(ref:%s)" :exports code')
        assert header.switches == ("-n", "-r", '-l "(ref:%s)"')
        assert header.arguments == (("exports", "code"),)

    def test_argument_values_run_to_next_key(self) -> None:
        header = parse_source_header(" R :var x=1 y=2 :results output graphics")
        assert header.arguments == (("var", "x=1 y=2"), ("results", "output graphics"))

    def test_flag_argument(self) -> None:
        assert parse_source_header(" sh :eval").arguments == (("eval", "yes"),)

    def test_stray_tokens_skipped(self) -> None:
        header = parse_source_header(" python -n stray :exports both")
        assert header.arguments == (("exports", "both"),)

    def test_arguments_without_language(self) -> None:
        header = parse_source_header(" :exports none")
        assert header.language is None
        assert header.classes() == ("rundoc-block",)
        assert header.keyvalues() == (("rundoc-language", ""), ("rundoc-exports", "none"))

    @pytest.mark.parametrize(
        ("language", "expected"),
        [("sh", "bash"), ("C", "c"), ("js", "javascript"), ("haskell", "haskell")],
    )
    def test_translate_language(self, language: str, expected: str) -> None:
        assert translate_language(language) == expected


class TestExports:
    @pytest.mark.parametrize(
        ("value", "code", "results"),
        [
            (None, True, False),
            ("code", True, False),
            ("both", True, True),
            ("results", False, True),
            ("none", False, False),
        ],
    )
    def test_policy(self, value: str | None, code: bool, results: bool) -> None:
        attr = Attr(keyvalues=() if value is None else (("rundoc-exports", value),))
        assert exports_code(attr) is code
        assert exports_results(attr) is results

    def test_first_exports_argument_wins(self) -> None:
        attr = Attr(keyvalues=(("rundoc-exports", "none"), ("rundoc-exports", "both")))
        assert attr.get("rundoc-exports") == "none"
        assert attr.get("rundoc-eval") is None
        assert exports_code(attr) is False
        assert exports_results(attr) is False


class TestSourceBlocks:
    def test_plain_block(self) -> None:
        doc = parse("#+BEGIN_SRC python\nprint(1)\n#+END_SRC")
        assert doc.children == (CodeBlock(Attr("", ("python",), ()), "print(1)\n"),)

    def test_code_is_literal(self) -> None:
        doc = parse("#+begin_src org\n,* Heading\n,#+TITLE: x\n*bold*\n#+end_src")
        assert doc.children[0].text == "* Heading\n#+TITLE: x\n*bold*\n"
        assert doc.meta == {}

    def test_no_language(self) -> None:
        doc = parse("#+BEGIN_SRC\nraw\n#+END_SRC")
        assert doc.children == (CodeBlock(NULL_ATTR, "raw\n"),)

    def test_name_and_arguments(self) -> None:
        doc = parse(
            "#+NAME: hello\n"
            "#+BEGIN_SRC sh :exports both :results output\n"
            "echo hi\n"
            "#+END_SRC\n"
            "\n"
            "#+RESULTS: hello\n"
            ": hi"
        )
        assert doc.children == (
            CodeBlock(
                Attr(
                    "hello",
                    ("bash", "rundoc-block"),
                    (
                        ("rundoc-language", "sh"),
                        ("rundoc-exports", "both"),
                        ("rundoc-results", "output"),
                    ),
                ),
                "echo hi\n",
            ),
            RESULT,
        )

    def test_results_only(self) -> None:
        doc = parse("#+BEGIN_SRC sh :exports results\necho hi\n#+END_SRC\n#+RESULTS:\n: hi")
        assert doc.children == (RESULT,)

    def test_exports_none(self) -> None:
        doc = parse("#+BEGIN_SRC sh :exports none\necho hi\n#+END_SRC\n#+RESULTS:\n: hi")
        assert doc.children == ()

    def test_results_hidden_by_default(self) -> None:
        doc = parse("#+BEGIN_SRC sh\necho hi\n#+END_SRC\n\n#+RESULTS:\n: hi\n\nAfter")
        assert len(doc.children) == 2
        assert doc.children[0].text == "echo hi\n"
        assert doc.children[1].children == (Text("After"),)

    def test_results_marker_directly_before_blank(self) -> None:
        doc = parse("#+BEGIN_SRC sh :exports both\necho hi\n#+END_SRC\n#+RESULTS:\n\nAfter")
        assert len(doc.children) == 2
        assert doc.children[1].children == (Text("After"),)

    def test_caption_wraps_code_in_labelled_div(self) -> None:
        doc = parse("#+CAPTION: Listing one\n#+BEGIN_SRC python\nx\n#+END_SRC")
        code = CodeBlock(Attr("", ("python",), ()), "x\n")
        label = Plain((Span(Attr(classes=("label",)), (Text("Listing one"),)),))
        assert doc.children == (Div(NULL_ATTR, (label, code)),)

    def test_unterminated_block_is_text(self) -> None:
        doc = parse("#+BEGIN_SRC python\nprint(1)")
        assert not any(isinstance(block, CodeBlock) for block in doc.children)
