from __future__ import annotations

from markdown_engine.actions import CLEAR_PASSES, clear_formatting, strip_formatting
from markdown_engine.buffer import Caret, Range


def clear_all(text: str) -> str:
    return clear_formatting(text, Range(0, len(text))).text


def test_clears_inline_markup() -> None:
    assert clear_all("**bold** and `code` and [x](http://e)") == "bold and code and x"


def test_clears_line_markers() -> None:
    assert clear_all("# T\n> q\n- a\n+ b\n2. c") == "T\nq\na\nb\nc"


def test_clears_fences_spoilers_and_strikethrough() -> None:
    assert clear_all("```py\nprint(1)\n```") == "print(1)"
    assert clear_all(">!secret!<") == "secret"
    assert clear_all("~~gone~~ *it*") == "gone it"


def test_only_selected_text_is_cleared() -> None:
    edit = clear_formatting("**a** **b**", Range(0, 5))

    assert edit.text == "a **b**"
    assert edit.selection == Range(0, 1)


def test_caret_is_a_no_op() -> None:
    edit = clear_formatting("**a**", Caret(2))

    assert edit.changed is False
    assert edit.text == "**a**"


def test_pass_order_is_stable() -> None:
    assert [strip.name for strip in CLEAR_PASSES] == [
        "code_fence",
        "inline_code",
        "bold",
        "italic",
        "strikethrough",
        "spoiler",
        "link",
        "heading",
        "quote",
        "bullet",
        "numbered",
    ]


def test_strip_formatting_keeps_indentation() -> None:
    assert strip_formatting("  - item") == "  item"
