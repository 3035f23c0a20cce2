from __future__ import annotations

from markdown_engine.actions import (
    bold,
    code_block,
    inline_code,
    italic,
    spoiler,
    strikethrough,
    wrap,
)
from markdown_engine.buffer import Caret, Range


def test_bold_wraps_selection_and_keeps_it_selected() -> None:
    edit = bold("hello world", Range(0, 5))

    assert edit.text == "**hello** world"
    assert edit.selection == Range(2, 7)
    assert edit.selected_text == "hello"
    assert edit.label == "bold"


def test_bold_toggles_off_when_markers_surround_selection() -> None:
    edit = bold("**hello** world", Range(2, 7))

    assert edit.text == "hello world"
    assert edit.selection == Range(0, 5)
    assert edit.label == "unbold"


def test_caret_inserts_placeholder_between_markers() -> None:
    edit = bold("ab", Caret(1))

    assert edit.text == "a**bold text**b"
    assert edit.selection == Range(3, 12)
    assert edit.selected_text == "bold text"


def test_italic_and_strikethrough_wrap() -> None:
    assert italic("x", Range(0, 1)).text == "*x*"
    assert strikethrough("gone", Range(0, 4)).text == "~~gone~~"
    assert inline_code("x = 1", Range(0, 5)).text == "`x = 1`"


def test_code_block_on_caret_inserts_fenced_placeholder() -> None:
    edit = code_block("", Caret(0))

    assert edit.text == "```\ncode block\n```"
    assert edit.selected_text == "code block"


def test_spoiler_markers_are_not_toggled_off() -> None:
    edit = spoiler(">!a!<", Range(2, 3))

    assert edit.text == ">!>!a!<!<"
    assert edit.selected_text == "a"


def test_wrap_with_custom_markers() -> None:
    edit = wrap("key", Range(0, 3), "<kbd>", "</kbd>", label="kbd")

    assert edit.text == "<kbd>key</kbd>"
    assert edit.selection == Range(5, 8)
    assert edit.label == "kbd"


def test_wrap_only_touches_markers_adjacent_to_selection() -> None:
    edit = bold("**a** b", Range(6, 7))

    assert edit.text == "**a** **b**"
