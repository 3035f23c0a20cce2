from __future__ import annotations

from markdown_engine.actions import bullet_list, heading, numbered_list, quote
from markdown_engine.buffer import Caret, Range


def test_quote_prefixes_each_line_and_selects_block() -> None:
    edit = quote("a\nb", Range(0, 3))

    assert edit.text == "> a\n> b"
    assert edit.selection == Range(0, 7)


def test_quote_toggles_off_when_all_lines_quoted() -> None:
    edit = quote("> a\n> b", Range(0, 7))

    assert edit.text == "a\nb"


def test_quote_skips_blank_lines() -> None:
    edit = quote("a\n\nb", Range(0, 4))

    assert edit.text == "> a\n\n> b"
    assert quote(edit.text, edit.selection).text == "a\n\nb"


def test_caret_expands_to_its_whole_line() -> None:
    edit = quote("one\ntwo\nthree", Caret(5))

    assert edit.text == "one\n> two\nthree"
    assert edit.selection == Range(4, 9)


def test_bullet_list_round_trip() -> None:
    first = bullet_list("a\nb", Range(0, 3))
    second = bullet_list(first.text, first.selection)

    assert first.text == "- a\n- b"
    assert second.text == "a\nb"


def test_bullet_list_prefixes_mixed_block() -> None:
    assert bullet_list("- a\nb", Range(0, 5)).text == "- - a\n- b"


def test_heading_uses_level_and_does_not_toggle() -> None:
    assert heading("title", Caret(0), 2).text == "## title"
    assert heading("## x", Caret(0), 2).text == "## ## x"


def test_heading_level_is_clamped() -> None:
    assert heading("t", Caret(0), 9).text == "###### t"
    assert heading("t", Caret(0), 0).text == "# t"


def test_numbered_list_round_trip() -> None:
    first = numbered_list("a\nb\nc", Range(0, 5))
    second = numbered_list(first.text, first.selection)

    assert first.text == "1. a\n2. b\n3. c"
    assert first.selection == Range(0, len(first.text))
    assert second.text == "a\nb\nc"


def test_numbered_list_skips_blank_lines_without_consuming_numbers() -> None:
    assert numbered_list("a\n\nb", Range(0, 4)).text == "1. a\n\n2. b"


def test_numbered_list_caret_inserts_template() -> None:
    edit = numbered_list("", Caret(0))

    assert edit.text == "1. item"
    assert edit.selection == Range(3, 7)
