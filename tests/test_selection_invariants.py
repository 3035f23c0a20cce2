from __future__ import annotations

from typing import Callable

import pytest

from markdown_engine.actions import (
    Edit,
    bold,
    bullet_list,
    clear_formatting,
    code_block,
    heading,
    inline_code,
    insert_horizontal_rule,
    insert_snippet,
    insert_table,
    italic,
    numbered_list,
    plan_link,
    quote,
    spoiler,
    strikethrough,
)
from markdown_engine.buffer import Range, Selection, selection_from_offsets

Operation = Callable[[str, Selection], Edit]

OPERATIONS: dict[str, Operation] = {
    "bold": bold,
    "italic": italic,
    "strikethrough": strikethrough,
    "inline_code": inline_code,
    "code_block": code_block,
    "spoiler": spoiler,
    "quote": quote,
    "bullet_list": bullet_list,
    "numbered_list": numbered_list,
    "heading": lambda text, selection: heading(text, selection, 2),
    "table": insert_table,
    "horizontal_rule": insert_horizontal_rule,
    "clear_formatting": clear_formatting,
    "snippet": lambda text, selection: insert_snippet(text, selection, "<{selection}>"),
    "link_url": lambda text, selection: plan_link(text, selection).complete(
        "https://e.x"
    ),
    "link_text": lambda text, selection: plan_link(text, selection).complete("T"),
}

BUFFERS = [
    "",
    "\n",
    "\n\n",
    "abc",
    "a\nb",
    "line\n",
    "  - item\n  - two",
    "1. a\n\n2. b",
    "# h\n\n> q",
    "**b** `c` ~~s~~",
    "see https://e.x now",
]


def make_selections(text: str) -> list[Selection]:
    size = len(text)
    return [
        selection_from_offsets(start, end)
        for start in range(size + 1)
        for end in range(start, size + 1)
    ]


@pytest.mark.parametrize("name", sorted(OPERATIONS))
@pytest.mark.parametrize("text", BUFFERS)
def test_every_operation_keeps_selection_in_bounds(name: str, text: str) -> None:
    operation = OPERATIONS[name]
    for selection in make_selections(text):
        edit = operation(text, selection)
        assert 0 <= edit.start <= edit.end <= len(edit.text), (name, text, selection)


@pytest.mark.parametrize("operation", [bold, italic, strikethrough, inline_code])
@pytest.mark.parametrize(
    ("text", "selection"),
    [
        ("hello world", Range(0, 5)),
        ("hello world", Range(6, 11)),
        ("hello world", Range(2, 8)),
        ("one\ntwo", Range(0, 7)),
    ],
)
def test_symmetric_markers_round_trip(
    operation: Operation, text: str, selection: Range
) -> None:
    wrapped = operation(text, selection)
    unwrapped = operation(wrapped.text, wrapped.selection)

    assert wrapped.text != text
    assert unwrapped.text == text
    assert unwrapped.selection == selection
