"""Structural insertions: tables, horizontal rules, user snippets."""

from __future__ import annotations

from typing import List

from markdown_engine.buffer import Selection, read_range

from .core import Edit, replace_selection

DEFAULT_TABLE_COLS = 2
DEFAULT_TABLE_ROWS = 2
TABLE_COL_LIMITS = (2, 6)
TABLE_ROW_LIMITS = (2, 10)
HORIZONTAL_RULE = "---"
SELECTION_TOKEN = "{selection}"


def _clamp_dimension(value: object, default: int, limits: tuple[int, int]) -> int:
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        number = default
    low, high = limits
    return max(low, min(high, number))


def _table_row(cells: List[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def build_table(cols: int = DEFAULT_TABLE_COLS, rows: int = DEFAULT_TABLE_ROWS) -> str:
    cols = _clamp_dimension(cols, DEFAULT_TABLE_COLS, TABLE_COL_LIMITS)
    rows = _clamp_dimension(rows, DEFAULT_TABLE_ROWS, TABLE_ROW_LIMITS)
    lines = [
        _table_row([f"Header {c + 1}" for c in range(cols)]),
        _table_row(["---"] * cols),
    ]
    for r in range(rows):
        lines.append(_table_row([f"Cell {r + 1}.{c + 1}" for c in range(cols)]))
    return "\n".join(lines)


def insert_table(
    text: str,
    selection: Selection,
    cols: int = DEFAULT_TABLE_COLS,
    rows: int = DEFAULT_TABLE_ROWS,
) -> Edit:
    return replace_selection(text, selection, build_table(cols, rows), label="table")


def insert_horizontal_rule(text: str, selection: Selection) -> Edit:
    """Insert ``---`` so it never touches neighbouring non-blank text."""

    before, after = text[: selection.start], text[selection.end :]
    insertion = HORIZONTAL_RULE
    if before and not before.endswith("\n\n"):
        insertion = ("\n" if before.endswith("\n") else "\n\n") + insertion
    if not after:
        insertion += "\n"
    elif not after.startswith("\n\n"):
        insertion += "\n" if after.startswith("\n") else "\n\n"
    return replace_selection(
        text, selection, insertion, label="horizontal_rule", select_replacement=False
    )


def render_snippet(template: str, selected: str) -> str:
    return template.replace(SELECTION_TOKEN, selected)


def insert_snippet(text: str, selection: Selection, template: str) -> Edit:
    if not template:
        return Edit.unchanged(text, selection, "snippet")
    selected = read_range(text, selection.start, selection.end)
    return replace_selection(
        text, selection, render_snippet(template, selected), label="snippet"
    )


__all__ = [
    "DEFAULT_TABLE_COLS",
    "DEFAULT_TABLE_ROWS",
    "HORIZONTAL_RULE",
    "SELECTION_TOKEN",
    "build_table",
    "insert_table",
    "insert_horizontal_rule",
    "render_snippet",
    "insert_snippet",
]
