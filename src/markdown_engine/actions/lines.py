"""Line-oriented operations: quote, bullet list, heading, numbered list."""

from __future__ import annotations

import re
from typing import Callable, List

from markdown_engine.buffer import Caret, Selection, line_bounds

from .core import Edit, make_edit

QUOTE_PREFIX = "> "
BULLET_PREFIX = "- "
MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6
NUMBERED_TEMPLATE = "1. item"
NUMBERED_PLACEHOLDER = "item"

_NUMBERED_LINE = re.compile(r"^\d+\.\s")
_NUMBERED_MARKER = re.compile(r"^\s*\d+\.\s")


def _is_blank(line: str) -> bool:
    return line.strip() == ""


def _rewrite_block(
    text: str,
    selection: Selection,
    rewrite: Callable[[List[str]], List[str]],
    *,
    label: str,
) -> Edit:
    line_start, line_end = line_bounds(text, selection.start, selection.end)
    lines = text[line_start:line_end].split("\n")
    block = "\n".join(rewrite(lines))
    new_text = text[:line_start] + block + text[line_end:]
    return make_edit(new_text, line_start, line_start + len(block), label=label)


def _strip_prefix(line: str, prefix: str) -> str:
    marker = prefix.strip()
    body = line.lstrip()
    if not body.startswith(marker):
        return line
    indent = line[: len(line) - len(body)]
    if body.startswith(prefix):
        return indent + body[len(prefix) :]
    return indent + body[len(marker) :]


def prefix_lines(
    text: str,
    selection: Selection,
    prefix: str,
    toggleable: bool = True,
    *,
    label: str = "prefix_lines",
) -> Edit:
    """Prefix every non-blank line touched by the selection.

    When ``toggleable`` and every non-blank line already carries the marker,
    the marker is removed instead (leading indentation is preserved). The
    resulting selection covers the whole rewritten block.
    """

    marker = prefix.strip()

    def rewrite(lines: List[str]) -> List[str]:
        content = [line for line in lines if not _is_blank(line)]
        if toggleable and content and all(
            line.lstrip().startswith(marker) for line in content
        ):
            return [_strip_prefix(line, prefix) for line in lines]
        return [line if _is_blank(line) else prefix + line for line in lines]

    return _rewrite_block(text, selection, rewrite, label=label)


def quote(text: str, selection: Selection) -> Edit:
    return prefix_lines(text, selection, QUOTE_PREFIX, label="quote")


def bullet_list(text: str, selection: Selection) -> Edit:
    return prefix_lines(text, selection, BULLET_PREFIX, label="bullet_list")


def clamp_heading_level(level: int) -> int:
    return max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, int(level)))


def heading(text: str, selection: Selection, level: int = 3) -> Edit:
    prefix = "#" * clamp_heading_level(level) + " "
    return prefix_lines(text, selection, prefix, toggleable=False, label="heading")


def numbered_list(text: str, selection: Selection) -> Edit:
    """Number (or un-number) the selected lines.

    A caret inserts a one-item template with ``item`` selected. Blank lines
    are skipped without consuming a number.
    """

    if isinstance(selection, Caret):
        at = selection.offset
        new_text = text[:at] + NUMBERED_TEMPLATE + text[at:]
        start = at + NUMBERED_TEMPLATE.index(NUMBERED_PLACEHOLDER)
        return make_edit(
            new_text, start, start + len(NUMBERED_PLACEHOLDER), label="numbered_list"
        )

    def rewrite(lines: List[str]) -> List[str]:
        if all(_NUMBERED_LINE.match(line.strip()) for line in lines):
            return [_NUMBERED_MARKER.sub("", line, count=1) for line in lines]
        numbered: List[str] = []
        counter = 1
        for line in lines:
            if _is_blank(line):
                numbered.append(line)
                continue
            numbered.append(f"{counter}. {line}")
            counter += 1
        return numbered

    return _rewrite_block(text, selection, rewrite, label="numbered_list")


__all__ = [
    "QUOTE_PREFIX",
    "BULLET_PREFIX",
    "MIN_HEADING_LEVEL",
    "MAX_HEADING_LEVEL",
    "prefix_lines",
    "quote",
    "bullet_list",
    "heading",
    "clamp_heading_level",
    "numbered_list",
]
