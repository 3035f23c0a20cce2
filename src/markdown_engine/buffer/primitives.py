"""Range reads, splices, clamping, and line-bound arithmetic."""

from __future__ import annotations

from .state import Selection, selection_from_offsets


def read_range(text: str, start: int, end: int) -> str:
    return text[start:end]


def replace_range(text: str, start: int, end: int, replacement: str) -> str:
    """Return ``text`` with ``[start, end)`` swapped for ``replacement``."""

    return text[:start] + replacement + text[end:]


def clamp_offset(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def clamp_selection(text: str, start: int, end: int) -> Selection:
    """Clamp a post-mutation selection into ``[0, len(text)]``."""

    return selection_from_offsets(clamp_offset(text, start), clamp_offset(text, end))


def line_bounds(text: str, start: int, end: int) -> tuple[int, int]:
    """Return the span of every full line touching ``[start, end)``.

    The start is one past the last newline before ``start``; the end is the
    first newline at or after ``end``, or the end of the buffer when the last
    line has no trailing newline.
    """

    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    if line_end == -1:
        line_end = len(text)
    return line_start, line_end


__all__ = [
    "read_range",
    "replace_range",
    "clamp_offset",
    "clamp_selection",
    "line_bounds",
]
