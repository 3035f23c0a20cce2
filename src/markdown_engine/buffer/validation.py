"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import Selection, selection_from_offsets
from .sync import BufferValidationError


def ensure_selection(text: str, start: int, end: int) -> Selection:
    length = len(text)
    for offset in (start, end):
        if offset < 0 or offset > length:
            raise BufferValidationError(
                "Selection offset out of range",
                start=start,
                end=end,
                length=length,
            )
    return selection_from_offsets(start, end)
