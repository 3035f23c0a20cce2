"""Caret/range selection types shared by every transformation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Caret:
    """Insertion point with no selected text."""

    offset: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("caret offset cannot be negative")

    @property
    def start(self) -> int:
        return self.offset

    @property
    def end(self) -> int:
        return self.offset

    @property
    def is_empty(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Range:
    """Non-empty ``[start, end)`` span of the buffer."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("range start cannot be negative")
        if self.end <= self.start:
            raise ValueError("range end must be greater than start")

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def length(self) -> int:
        return self.end - self.start


Selection = Union[Caret, Range]


def selection_from_offsets(start: int, end: int) -> Selection:
    """Build the tagged selection for a raw offset pair.

    Backwards pairs (anchor after cursor) are normalised.
    """

    if start > end:
        start, end = end, start
    if start == end:
        return Caret(start)
    return Range(start, end)


__all__ = ["Caret", "Range", "Selection", "selection_from_offsets"]
