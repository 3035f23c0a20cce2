"""Clear-formatting pipeline.

``CLEAR_PASSES`` runs in order over the selected text only. The order is a
contract: fences are peeled before inline code so their backticks are not
read as code spans, and bold runs before italic so ``**x**`` is not taken
for nested italics.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Pattern

from markdown_engine.buffer import Caret, Selection, read_range

from .core import Edit, replace_selection


@dataclass(frozen=True, slots=True)
class StripPass:
    name: str
    pattern: Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _pass(name: str, pattern: str, replacement: str, flags: int = 0) -> StripPass:
    return StripPass(name, re.compile(pattern, flags), replacement)


CLEAR_PASSES: tuple[StripPass, ...] = (
    _pass("code_fence", r"```[^\n]*\n(.*?)\n```", r"\1", re.DOTALL),
    _pass("inline_code", r"`([^`]+)`", r"\1"),
    _pass("bold", r"\*\*([^*]+)\*\*", r"\1"),
    _pass("italic", r"\*([^*\n]+)\*", r"\1"),
    _pass("strikethrough", r"~~([^~]+)~~", r"\1"),
    _pass("spoiler", r">!(.*?)!<", r"\1", re.DOTALL),
    _pass("link", r"\[([^\]]+)\]\(([^)]+)\)", r"\1"),
    _pass("heading", r"^([ \t]*)#{1,6}[ \t]+", r"\1", re.MULTILINE),
    _pass("quote", r"^([ \t]*)>[ \t]+", r"\1", re.MULTILINE),
    _pass("bullet", r"^([ \t]*)[-*+][ \t]+", r"\1", re.MULTILINE),
    _pass("numbered", r"^([ \t]*)\d+\.[ \t]+", r"\1", re.MULTILINE),
)


def strip_formatting(fragment: str, passes: Iterable[StripPass] = CLEAR_PASSES) -> str:
    for strip in passes:
        fragment = strip.apply(fragment)
    return fragment


def clear_formatting(text: str, selection: Selection) -> Edit:
    if isinstance(selection, Caret):
        return Edit.unchanged(text, selection, "clear_formatting")
    selected = read_range(text, selection.start, selection.end)
    return replace_selection(
        text, selection, strip_formatting(selected), label="clear_formatting"
    )


__all__ = ["StripPass", "CLEAR_PASSES", "strip_formatting", "clear_formatting"]
