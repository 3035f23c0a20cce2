"""Link insertion, split into a prompt plan and a pure completion step."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from markdown_engine.buffer import PromptFn, Selection, read_range

from .core import Edit, make_edit

URL_PATTERN = re.compile(r"^https?://.+", re.IGNORECASE)
DEFAULT_LINK_TEXT = "link text"
DEFAULT_URL = "https://"
TEXT_PROMPT = "Link text:"
URL_PROMPT = "Enter URL:"


def looks_like_url(value: str) -> bool:
    return bool(URL_PATTERN.match(value.strip()))


def format_link(label: str, url: str) -> str:
    return f"[{label}]({url})"


@dataclass(frozen=True, slots=True)
class LinkPlan:
    """What to ask the user, and how to turn the answer into an edit.

    ``asks_for_url`` is ``False`` when the selection already is a URL and
    the prompt collects display text instead.
    """

    text: str
    selection: Selection
    selected: str
    asks_for_url: bool

    @property
    def message(self) -> str:
        return URL_PROMPT if self.asks_for_url else TEXT_PROMPT

    @property
    def default(self) -> str:
        return DEFAULT_URL if self.asks_for_url else DEFAULT_LINK_TEXT

    def complete(self, answer: Optional[str]) -> Edit:
        start, end = self.selection.start, self.selection.end
        if answer is None:
            return Edit.unchanged(self.text, self.selection, "link")

        if not self.asks_for_url:
            markdown = format_link(answer, self.selected.strip())
            new_text = self.text[:start] + markdown + self.text[end:]
            return make_edit(new_text, start, start + len(markdown), label="link")

        url = answer.strip()
        if not url:
            return Edit.unchanged(self.text, self.selection, "link")
        label = self.selected or DEFAULT_LINK_TEXT
        markdown = format_link(label, url)
        new_text = self.text[:start] + markdown + self.text[end:]
        if not self.selected:
            return make_edit(new_text, start + 1, start + 1 + len(label), label="link")
        return make_edit(new_text, start, start + len(markdown), label="link")


def plan_link(text: str, selection: Selection) -> LinkPlan:
    selected = read_range(text, selection.start, selection.end)
    return LinkPlan(
        text=text,
        selection=selection,
        selected=selected,
        asks_for_url=not looks_like_url(selected),
    )


def insert_link(
    text: str,
    selection: Selection,
    prompt: PromptFn,
    on_edit: Callable[[Edit], None],
) -> None:
    """Prompt for the missing half of a link and hand the edit to ``on_edit``.

    Nothing is delivered when the prompt is cancelled or the URL is blank.
    """

    plan = plan_link(text, selection)

    def _on_result(answer: Optional[str]) -> None:
        edit = plan.complete(answer)
        if edit.changed:
            on_edit(edit)

    prompt(plan.message, plan.default, _on_result)


__all__ = [
    "URL_PATTERN",
    "DEFAULT_LINK_TEXT",
    "DEFAULT_URL",
    "LinkPlan",
    "looks_like_url",
    "format_link",
    "plan_link",
    "insert_link",
]
