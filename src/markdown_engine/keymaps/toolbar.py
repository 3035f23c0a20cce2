"""Toolbar layout: button order, separators, and snippet buttons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

from markdown_engine.config import EngineConfig

from .registry import KeymapRegistry

SEPARATOR = "|"

DEFAULT_LAYOUT: tuple[str, ...] = (
    "markdown.bold",
    "markdown.italic",
    "markdown.strikethrough",
    SEPARATOR,
    "markdown.inline_code",
    "markdown.code_block",
    SEPARATOR,
    "markdown.link",
    "markdown.quote",
    "markdown.spoiler",
    SEPARATOR,
    "markdown.bullet_list",
    "markdown.numbered_list",
    "markdown.table",
    SEPARATOR,
    "markdown.heading",
    "markdown.horizontal_rule",
    "markdown.clear_formatting",
)

SNIPPET_ACTION = "markdown.snippet"


@dataclass(frozen=True, slots=True)
class ToolbarItem:
    id: str
    kind: Literal["button", "separator"] = "button"
    action_id: str = ""
    label: str = ""
    icon: str = ""
    title: str = ""
    args: Mapping[str, object] = field(default_factory=dict)
    shift_args: Mapping[str, object] = field(default_factory=dict)

    @property
    def is_separator(self) -> bool:
        return self.kind == "separator"


def _separator(index: int) -> ToolbarItem:
    return ToolbarItem(id=f"separator-{index}", kind="separator")


def _snippet_icon(label: str) -> str:
    return label if len(label) <= 3 else label[:3]


def build_toolbar(
    registry: KeymapRegistry,
    config: EngineConfig,
    *,
    layout: tuple[str, ...] = DEFAULT_LAYOUT,
) -> list[ToolbarItem]:
    """Resolve ``layout`` into toolbar items for the given settings.

    Disabled or unregistered buttons are dropped, enabled snippets follow a
    separator, and separators never lead, trail, or sit next to each other.
    """

    items: list[ToolbarItem] = []
    separators = 0
    for entry in layout:
        if entry == SEPARATOR:
            separators += 1
            items.append(_separator(separators))
            continue
        if not registry.has_action(entry):
            continue
        action = registry.get_action(entry)
        button = action.button_id or action.id
        if config.is_disabled(button):
            continue
        items.append(
            ToolbarItem(
                id=button,
                action_id=action.id,
                label=str(action.metadata.get("label", action.id)),
                icon=str(action.metadata.get("icon", "")),
                title=action.description,
                shift_args=dict(action.metadata.get("shift_args") or {}),
            )
        )

    if config.active_snippets() and registry.has_action(SNIPPET_ACTION):
        separators += 1
        items.append(_separator(separators))
        for index, snippet in enumerate(config.snippets):
            if not snippet.usable:
                continue
            button = f"snippet-{index}"
            if config.is_disabled(button):
                continue
            items.append(
                ToolbarItem(
                    id=button,
                    action_id=SNIPPET_ACTION,
                    label=snippet.label,
                    icon=_snippet_icon(snippet.label),
                    title=f"Snippet: {snippet.label}",
                    args={"index": index},
                )
            )

    return _collapse_separators(items)


def _collapse_separators(items: list[ToolbarItem]) -> list[ToolbarItem]:
    collapsed: list[ToolbarItem] = []
    for item in items:
        if item.is_separator and (not collapsed or collapsed[-1].is_separator):
            continue
        collapsed.append(item)
    while collapsed and collapsed[-1].is_separator:
        collapsed.pop()
    return collapsed


__all__ = ["ToolbarItem", "DEFAULT_LAYOUT", "SEPARATOR", "build_toolbar"]
