"""Built-in formatting actions and their keyboard shortcuts."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from markdown_engine.engine import handlers

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


def _action(
    action_id: str,
    handler: handlers.Handler,
    *,
    button: str,
    label: str,
    icon: str,
    description: str,
    **extra: object,
) -> ActionRef:
    return ActionRef(
        id=action_id,
        handler=handler,
        description=description,
        metadata={"button": button, "label": label, "icon": icon, **extra},
    )


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    _action(
        "markdown.bold",
        handlers.bold_action,
        button="bold",
        label="Bold",
        icon="B",
        description="Bold (Ctrl+B)",
    ),
    _action(
        "markdown.italic",
        handlers.italic_action,
        button="italic",
        label="Italic",
        icon="I",
        description="Italic (Ctrl+I)",
    ),
    _action(
        "markdown.strikethrough",
        handlers.strikethrough_action,
        button="strikethrough",
        label="Strikethrough",
        icon="S",
        description="Strikethrough (Ctrl+Shift+X)",
    ),
    _action(
        "markdown.inline_code",
        handlers.inline_code_action,
        button="code",
        label="Inline Code",
        icon="</>",
        description="Inline code",
    ),
    _action(
        "markdown.code_block",
        handlers.code_block_action,
        button="codeblock",
        label="Code Block",
        icon="{ }",
        description="Code block",
    ),
    _action(
        "markdown.link",
        handlers.link_action,
        button="link",
        label="Link",
        icon="Link",
        description="Insert link (Ctrl+K)",
    ),
    _action(
        "markdown.quote",
        handlers.quote_action,
        button="quote",
        label="Quote",
        icon='"',
        description="Quote (Ctrl+Shift+Q)",
    ),
    _action(
        "markdown.spoiler",
        handlers.spoiler_action,
        button="spoiler",
        label="Spoiler",
        icon="!",
        description="Spoiler (Ctrl+Shift+S)",
    ),
    _action(
        "markdown.bullet_list",
        handlers.bullet_list_action,
        button="bullet",
        label="Bullet List",
        icon="•",
        description="Bullet list (Ctrl+Shift+8)",
    ),
    _action(
        "markdown.numbered_list",
        handlers.numbered_list_action,
        button="numbered",
        label="Numbered List",
        icon="1.",
        description="Numbered list (Ctrl+Shift+7)",
    ),
    _action(
        "markdown.table",
        handlers.table_action,
        button="table",
        label="Table",
        icon="Tbl",
        description="Insert table",
    ),
    _action(
        "markdown.heading",
        handlers.heading_action,
        button="heading",
        label="Heading",
        icon="H",
        description="Heading (Ctrl+Shift+H)",
        shift_args={"pick_level": True},
    ),
    _action(
        "markdown.horizontal_rule",
        handlers.horizontal_rule_action,
        button="hr",
        label="Horizontal Rule",
        icon="HR",
        description="Horizontal rule",
    ),
    _action(
        "markdown.clear_formatting",
        handlers.clear_formatting_action,
        button="clear",
        label="Clear Formatting",
        icon="Tx",
        description="Clear formatting (selection)",
    ),
    ActionRef(
        id="markdown.snippet",
        handler=handlers.snippet_action,
        description="Insert a user snippet",
    ),
)


def _shortcut(
    chord: str,
    action_id: str,
    description: str,
    args: Mapping[str, object] | None = None,
) -> Binding:
    stroke = KeyStroke.parse(chord)
    return Binding(
        id=f"shortcut.{stroke.token}",
        stroke=stroke,
        action_id=action_id,
        description=description,
        args=args or {},
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _shortcut("ctrl+b", "markdown.bold", "Bold"),
    _shortcut("ctrl+i", "markdown.italic", "Italic"),
    _shortcut("ctrl+k", "markdown.link", "Insert link"),
    _shortcut("ctrl+shift+8", "markdown.bullet_list", "Bullet list"),
    _shortcut("ctrl+shift+7", "markdown.numbered_list", "Numbered list"),
    _shortcut("ctrl+shift+q", "markdown.quote", "Quote"),
    _shortcut("ctrl+shift+x", "markdown.strikethrough", "Strikethrough"),
    _shortcut("ctrl+shift+s", "markdown.spoiler", "Spoiler"),
    _shortcut("ctrl+shift+h", "markdown.heading", "Heading (configured level)"),
    _shortcut(
        "ctrl+alt+h", "markdown.heading", "Heading (pick level)", {"pick_level": True}
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and shortcuts.

    Bindings whose action was filtered out are skipped rather than failing.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
