"""Action handlers binding the pure transformations to a host surface."""

from __future__ import annotations

from typing import Callable, Optional

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
from markdown_engine.buffer import Selection, ensure_selection
from markdown_engine.config import coerce_heading_level
from markdown_engine.runtime import telemetry

from .context import ActionRequest, ActionResult, EditorContext

Operation = Callable[[str, Selection], Edit]
Handler = Callable[[EditorContext, ActionRequest], ActionResult]

HEADING_PROMPT = "Heading level (1-6):"


def read_surface(context: EditorContext) -> tuple[str, Selection]:
    text, start, end = context.surface.get_buffer_and_selection()
    return text, ensure_selection(text, start, end)


def commit_edit(context: EditorContext, edit: Edit) -> ActionResult:
    """Push ``edit`` to the host, or report a no-op without touching it."""

    if not edit.changed:
        context.bus.emit("edit.noop", {"label": edit.label})
        return ActionResult(consumed=True, status="noop", message=edit.label, edit=edit)
    context.surface.commit(edit.text, edit.start, edit.end)
    context.bus.emit(
        "edit.commit",
        {"label": edit.label, "selection": (edit.start, edit.end)},
    )
    return ActionResult(consumed=True, status="edited", message=edit.label, edit=edit)


def _apply(context: EditorContext, operation: Operation) -> ActionResult:
    text, selection = read_surface(context)
    return commit_edit(context, operation(text, selection))


def _ask_then_commit(
    context: EditorContext,
    *,
    message: str,
    default: str,
    snapshot: str,
    complete: Callable[[str], Edit],
) -> ActionResult:
    """Open a prompt and commit ``complete(answer)`` once it resolves.

    If the live text no longer matches ``snapshot`` when the answer arrives,
    the edit is dropped instead of being applied at shifted offsets.
    """

    outcome: list[ActionResult] = []

    def _on_result(answer: Optional[str]) -> None:
        context.bus.emit(
            "prompt.close", {"message": message, "cancelled": answer is None}
        )
        if answer is None:
            outcome.append(ActionResult(consumed=True, status="cancelled"))
            return
        edit = complete(answer)
        if not edit.changed:
            outcome.append(commit_edit(context, edit))
            return
        live_text, _, _ = context.surface.get_buffer_and_selection()
        if live_text != snapshot:
            telemetry.record_event(
                "prompt.stale",
                level="warning",
                data={"label": edit.label},
                logger_name="markdown_engine.prompt",
            )
            context.bus.emit("edit.stale", {"label": edit.label})
            outcome.append(
                ActionResult(consumed=True, status="stale", message=edit.label)
            )
            return
        outcome.append(commit_edit(context, edit))

    if context.prompts.pending:
        return ActionResult(consumed=False, status="prompt_pending")
    context.bus.emit("prompt.open", {"message": message, "default": default})
    context.prompts.ask(message, default, _on_result)
    if outcome:
        return outcome[0]
    return ActionResult(consumed=True, status="prompt_open", message=message)


def bold_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    return _apply(context, bold)


def italic_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    return _apply(context, italic)


def strikethrough_action(
    context: EditorContext, request: ActionRequest
) -> ActionResult:
    del request
    return _apply(context, strikethrough)


def inline_code_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    return _apply(context, inline_code)


def code_block_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    return _apply(context, code_block)


def spoiler_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    return _apply(context, spoiler)


def quote_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    return _apply(context, quote)


def bullet_list_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    return _apply(context, bullet_list)


def numbered_list_action(
    context: EditorContext, request: ActionRequest
) -> ActionResult:
    del request
    return _apply(context, numbered_list)


def horizontal_rule_action(
    context: EditorContext, request: ActionRequest
) -> ActionResult:
    del request
    return _apply(context, insert_horizontal_rule)


def clear_formatting_action(
    context: EditorContext, request: ActionRequest
) -> ActionResult:
    del request
    return _apply(context, clear_formatting)


def table_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    cols = request.args.get("cols", 2)
    rows = request.args.get("rows", 2)
    return _apply(
        context, lambda text, selection: insert_table(text, selection, cols, rows)
    )


def heading_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    """Apply a heading at an explicit, prompted, or configured level."""

    default_level = context.config.heading_level
    if "level" in request.args:
        level = coerce_heading_level(request.args["level"], default_level)
        return _apply(context, lambda text, selection: heading(text, selection, level))

    if not request.args.get("pick_level"):
        return _apply(
            context, lambda text, selection: heading(text, selection, default_level)
        )

    text, selection = read_surface(context)
    return _ask_then_commit(
        context,
        message=HEADING_PROMPT,
        default=str(default_level),
        snapshot=text,
        complete=lambda answer: heading(
            text, selection, coerce_heading_level(answer, default_level)
        ),
    )


def link_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    del request
    text, selection = read_surface(context)
    plan = plan_link(text, selection)
    return _ask_then_commit(
        context,
        message=plan.message,
        default=plan.default,
        snapshot=text,
        complete=plan.complete,
    )


def snippet_action(context: EditorContext, request: ActionRequest) -> ActionResult:
    template = request.args.get("template")
    if template is None and "index" in request.args:
        try:
            index = int(request.args["index"])
            snippet = context.config.snippets[index]
        except (IndexError, TypeError, ValueError):
            return ActionResult(consumed=False, status="unknown_snippet")
        if index < 0 or not snippet.usable:
            return ActionResult(consumed=False, status="unknown_snippet")
        template = snippet.template
    if template is None:
        return ActionResult(consumed=False, status="unknown_snippet")
    template = str(template)
    return _apply(
        context, lambda text, selection: insert_snippet(text, selection, template)
    )


__all__ = [
    "Handler",
    "HEADING_PROMPT",
    "read_surface",
    "commit_edit",
    "bold_action",
    "italic_action",
    "strikethrough_action",
    "inline_code_action",
    "code_block_action",
    "spoiler_action",
    "quote_action",
    "bullet_list_action",
    "numbered_list_action",
    "horizontal_rule_action",
    "clear_formatting_action",
    "table_action",
    "heading_action",
    "link_action",
    "snippet_action",
]
