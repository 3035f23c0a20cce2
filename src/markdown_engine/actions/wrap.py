"""Inline wrap markers: bold, italic, strikethrough, code, spoiler."""

from __future__ import annotations

from dataclasses import dataclass

from markdown_engine.buffer import Caret, Selection, read_range

from .core import Edit, make_edit


@dataclass(frozen=True, slots=True)
class Markers:
    prefix: str
    suffix: str
    placeholder: str = "text"

    @property
    def symmetric(self) -> bool:
        return self.prefix == self.suffix


BOLD = Markers("**", "**", "bold text")
ITALIC = Markers("*", "*", "italic text")
STRIKETHROUGH = Markers("~~", "~~", "strikethrough")
INLINE_CODE = Markers("`", "`", "code")
CODE_BLOCK = Markers("```\n", "\n```", "code block")
SPOILER = Markers(">!", "!<", "spoiler")


def wrap(
    text: str,
    selection: Selection,
    prefix: str,
    suffix: str,
    placeholder: str = "text",
    *,
    label: str = "wrap",
) -> Edit:
    """Wrap the selection in ``prefix``/``suffix`` or peel them back off.

    Only symmetric markers toggle off, and only when they sit directly
    against the selection. A caret inserts ``placeholder`` between the
    markers and selects it.
    """

    start, end = selection.start, selection.end
    if isinstance(selection, Caret):
        new_text = text[:start] + prefix + placeholder + suffix + text[start:]
        caret = start + len(prefix)
        return make_edit(new_text, caret, caret + len(placeholder), label=label)

    selected = read_range(text, start, end)
    before, after = text[:start], text[end:]
    if prefix == suffix and before.endswith(prefix) and after.startswith(suffix):
        new_text = before[: len(before) - len(prefix)] + selected + after[len(suffix) :]
        shift = len(prefix)
        return make_edit(new_text, start - shift, end - shift, label=f"un{label}")

    new_text = before + prefix + selected + suffix + after
    shift = len(prefix)
    return make_edit(new_text, start + shift, end + shift, label=label)


def apply_markers(
    text: str, selection: Selection, markers: Markers, *, label: str
) -> Edit:
    return wrap(
        text,
        selection,
        markers.prefix,
        markers.suffix,
        markers.placeholder,
        label=label,
    )


def bold(text: str, selection: Selection) -> Edit:
    return apply_markers(text, selection, BOLD, label="bold")


def italic(text: str, selection: Selection) -> Edit:
    return apply_markers(text, selection, ITALIC, label="italic")


def strikethrough(text: str, selection: Selection) -> Edit:
    return apply_markers(text, selection, STRIKETHROUGH, label="strikethrough")


def inline_code(text: str, selection: Selection) -> Edit:
    return apply_markers(text, selection, INLINE_CODE, label="inline_code")


def code_block(text: str, selection: Selection) -> Edit:
    return apply_markers(text, selection, CODE_BLOCK, label="code_block")


def spoiler(text: str, selection: Selection) -> Edit:
    return apply_markers(text, selection, SPOILER, label="spoiler")


__all__ = [
    "Markers",
    "BOLD",
    "ITALIC",
    "STRIKETHROUGH",
    "INLINE_CODE",
    "CODE_BLOCK",
    "SPOILER",
    "wrap",
    "apply_markers",
    "bold",
    "italic",
    "strikethrough",
    "inline_code",
    "code_block",
    "spoiler",
]
