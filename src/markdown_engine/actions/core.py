"""Edit result type and the replace-selection helper shared by operations."""

from __future__ import annotations

from dataclasses import dataclass

from markdown_engine.buffer import Selection, clamp_selection, replace_range


@dataclass(frozen=True, slots=True)
class Edit:
    """Outcome of a transformation: the new text and where the selection lands."""

    text: str
    selection: Selection
    label: str
    changed: bool = True

    @classmethod
    def unchanged(cls, text: str, selection: Selection, label: str) -> "Edit":
        return cls(text=text, selection=selection, label=label, changed=False)

    @property
    def start(self) -> int:
        return self.selection.start

    @property
    def end(self) -> int:
        return self.selection.end

    @property
    def selected_text(self) -> str:
        return self.text[self.selection.start : self.selection.end]


def make_edit(text: str, start: int, end: int, *, label: str) -> Edit:
    return Edit(text=text, selection=clamp_selection(text, start, end), label=label)


def replace_selection(
    text: str,
    selection: Selection,
    replacement: str,
    *,
    label: str,
    select_replacement: bool = True,
) -> Edit:
    """Swap the selected span for ``replacement``.

    With ``select_replacement`` the inserted text stays selected so it can be
    typed over; otherwise the caret lands right after it.
    """

    start = selection.start
    new_text = replace_range(text, start, selection.end, replacement)
    stop = start + len(replacement)
    if select_replacement:
        return make_edit(new_text, start, stop, label=label)
    return make_edit(new_text, stop, stop, label=label)


__all__ = ["Edit", "make_edit", "replace_selection"]
