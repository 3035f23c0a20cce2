"""HostSurface backed by a Textual ``TextArea`` widget."""

from __future__ import annotations

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from markdown_engine.buffer import clamp_selection
from markdown_engine.runtime import telemetry


class TextAreaSurface:
    """Reads and commits text through a live ``TextArea``.

    Offsets are converted to ``(row, column)`` locations through the widget's
    document. Replacing the text goes through ``TextArea.replace`` so the
    widget posts its own ``TextArea.Changed`` message.
    """

    def __init__(self, text_area: TextArea, *, name: str = "textarea") -> None:
        self.text_area = text_area
        self.name = name

    def get_buffer_and_selection(self) -> tuple[str, int, int]:
        document = self.text_area.document
        selection = self.text_area.selection
        start = document.get_index_from_location(selection.start)
        end = document.get_index_from_location(selection.end)
        return self.text_area.text, start, end

    def commit(self, text: str, start: int, end: int) -> None:
        with telemetry.span(
            name="buffer::commit",
            component=True,
            metadata={"surface": self.name, "length": len(text)},
        ):
            area = self.text_area
            area.replace(
                text, (0, 0), area.document.end, maintain_selection_offset=False
            )
            target = clamp_selection(text, start, end)
            document = area.document
            area.selection = Selection(
                document.get_location_from_index(target.start),
                document.get_location_from_index(target.end),
            )


__all__ = ["TextAreaSurface"]
