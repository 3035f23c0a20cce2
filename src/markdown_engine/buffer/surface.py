"""In-memory host surface with change observers and telemetry spans."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, List, Optional

from markdown_engine.runtime import telemetry

from .primitives import clamp_selection
from .state import Selection
from .sync import SurfaceSnapshot
from .validation import ensure_selection

ChangeObserver = Callable[[SurfaceSnapshot], None]


class TextSurface:
    """Plain-text stand-in for an editable widget.

    Satisfies ``HostSurface``: reads return the live text and selection,
    commits replace both and then notify every subscribed observer.
    """

    def __init__(
        self,
        text: str = "",
        *,
        start: int = 0,
        end: Optional[int] = None,
        name: str = "default",
    ) -> None:
        self.name = name
        self._text = text
        self._selection: Selection = ensure_selection(
            text, start, start if end is None else end
        )
        self._observers: List[ChangeObserver] = []
        self.version = 0

    @classmethod
    def from_text(
        cls, text: str, *, start: int = 0, end: Optional[int] = None
    ) -> "TextSurface":
        return cls(text, start=start, end=end)

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> Selection:
        return self._selection

    def select(self, start: int, end: Optional[int] = None) -> None:
        """Move the selection without touching the text (no notification)."""

        self._selection = ensure_selection(
            self._text, start, start if end is None else end
        )

    def subscribe(self, observer: ChangeObserver) -> None:
        self._observers.append(observer)

    def snapshot(self) -> SurfaceSnapshot:
        return SurfaceSnapshot(
            text=self._text, selection=self._selection, version=self.version
        )

    def get_buffer_and_selection(self) -> tuple[str, int, int]:
        return self._text, self._selection.start, self._selection.end

    def commit(self, text: str, start: int, end: int) -> None:
        with Transaction(self, "commit"):
            self._text = text
            self._selection = clamp_selection(text, start, end)
            self.version += 1
        snapshot = self.snapshot()
        for observer in list(self._observers):
            observer(snapshot)


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, surface: TextSurface, label: str) -> None:
        self.surface = surface
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={
                "surface": self.surface.name,
                "version": self.surface.version,
                "selection": (
                    self.surface.selection.start,
                    self.surface.selection.end,
                ),
            },
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["TextSurface", "Transaction", "ChangeObserver"]
