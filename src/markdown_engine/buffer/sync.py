"""Adapter boundary types for exchanging text with host surfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from .state import Selection

PromptCallback = Callable[[Optional[str]], None]


@dataclass(slots=True)
class SurfaceSnapshot:
    """Host-friendly snapshot of the live text and selection."""

    text: str
    selection: Selection
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


class HostSurface(Protocol):
    """Protocol describing how the engine reads from and writes to a host."""

    def get_buffer_and_selection(self) -> tuple[str, int, int]:
        """Return the live text plus the raw selection offsets."""
        ...

    def commit(self, text: str, start: int, end: int) -> None:
        """Apply new text + selection, then notify observers of the change."""
        ...


class PromptFn(Protocol):
    """Asks the user for a value; ``on_result`` receives ``None`` on cancel."""

    def __call__(
        self, message: str, default: str, on_result: PromptCallback
    ) -> None: ...


class BufferValidationError(RuntimeError):
    """Raised when a host hands over out-of-bounds selection offsets."""

    def __init__(
        self,
        message: str,
        *,
        start: int | None = None,
        end: int | None = None,
        length: int | None = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.length = length
