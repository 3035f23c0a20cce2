"""Selection types, range primitives, and host-surface contracts."""

from .primitives import (
    clamp_offset,
    clamp_selection,
    line_bounds,
    read_range,
    replace_range,
)
from .state import Caret, Range, Selection, selection_from_offsets
from .surface import TextSurface, Transaction
from .sync import (
    BufferValidationError,
    HostSurface,
    PromptCallback,
    PromptFn,
    SurfaceSnapshot,
)
from .validation import ensure_selection

__all__ = [
    "Caret",
    "Range",
    "Selection",
    "selection_from_offsets",
    "read_range",
    "replace_range",
    "clamp_offset",
    "clamp_selection",
    "line_bounds",
    "TextSurface",
    "Transaction",
    "HostSurface",
    "PromptFn",
    "PromptCallback",
    "SurfaceSnapshot",
    "BufferValidationError",
    "ensure_selection",
]
