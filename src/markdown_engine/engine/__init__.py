"""Engine layer: handler context, prompt gating, and action dispatch."""

from .context import (
    ActionRequest,
    ActionResult,
    EditorContext,
    EventBus,
    KeyInput,
    PromptGate,
)

__all__ = [
    "ActionRequest",
    "ActionResult",
    "EditorContext",
    "EventBus",
    "KeyInput",
    "PromptGate",
]
