"""Shared services and result types passed to every action handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from markdown_engine.actions import Edit
from markdown_engine.buffer import HostSurface, PromptCallback, PromptFn
from markdown_engine.config import EngineConfig
from markdown_engine.runtime import telemetry


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed over by a host adapter."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ActionRequest:
    """One invocation of an action, from a toolbar, a shortcut, or code."""

    action_id: str
    args: Mapping[str, Any] = field(default_factory=dict)
    source: str = "api"


@dataclass(slots=True)
class ActionResult:
    """Result returned from an action handler."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    edit: Optional[Edit] = None


class EventBus:
    """Minimal event bus letting the engine publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


def _no_prompt(message: str, default: str, on_result: PromptCallback) -> None:
    del message, default
    on_result(None)


class PromptGate:
    """Wraps a prompt capability so only one prompt is ever outstanding.

    The answer is forwarded once; a host that calls back twice is logged and
    ignored.
    """

    def __init__(self, prompt: Optional[PromptFn] = None) -> None:
        self._prompt: PromptFn = prompt or _no_prompt
        self._pending: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def pending_message(self) -> Optional[str]:
        return self._pending

    def ask(self, message: str, default: str, on_result: PromptCallback) -> bool:
        """Open a prompt; returns ``False`` if another one is still open."""

        if self._pending is not None:
            return False
        self._pending = message
        answered = False

        def _deliver(value: Optional[str]) -> None:
            nonlocal answered
            if answered:
                telemetry.record_event(
                    "prompt.duplicate_answer",
                    level="warning",
                    data={"message": message},
                    logger_name="markdown_engine.prompt",
                )
                return
            answered = True
            self._pending = None
            on_result(value)

        try:
            self._prompt(message, default, _deliver)
        except Exception:
            self._pending = None
            raise
        return True


@dataclass(slots=True)
class EditorContext:
    """Everything a handler may touch: the host, settings, bus, and prompts."""

    surface: HostSurface
    config: EngineConfig = field(default_factory=EngineConfig)
    bus: EventBus = field(default_factory=EventBus)
    prompts: PromptGate = field(default_factory=PromptGate)
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = [
    "KeyInput",
    "ActionRequest",
    "ActionResult",
    "EventBus",
    "PromptGate",
    "EditorContext",
]
