"""Adapter that wires FormatterEngine results and bus events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from markdown_engine.buffer import SurfaceSnapshot, selection_from_offsets
from markdown_engine.engine import ActionResult, KeyInput
from markdown_engine.engine.manager import FormatterEngine
from markdown_engine.keymaps import ToolbarItem


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[SurfaceSnapshot], None] = _noop
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


BUS_EVENTS = (
    "edit.commit",
    "edit.noop",
    "edit.stale",
    "prompt.open",
    "prompt.close",
    "action.blocked",
)


def split_key(key: str) -> tuple[str, tuple[str, ...]]:
    """Split a Textual key name such as ``ctrl+shift+q`` into key + modifiers."""

    parts = [part for part in key.split("+") if part]
    if len(parts) <= 1:
        return key, ()
    return parts[-1], tuple(parts[:-1])


class TextualMarkdownAdapter:
    """Bridges the engine and its bus to a Textual-friendly surface."""

    def __init__(self, engine: FormatterEngine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self._subscribe_events()

    def toolbar(self) -> list[ToolbarItem]:
        return self.engine.toolbar()

    def handle_textual_key(
        self, key: str, *, modifiers: Iterable[str] = ()
    ) -> ActionResult:
        """Translate a Textual key name into a KeyInput and dispatch it."""

        base, embedded = split_key(key)
        combined = tuple(str(mod).lower() for mod in (*embedded, *modifiers))
        self._log_state("key ->", key=base, mods=combined)
        result = self.engine.handle_key(KeyInput(key=base, modifiers=combined))
        self._after_result(result)
        return result

    def press(self, item_id: str, *, shift: bool = False) -> ActionResult:
        """Run the toolbar button with ``item_id``, shift-modified if asked."""

        item = self._find_item(item_id)
        if item is None:
            result = ActionResult(consumed=False, status="unknown_button", message=item_id)
        else:
            self._log_state(
                "button ->", button=item.id, action=item.action_id, shift=shift
            )
            result = self.engine.run_item(item, shift=shift)
        self._after_result(result)
        return result

    def _find_item(self, item_id: str) -> Optional[ToolbarItem]:
        for item in self.engine.toolbar():
            if item.id == item_id:
                return item
        return None

    def _after_result(self, result: ActionResult) -> None:
        status = result.message or result.status
        if result.consumed and status:
            self.hooks.update_status(status)
        elif result.status in {"prompt_pending", "disabled"}:
            self.hooks.update_status(result.status)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )

    def _subscribe_events(self) -> None:
        bus = self.engine.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "edit.commit":
            self._refresh_buffer()
        elif name == "edit.stale":
            self.hooks.update_status("stale: buffer changed while prompt was open")

    def _refresh_buffer(self) -> None:
        text, start, end = self.engine.context.surface.get_buffer_and_selection()
        self.hooks.update_buffer(
            SurfaceSnapshot(text=text, selection=selection_from_offsets(start, end))
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        _, start, end = self.engine.context.surface.get_buffer_and_selection()
        return {
            "selection": (start, end),
            "prompt_pending": self.engine.prompt_pending,
        }


__all__ = ["TextualMarkdownAdapter", "TextualUIHooks", "split_key", "BUS_EVENTS"]
