"""Formatter engine: dispatches actions and shortcuts against a host surface."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from markdown_engine.buffer import BufferValidationError
from markdown_engine.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    ToolbarItem,
    build_toolbar,
    load_default_keymaps,
)
from markdown_engine.runtime import telemetry

from .context import ActionRequest, ActionResult, EditorContext, KeyInput


class FormatterEngine:
    """Owns the action registry and runs one action at a time."""

    def __init__(
        self,
        context: EditorContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.logger = telemetry.get_logger("markdown_engine.engine")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="markdown_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="markdown_engine.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("engine", self)

    @property
    def prompt_pending(self) -> bool:
        return self.context.prompts.pending

    def run(
        self,
        action_id: str,
        *,
        args: Optional[Mapping[str, Any]] = None,
        source: str = "api",
    ) -> ActionResult:
        """Run a registered action against the current surface contents."""

        request = ActionRequest(action_id=action_id, args=dict(args or {}), source=source)
        if not self.keymap_registry.has_action(action_id):
            return ActionResult(consumed=False, status="unknown_action", message=action_id)

        action = self.keymap_registry.get_action(action_id)
        if action.button_id and self.context.config.is_disabled(action.button_id):
            return ActionResult(consumed=False, status="disabled", message=action.button_id)

        if self.prompt_pending:
            self.context.bus.emit(
                "action.blocked",
                {"action": action_id, "prompt": self.context.prompts.pending_message},
            )
            return ActionResult(consumed=False, status="prompt_pending")

        with telemetry.span(
            name=f"action::{action.telemetry_name}",
            component=True,
            metadata={"action": action_id, "source": source},
        ) as handle:
            try:
                result = action(self.context, request)
            except BufferValidationError as exc:
                handle.add_metadata("invalid_selection", str(exc))
                return ActionResult(
                    consumed=False, status="invalid_selection", message=str(exc)
                )
            handle.add_metadata("status", result.status)

        if self.context.config.debug:
            telemetry.record_event(
                "action.result",
                level="debug",
                data={"action": action_id, "status": result.status, "source": source},
                logger_name="markdown_engine.engine",
            )
        return result

    def run_item(self, item: ToolbarItem, *, shift: bool = False) -> ActionResult:
        """Run a toolbar button; ``shift`` merges in its ``shift_args``."""

        if item.is_separator:
            return ActionResult(consumed=False, status="separator")
        args = dict(item.args)
        if shift:
            args.update(item.shift_args)
        return self.run(item.action_id, args=args, source="toolbar")

    def handle_key(self, key: KeyInput) -> ActionResult:
        """Resolve a key chord to a shortcut and run its action."""

        if not key.key:
            return ActionResult(consumed=False, status="miss")
        stroke = KeyStroke(key=key.key, modifiers=key.modifiers)
        resolution = self.keymap_resolver.resolve(
            stroke, disabled=self.context.config.disabled_buttons
        )
        if resolution.match is None:
            return ActionResult(consumed=False, status=resolution.status)
        binding = resolution.match.binding
        return self.run(binding.action_id, args=binding.args, source="shortcut")

    def toolbar(self) -> list[ToolbarItem]:
        return build_toolbar(self.keymap_registry, self.context.config)


__all__ = ["FormatterEngine"]
