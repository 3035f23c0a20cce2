"""Chord resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Container, Literal, Optional

from markdown_engine.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss", "disabled"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Maps a key chord to the highest-priority enabled binding."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    def resolve(
        self, stroke: KeyStroke, *, disabled: Container[str] = ()
    ) -> ResolutionResult:
        """Resolve ``stroke``; ``disabled`` holds toolbar button ids to skip."""

        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"stroke": stroke.token},
        ) as handle:
            candidates = self._registry.bindings_for(stroke.token)
            if not candidates:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            matches: list[ResolutionMatch] = []
            for binding in candidates:
                action = self._registry.get_action(binding.action_id)
                if action.button_id and action.button_id in disabled:
                    continue
                matches.append(ResolutionMatch(binding=binding, action=action))

            if not matches:
                handle.add_metadata("status", "disabled")
                return ResolutionResult(status="disabled")

            matches.sort(key=lambda m: (-m.binding.priority, m.binding.id))
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", matches[0].binding.id)
            return ResolutionResult(status="match", match=matches[0])


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
