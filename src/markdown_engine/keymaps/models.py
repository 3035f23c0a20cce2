"""Dataclasses describing shortcut strokes, actions, and bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

_MODIFIER_ALIASES = {
    "control": "ctrl",
    "meta": "ctrl",
    "cmd": "ctrl",
    "command": "ctrl",
    "option": "alt",
}
_MODIFIER_ORDER = ("ctrl", "alt", "shift")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {
        _MODIFIER_ALIASES.get(m.strip().lower(), m.strip().lower())
        for m in modifiers
        if m.strip()
    }
    ordered = [m for m in _MODIFIER_ORDER if m in values]
    ordered.extend(sorted(values.difference(_MODIFIER_ORDER)))
    return tuple(ordered)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key chord such as ``ctrl+shift+q``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key = self.key.lower() if len(self.key) == 1 else self.key
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        parts = [part for part in chord.strip().split("+") if part]
        if not parts:
            raise ValueError("chord cannot be empty")
        *modifiers, key = parts
        return cls(key=key, modifiers=tuple(modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used when an action is dispatched.

    ``metadata`` carries toolbar presentation: ``button`` (the id a user can
    disable), ``label`` and ``icon``. An optional ``shift_args`` mapping is
    merged into the arguments of a shift-modified toolbar press.
    """

    id: str
    handler: Callable[..., object]
    telemetry_name: str | None = None
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    @property
    def button_id(self) -> str | None:
        value = self.metadata.get("button")
        return str(value) if value else None

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key chord with an action and optional arguments."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    priority: int = 0
    args: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "args", MappingProxyType(dict(self.args)))

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = ["KeyStroke", "ActionRef", "Binding"]
