"""Engine configuration: heading level, disabled buttons, snippets."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional

from markdown_engine.actions.lines import MAX_HEADING_LEVEL, MIN_HEADING_LEVEL

ENV_PREFIX = "MARKDOWN_ENGINE_"
DEFAULT_HEADING_LEVEL = 3
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_heading_level(value: Any, default: int = DEFAULT_HEADING_LEVEL) -> int:
    """Clamp ``value`` to a valid heading level, falling back on junk input."""

    match = _LEADING_INT.match(str(value))
    level = int(match.group(1)) if match else default
    if level == 0:
        level = default
    return max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, level))


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True, slots=True)
class Snippet:
    label: str
    template: str
    enabled: bool = True

    @property
    def usable(self) -> bool:
        return self.enabled and bool(self.label.strip()) and bool(self.template)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Snippet":
        return cls(
            label=str(data.get("label") or "").strip(),
            template=str(data.get("template") or ""),
            enabled=_flag(data.get("enabled", False)),
        )


def _load_snippets(raw: Any) -> tuple[Snippet, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    snippets: list[Snippet] = []
    for entry in raw:
        if isinstance(entry, Snippet):
            snippets.append(entry)
        elif isinstance(entry, Mapping):
            snippets.append(Snippet.from_mapping(entry))
    return tuple(snippets)


def _load_buttons(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, Iterable):
        return ()
    return tuple(str(item).strip() for item in raw if str(item).strip())


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Read-only settings handed to the engine on construction."""

    heading_level: int = DEFAULT_HEADING_LEVEL
    disabled_buttons: tuple[str, ...] = ()
    snippets: tuple[Snippet, ...] = ()
    debug: bool = False
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "heading_level", coerce_heading_level(self.heading_level)
        )
        object.__setattr__(
            self, "disabled_buttons", _load_buttons(self.disabled_buttons)
        )
        object.__setattr__(self, "snippets", _load_snippets(self.snippets))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "EngineConfig":
        """Build a config from a settings mapping.

        Accepts both the camelCase keys used by browser storage
        (``headingLevel``, ``disabledButtons``) and snake_case keys. Anything
        malformed falls back to its default.
        """

        data = data or {}
        known = {
            "headingLevel",
            "heading_level",
            "disabledButtons",
            "disabled_buttons",
            "snippets",
            "debug",
        }
        return cls(
            heading_level=data.get("heading_level", data.get("headingLevel")),
            disabled_buttons=data.get(
                "disabled_buttons", data.get("disabledButtons", ())
            ),
            snippets=data.get("snippets", ()),
            debug=_flag(data.get("debug", False)),
            extras={k: v for k, v in data.items() if k not in known},
        )

    def with_env_overrides(
        self, environ: Optional[Mapping[str, str]] = None
    ) -> "EngineConfig":
        env = os.environ if environ is None else environ
        changes: dict[str, Any] = {}
        level = env.get(f"{ENV_PREFIX}HEADING_LEVEL")
        if level is not None:
            changes["heading_level"] = coerce_heading_level(level, self.heading_level)
        buttons = env.get(f"{ENV_PREFIX}DISABLED_BUTTONS")
        if buttons is not None:
            changes["disabled_buttons"] = _load_buttons(buttons)
        debug = env.get(f"{ENV_PREFIX}DEBUG")
        if debug is not None:
            changes["debug"] = _flag(debug)
        if not changes:
            return self
        return replace(self, **changes)

    def is_disabled(self, button_id: str) -> bool:
        return button_id in self.disabled_buttons

    def active_snippets(self) -> tuple[Snippet, ...]:
        return tuple(snippet for snippet in self.snippets if snippet.usable)


__all__ = [
    "DEFAULT_HEADING_LEVEL",
    "EngineConfig",
    "Snippet",
    "coerce_heading_level",
]
