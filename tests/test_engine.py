from __future__ import annotations

from typing import Optional

import pytest

from markdown_engine.buffer import PromptCallback, Range, TextSurface
from markdown_engine.config import EngineConfig, Snippet
from markdown_engine.engine import EditorContext, KeyInput, PromptGate
from markdown_engine.engine.manager import FormatterEngine


class DeferredPrompt:
    """Records prompt requests and answers them later."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, PromptCallback]] = []

    def __call__(self, message: str, default: str, on_result: PromptCallback) -> None:
        self.requests.append((message, default, on_result))

    def answer(self, value: Optional[str], index: int = -1) -> None:
        self.requests[index][2](value)


class OutOfRangeSurface:
    def get_buffer_and_selection(self) -> tuple[str, int, int]:
        return "abc", 0, 10

    def commit(self, text: str, start: int, end: int) -> None:
        raise AssertionError("should not commit")


def make_engine(
    text: str = "",
    start: int = 0,
    end: Optional[int] = None,
    *,
    config: EngineConfig | None = None,
    prompt=None,
) -> tuple[FormatterEngine, TextSurface]:
    surface = TextSurface(text, start=start, end=end)
    context = EditorContext(
        surface=surface,
        config=config or EngineConfig(),
        prompts=PromptGate(prompt),
    )
    return FormatterEngine(context), surface


def collect_events(engine: FormatterEngine, *names: str) -> list[tuple[str, object]]:
    seen: list[tuple[str, object]] = []
    for name in names:
        engine.context.bus.subscribe(
            name, lambda payload, name=name: seen.append((name, payload))
        )
    return seen


def test_run_applies_edit_to_surface() -> None:
    engine, surface = make_engine("hi", 0, 2)

    result = engine.run("markdown.bold")

    assert result.consumed is True
    assert result.status == "edited"
    assert result.message == "bold"
    assert surface.text == "**hi**"
    assert surface.selection == Range(2, 4)


def test_unknown_action_is_not_consumed() -> None:
    engine, _ = make_engine()

    result = engine.run("markdown.nope")

    assert result.consumed is False
    assert result.status == "unknown_action"


def test_disabled_button_blocks_action_and_shortcut() -> None:
    engine, surface = make_engine(
        "hi", 0, 2, config=EngineConfig(disabled_buttons=("bold",))
    )

    assert engine.run("markdown.bold").status == "disabled"
    assert engine.handle_key(KeyInput("b", ("ctrl",))).status == "disabled"
    assert surface.text == "hi"


def test_shortcuts_resolve_with_normalised_modifiers() -> None:
    engine, surface = make_engine("hi", 0, 2)

    result = engine.handle_key(KeyInput("B", ("control",)))

    assert result.status == "edited"
    assert surface.text == "**hi**"


def test_shift_shortcut_runs_line_action() -> None:
    engine, surface = make_engine("a\nb", 0, 3)

    engine.handle_key(KeyInput("q", ("shift", "ctrl")))

    assert surface.text == "> a\n> b"


def test_unbound_key_misses() -> None:
    engine, _ = make_engine()

    assert engine.handle_key(KeyInput("z", ("ctrl",))).status == "miss"
    assert engine.handle_key(KeyInput("")).status == "miss"


def test_no_op_edit_skips_commit() -> None:
    engine, surface = make_engine("**a**", 2)
    seen = collect_events(engine, "edit.noop", "edit.commit")

    result = engine.run("markdown.clear_formatting")

    assert result.status == "noop"
    assert surface.version == 0
    assert seen == [("edit.noop", {"label": "clear_formatting"})]


def test_link_waits_for_prompt_and_blocks_other_actions() -> None:
    prompt = DeferredPrompt()
    engine, surface = make_engine("docs", 0, 4, prompt=prompt)
    seen = collect_events(engine, "action.blocked", "prompt.open")

    opened = engine.run("markdown.link")
    blocked = engine.run("markdown.bold")

    assert opened.status == "prompt_open"
    assert engine.prompt_pending is True
    assert blocked.consumed is False
    assert blocked.status == "prompt_pending"
    assert [name for name, _ in seen] == ["prompt.open", "action.blocked"]
    assert prompt.requests[0][:2] == ("Enter URL:", "https://")

    prompt.answer("https://d.io")

    assert engine.prompt_pending is False
    assert surface.text == "[docs](https://d.io)"


def test_stale_answer_is_dropped() -> None:
    prompt = DeferredPrompt()
    engine, surface = make_engine("docs", 0, 4, prompt=prompt)
    seen = collect_events(engine, "edit.stale")

    engine.run("markdown.link")
    surface.commit("docs changed", 0, 0)
    prompt.answer("https://d.io")

    assert surface.text == "docs changed"
    assert seen == [("edit.stale", {"label": "link"})]
    assert engine.prompt_pending is False


def test_cancelled_prompt_changes_nothing() -> None:
    prompt = DeferredPrompt()
    engine, surface = make_engine("docs", 0, 4, prompt=prompt)
    seen = collect_events(engine, "prompt.close")

    engine.run("markdown.link")
    prompt.answer(None)

    assert surface.text == "docs"
    assert surface.version == 0
    assert seen[0][1] == {"message": "Enter URL:", "cancelled": True}


def test_duplicate_answers_are_ignored() -> None:
    prompt = DeferredPrompt()
    engine, surface = make_engine("", prompt=prompt)

    engine.run("markdown.link")
    prompt.answer("https://a.b")
    prompt.answer("https://c.d")

    assert surface.text == "[link text](https://a.b)"
    assert surface.version == 1


def test_synchronous_prompt_returns_final_outcome() -> None:
    def prompt(message: str, default: str, on_result: PromptCallback) -> None:
        on_result("https://e.x")

    engine, surface = make_engine("e", 0, 1, prompt=prompt)

    result = engine.run("markdown.link")

    assert result.status == "edited"
    assert surface.text == "[e](https://e.x)"


def test_missing_prompt_capability_cancels() -> None:
    engine, surface = make_engine("e", 0, 1)

    assert engine.run("markdown.link").status == "cancelled"
    assert surface.text == "e"


def test_failing_prompt_releases_gate() -> None:
    def prompt(message: str, default: str, on_result: PromptCallback) -> None:
        raise RuntimeError("host closed")

    engine, _ = make_engine("e", 0, 1, prompt=prompt)

    with pytest.raises(RuntimeError):
        engine.run("markdown.link")
    assert engine.prompt_pending is False


def test_heading_uses_configured_explicit_or_picked_level() -> None:
    engine, surface = make_engine("t", config=EngineConfig(heading_level=4))
    engine.run("markdown.heading")
    assert surface.text == "#### t"

    engine, surface = make_engine("t")
    engine.run("markdown.heading", args={"level": 1})
    assert surface.text == "# t"

    prompt = DeferredPrompt()
    engine, surface = make_engine("t", prompt=prompt)
    engine.run("markdown.heading", args={"pick_level": True})
    assert prompt.requests[0][:2] == ("Heading level (1-6):", "3")
    prompt.answer("2")
    assert surface.text == "## t"


def test_snippet_runs_from_toolbar_item() -> None:
    config = EngineConfig(snippets=(Snippet("Sig", "-- {selection}"),))
    engine, surface = make_engine("me", 0, 2, config=config)

    item = next(item for item in engine.toolbar() if item.id == "snippet-0")
    result = engine.run_item(item)

    assert result.status == "edited"
    assert surface.text == "-- me"


def test_unknown_snippet_index() -> None:
    engine, _ = make_engine()

    result = engine.run("markdown.snippet", args={"index": 5})

    assert result.status == "unknown_snippet"


def test_table_args_are_forwarded() -> None:
    engine, surface = make_engine()

    engine.run("markdown.table", args={"cols": 3, "rows": 2})

    assert surface.text.split("\n")[0] == "| Header 1 | Header 2 | Header 3 |"


def test_invalid_host_selection_is_reported() -> None:
    context = EditorContext(surface=OutOfRangeSurface())
    engine = FormatterEngine(context)

    result = engine.run("markdown.bold")

    assert result.consumed is False
    assert result.status == "invalid_selection"


def test_debug_mode_still_returns_result() -> None:
    engine, surface = make_engine("x", 0, 1, config=EngineConfig(debug=True))

    assert engine.run("markdown.italic").status == "edited"
    assert surface.text == "*x*"


def test_snippet_index_follows_stored_position() -> None:
    config = EngineConfig(
        snippets=(
            Snippet("Off", "x", enabled=False),
            Snippet("Sig", "-- {selection}"),
        )
    )
    engine, surface = make_engine("me", 0, 2, config=config)

    assert engine.run("markdown.snippet", args={"index": 0}).status == "unknown_snippet"
    assert engine.run("markdown.snippet", args={"index": -1}).status == "unknown_snippet"
    item = next(item for item in engine.toolbar() if item.id == "snippet-1")
    engine.run_item(item)

    assert surface.text == "-- me"


def test_run_item_with_shift_merges_shift_args() -> None:
    engine, surface = make_engine("t", prompt=lambda message, default, cb: cb("1"))
    item = next(item for item in engine.toolbar() if item.id == "heading")

    result = engine.run_item(item, shift=True)

    assert result.status == "edited"
    assert surface.text == "# t"
