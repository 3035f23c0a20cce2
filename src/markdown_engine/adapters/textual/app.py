"""Executable Textual app that hosts the Markdown formatting engine."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.screen import ModalScreen
    from textual.widgets import Button, Footer, Header, Input, Label, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use markdown_engine.adapters.textual.app"
    ) from exc

from markdown_engine.buffer import PromptCallback, SurfaceSnapshot
from markdown_engine.config import EngineConfig, Snippet
from markdown_engine.engine import EditorContext, EventBus, PromptGate
from markdown_engine.engine.manager import FormatterEngine
from markdown_engine.runtime import telemetry

from .controller import TextualMarkdownAdapter, TextualUIHooks
from .surface import TextAreaSurface

KeyHandler = Callable[[str], bool]


class PromptScreen(ModalScreen[Optional[str]]):
    """Modal text prompt; dismisses with the entered value or ``None``."""

    DEFAULT_CSS = """
    PromptScreen {
        align: center middle;
    }

    #prompt-dialog {
        width: 60;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }

    #prompt-buttons {
        height: auto;
        align-horizontal: right;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, message: str, default: str = "") -> None:
        super().__init__()
        self.message = message
        self.default = default

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-dialog"):
            yield Label(self.message)
            yield Input(value=self.default, id="prompt-input")
            with Horizontal(id="prompt-buttons"):
                yield Button("Cancel", id="prompt-cancel")
                yield Button("OK", id="prompt-ok", variant="primary")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "prompt-ok":
            self.dismiss(self.query_one("#prompt-input", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ToolbarButton(Button):
    """Button that remembers whether shift was held when it was clicked."""

    shift_held = False

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self.shift_held = event.shift


class MarkdownTextArea(TextArea):
    """TextArea that offers every key press to the engine first."""

    def __init__(
        self, *args: Any, key_handler: KeyHandler | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self.key_handler = key_handler

    async def _on_key(self, event: events.Key) -> None:
        if self.key_handler is not None and self.key_handler(event.key):
            event.prevent_default()
            event.stop()
            return
        await super()._on_key(event)


class MarkdownEngineApp(App[None]):
    """Editor with a formatting toolbar driven by the engine."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #toolbar {
        height: 3;
        overflow-x: auto;
    }

    #toolbar Button {
        min-width: 5;
        margin: 0 0;
    }

    .separator {
        width: 1;
        content-align: center middle;
        color: $text-muted;
    }

    #editor {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: EngineConfig | None = None, text: str = "") -> None:
        super().__init__()
        self.config = config or EngineConfig()
        self.initial_text = text
        self.engine: FormatterEngine | None = None
        self.adapter: TextualMarkdownAdapter | None = None
        self._editor: MarkdownTextArea | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("markdown_engine.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Horizontal(id="toolbar")
        self._editor = MarkdownTextArea(
            self.initial_text, id="editor", key_handler=self._offer_key
        )
        yield self._editor
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        assert self._editor is not None
        self.engine = create_engine(
            TextAreaSurface(self._editor), self.config, prompt=self._prompt
        )
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualMarkdownAdapter(self.engine, hooks)
        await self._mount_toolbar()
        self._editor.focus()

    async def _mount_toolbar(self) -> None:
        assert self.adapter is not None
        toolbar = self.query_one("#toolbar", Horizontal)
        widgets: list[Static | Button] = []
        for item in self.adapter.toolbar():
            if item.is_separator:
                widgets.append(Static("|", classes="separator"))
                continue
            button = ToolbarButton(item.icon or item.label, id=f"tb-{item.id}")
            button.tooltip = item.title or item.label
            widgets.append(button)
        await toolbar.mount_all(widgets)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("tb-") or self.adapter is None:
            return
        event.stop()
        shift = False
        if isinstance(event.button, ToolbarButton):
            shift, event.button.shift_held = event.button.shift_held, False
        self.adapter.press(button_id[len("tb-") :], shift=shift)
        if self._editor is not None:
            self._editor.focus()

    def _offer_key(self, key: str) -> bool:
        if self.adapter is None:
            return False
        return self.adapter.handle_textual_key(key).consumed

    def _prompt(self, message: str, default: str, on_result: PromptCallback) -> None:
        self.push_screen(PromptScreen(message, default), on_result)

    def _update_buffer(self, snapshot: SurfaceSnapshot) -> None:
        self._update_status(f"{len(snapshot.text)} chars")

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "prompt.open" and isinstance(payload, dict):
            self._update_status(str(payload.get("message", "")))
        elif name == "action.blocked":
            self._update_status("finish the open prompt first")

    def _log_line(self, line: str) -> None:
        if self.config.debug:
            self._logger.debug(line)


def create_engine(
    surface: TextAreaSurface,
    config: EngineConfig,
    *,
    prompt: Callable[[str, str, PromptCallback], None] | None = None,
) -> FormatterEngine:
    """Build a FormatterEngine over ``surface`` with the default keymaps."""

    context = EditorContext(
        surface=surface,
        config=config,
        bus=EventBus(),
        prompts=PromptGate(prompt),
        extras={},
    )
    return FormatterEngine(context)


def _parse_snippet(raw: str) -> Snippet:
    label, sep, template = raw.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected LABEL=TEMPLATE, got {raw!r}")
    return Snippet(label=label.strip(), template=template.replace("\\n", "\n"))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the Markdown formatting engine Textual demo."
    )
    parser.add_argument("path", nargs="?", help="Markdown file to load")
    parser.add_argument(
        "--heading-level",
        default=None,
        help="Heading level used by the heading button (1-6, default: 3)",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="BUTTON",
        help="Hide a toolbar button and its shortcut (repeatable)",
    )
    parser.add_argument(
        "--snippet",
        action="append",
        default=[],
        type=_parse_snippet,
        metavar="LABEL=TEMPLATE",
        help="Add a snippet button; {selection} marks the selected text",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log engine activity at debug level"
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig(
        heading_level=args.heading_level if args.heading_level is not None else 3,
        disabled_buttons=tuple(args.disable),
        snippets=tuple(args.snippet),
        debug=args.debug,
    )
    return config.with_env_overrides()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = build_config(args)
    if config.debug:
        telemetry.configure(preset="development")
    text = Path(args.path).read_text(encoding="utf-8") if args.path else ""
    app = MarkdownEngineApp(config=config, text=text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
