"""Textual adapter: controller hooks plus the demo editor app."""

from .controller import BUS_EVENTS, TextualMarkdownAdapter, TextualUIHooks, split_key

__all__ = ["BUS_EVENTS", "TextualMarkdownAdapter", "TextualUIHooks", "split_key"]
