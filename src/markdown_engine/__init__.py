"""Selection-based Markdown formatting engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "engine",
    "keymaps",
    "runtime",
]

__version__ = "0.1.0"
