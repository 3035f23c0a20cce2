"""Pure Markdown transformations over ``(text, selection)``."""

from .clear import CLEAR_PASSES, StripPass, clear_formatting, strip_formatting
from .core import Edit, make_edit, replace_selection
from .inserts import (
    build_table,
    insert_horizontal_rule,
    insert_snippet,
    insert_table,
    render_snippet,
)
from .lines import (
    bullet_list,
    clamp_heading_level,
    heading,
    numbered_list,
    prefix_lines,
    quote,
)
from .links import LinkPlan, insert_link, looks_like_url, plan_link
from .wrap import (
    Markers,
    bold,
    code_block,
    inline_code,
    italic,
    spoiler,
    strikethrough,
    wrap,
)

__all__ = [
    "Edit",
    "make_edit",
    "replace_selection",
    "Markers",
    "wrap",
    "bold",
    "italic",
    "strikethrough",
    "inline_code",
    "code_block",
    "spoiler",
    "prefix_lines",
    "quote",
    "bullet_list",
    "heading",
    "clamp_heading_level",
    "numbered_list",
    "LinkPlan",
    "plan_link",
    "insert_link",
    "looks_like_url",
    "build_table",
    "insert_table",
    "insert_horizontal_rule",
    "render_snippet",
    "insert_snippet",
    "StripPass",
    "CLEAR_PASSES",
    "strip_formatting",
    "clear_formatting",
]
