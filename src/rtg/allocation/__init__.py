"""Count-based timeline allocation and title heuristics."""

from .allocator import (
    Allocation,
    DEFAULT_OUTRO_TEXT,
    allocate,
    intro_seconds,
    outro_seconds,
    style_class_for,
)
from .titles import (
    TitleHints,
    detect_emoji,
    display_name,
    extract_numbered_items,
    parse_item_list,
    parse_title,
    strip_number,
)

__all__ = [
    # Allocator
    "Allocation",
    "DEFAULT_OUTRO_TEXT",
    "allocate",
    "intro_seconds",
    "outro_seconds",
    "style_class_for",
    # Titles
    "TitleHints",
    "detect_emoji",
    "display_name",
    "extract_numbered_items",
    "parse_item_list",
    "parse_title",
    "strip_number",
]
