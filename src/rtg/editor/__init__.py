"""Text styles and timeline assembly."""

from .styles import (
    STYLES,
    decorate_text,
    get_style,
    register_style,
    style_for_class,
)
from .assembler import (
    INTRO_LOCATION_ID,
    assemble,
    group_scenes,
    group_segments,
)

__all__ = [
    # Styles
    "STYLES",
    "decorate_text",
    "get_style",
    "register_style",
    "style_for_class",
    # Assembler
    "INTRO_LOCATION_ID",
    "assemble",
    "group_scenes",
    "group_segments",
]
