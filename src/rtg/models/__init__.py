"""Data models for reel templates."""

from .style import TextStyle, EmojiPosition, ScreenPosition, Alignment
from .scene import Scene, SceneInfo
from .segment import Segment, SegmentKind, StyleClass
from .timeline import Clip, TextOverlay, Timeline
from .template import ExtractionMethod, LocationGroup, Template, generate_template_id

__all__ = [
    "TextStyle",
    "EmojiPosition",
    "ScreenPosition",
    "Alignment",
    "Scene",
    "SceneInfo",
    "Segment",
    "SegmentKind",
    "StyleClass",
    "Clip",
    "TextOverlay",
    "Timeline",
    "ExtractionMethod",
    "LocationGroup",
    "Template",
    "generate_template_id",
]
