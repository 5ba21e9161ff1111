"""Text style data model."""

from enum import Enum
from typing import Optional
from pydantic import Field

from .base import TemplateModel


class EmojiPosition(str, Enum):
    """Where an emoji sits relative to the overlay text."""
    BEFORE = "before"
    AFTER = "after"
    BOTH = "both"


class ScreenPosition(str, Enum):
    """Vertical placement of an overlay."""
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class Alignment(str, Enum):
    """Horizontal text alignment."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TextStyle(TemplateModel):
    """Styling for a text overlay."""

    font_family: str = Field(default="Poppins", description="Font family name")
    font_size: int = Field(default=22, description="Font size in points", gt=0)
    font_weight: str = Field(default="600", description="CSS font weight")
    color: str = Field(default="#FFFFFF", description="Text color")
    background_color: Optional[str] = Field(None, description="Text box background")
    text_shadow: Optional[str] = Field(None, description="CSS text shadow")
    has_emoji: bool = Field(default=False, description="Whether an emoji decorates the text")
    emoji: Optional[str] = Field(None, description="Decorating emoji")
    emoji_position: Optional[EmojiPosition] = Field(None, description="Emoji placement")
    position: ScreenPosition = Field(default=ScreenPosition.BOTTOM, description="Screen position")
    alignment: Alignment = Field(default=Alignment.LEFT, description="Text alignment")
