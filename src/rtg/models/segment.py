"""Timeline segment data model."""

from enum import Enum
from typing import Optional
from pydantic import Field

from .base import TemplateModel


class SegmentKind(str, Enum):
    """Role of a segment in the timeline."""
    INTRO = "intro"
    CONTENT = "content"
    OUTRO = "outro"


class StyleClass(str, Enum):
    """Text style class assigned by ordinal position."""
    HOOK = "hook"
    NUMBERED = "numbered"
    CTA = "cta"


class Segment(TemplateModel):
    """An abstract timeline slot produced by the allocator."""

    position: int = Field(..., description="Ordinal position in the timeline", ge=0)
    kind: SegmentKind = Field(..., description="Intro, content or outro")
    label: str = Field(..., description="Display label")
    start_time: float = Field(..., description="Slot start in seconds", ge=0)
    end_time: float = Field(..., description="Slot end in seconds")
    duration: float = Field(..., description="Slot duration in seconds", gt=0)
    text: Optional[str] = Field(None, description="Overlay text payload")
    style_class: StyleClass = Field(..., description="Text style class")
