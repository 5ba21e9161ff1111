"""Assembled timeline data models."""

from typing import List, Optional
from pydantic import Field

from .base import TemplateModel
from .style import TextStyle


class Clip(TemplateModel):
    """A scene slot placed on the clip track."""

    id: str = Field(..., description="Clip identifier")
    scene_id: int = Field(..., description="Scene the clip was built from")
    location_id: int = Field(..., description="Owning location group")
    location_name: str = Field(..., description="Owning location name")
    start_time: float = Field(..., description="Track start in seconds", ge=0)
    end_time: float = Field(..., description="Track end in seconds")
    duration: float = Field(..., description="Clip duration in seconds")
    media: Optional[str] = Field(None, description="User media bound to the clip")
    thumbnail: Optional[str] = Field(None, description="Reference thumbnail")


class TextOverlay(TemplateModel):
    """One text overlay spanning a whole location group."""

    id: str = Field(..., description="Overlay identifier")
    location_id: int = Field(..., description="Owning location group")
    text: str = Field(..., description="Overlay text")
    style: TextStyle = Field(..., description="Overlay styling")
    start_time: float = Field(..., description="Window start in seconds", ge=0)
    end_time: float = Field(..., description="Window end in seconds (exclusive)")


class Timeline(TemplateModel):
    """The initial clip track and overlay list of a template."""

    clips: List[Clip] = Field(default_factory=list, description="Contiguous clip track")
    overlays: List[TextOverlay] = Field(default_factory=list, description="Group overlays")
    total_duration: float = Field(default=0.0, description="Track length in seconds")
