"""Scene data models."""

from typing import Optional
from pydantic import Field

from .base import TemplateModel
from .style import TextStyle


class Scene(TemplateModel):
    """A contiguous interval of the source video."""

    id: int = Field(..., description="Sequential scene id", ge=1)
    start_time: float = Field(..., description="Scene start in seconds", ge=0)
    end_time: float = Field(..., description="Scene end in seconds (exclusive)")
    duration: float = Field(..., description="Scene duration in seconds, one decimal")
    thumbnail: Optional[str] = Field(None, description="JPEG data URL preview")
    description: str = Field(default="", description="Free-text description")


class SceneInfo(Scene):
    """A scene slot inside a location group."""

    text_overlay: Optional[str] = Field(None, description="Overlay text for the slot")
    text_style: Optional[TextStyle] = Field(None, description="Overlay styling")
    media: Optional[str] = Field(None, description="User media bound to the slot")
