"""Template data models."""

import json
import random
import string
import time
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional
from pydantic import Field
import yaml

from .base import TemplateModel
from .scene import SceneInfo
from .timeline import Timeline


class ExtractionMethod(str, Enum):
    """How the template timeline was produced."""
    SCENE_DETECTION = "scene-detection"
    ALLOCATION = "allocation"


class LocationGroup(TemplateModel):
    """Contiguous scenes sharing one label and one text overlay."""

    location_id: int = Field(..., description="Group id, 0 is the intro", ge=0)
    location_name: str = Field(..., description="Group label")
    scenes: List[SceneInfo] = Field(default_factory=list, description="Scene slots")
    total_duration: float = Field(default=0.0, description="Sum of scene durations")


def generate_template_id() -> str:
    """Return a new opaque template id (``tmpl_<millis>_<9 base36 chars>``)."""
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join(random.choices(alphabet, k=9))
    return f"tmpl_{int(time.time() * 1000)}_{suffix}"


class Template(TemplateModel):
    """A fill-in-the-blanks reel template."""

    id: str = Field(default_factory=generate_template_id, description="Template id")
    type: str = Field(default="reel", description="Template type")
    title: str = Field(default="", description="Source title or caption")
    total_duration: float = Field(..., description="Source duration in seconds", gt=0)
    extraction_method: ExtractionMethod = Field(..., description="How slots were produced")
    locations: List[LocationGroup] = Field(default_factory=list, description="Location groups")
    timeline: Optional[Timeline] = Field(None, description="Initial clip and overlay track")
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="Creation timestamp (ISO 8601)"
    )

    @property
    def scene_count(self) -> int:
        """Return the number of scene slots across all groups."""
        return sum(len(location.scenes) for location in self.locations)

    @classmethod
    def from_yaml(cls, path: Path) -> "Template":
        """Load template from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)

    def to_yaml(self, path: Path) -> None:
        """Save template to YAML file."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    @classmethod
    def from_json(cls, path: Path) -> "Template":
        """Load template from JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_json(self, path: Path) -> None:
        """Save template to JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Path) -> "Template":
        """Load a template, choosing the format from the file suffix."""
        if path.suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    def save(self, path: Path) -> Path:
        """Save a template, choosing the format from the file suffix."""
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() == ".json":
            self.to_json(path)
        else:
            self.to_yaml(path)
        return path
