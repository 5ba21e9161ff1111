"""Settings for detection, allocation and label extraction, read from the environment."""

import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# .env values fill in anything not already exported
load_dotenv()


class Config(BaseModel):
    """Engine settings; every field has an RTG_* (or ANTHROPIC_*) override."""

    # Credentials
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key (label extraction)"
    )

    # Paths
    workspace: Path = Field(
        default_factory=lambda: Path(os.getenv("RTG_WORKSPACE", ".")),
        description="Workspace directory for saved templates"
    )

    # Label extraction
    default_model: str = Field(
        default_factory=lambda: os.getenv("RTG_MODEL", "claude-sonnet-4-20250514"),
        description="Default Claude model"
    )

    # Scene detection
    scene_threshold: float = Field(
        default_factory=lambda: float(os.getenv("RTG_SCENE_THRESHOLD", "0.3")),
        description="Minimum normalized frame difference for a scene boundary",
        gt=0,
        lt=1,
    )
    min_scene_duration: float = Field(
        default_factory=lambda: float(os.getenv("RTG_MIN_SCENE_DURATION", "1.0")),
        description="Shortest scene kept by the detector (seconds)",
        ge=0,
    )
    sample_interval: float = Field(
        default_factory=lambda: float(os.getenv("RTG_SAMPLE_INTERVAL", "1.0")),
        description="Seconds between sampled frames",
        gt=0,
    )
    seek_timeout: float = Field(
        default_factory=lambda: float(os.getenv("RTG_SEEK_TIMEOUT", "5.0")),
        description="Per-frame seek timeout (seconds)",
        gt=0,
    )
    max_raster_edge: int = Field(
        default_factory=lambda: int(os.getenv("RTG_MAX_RASTER_EDGE", "720")),
        description="Longest edge of comparison rasters (pixels)",
        gt=0,
    )
    thumbnail_quality: int = Field(
        default_factory=lambda: int(os.getenv("RTG_THUMBNAIL_QUALITY", "70")),
        description="JPEG quality for scene thumbnails",
        ge=1,
        le=95,
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Check that label extraction can reach Claude."""
        if not self.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY is not set; AI labels need it")

    def detection_settings(self) -> "DetectionSettings":
        """Build detection settings from the configured defaults."""
        from .detection.run import DetectionSettings

        return DetectionSettings(
            threshold=self.scene_threshold,
            min_scene_duration=self.min_scene_duration,
            sample_interval=self.sample_interval,
            seek_timeout=self.seek_timeout,
            max_edge=self.max_raster_edge,
            thumbnail_quality=self.thumbnail_quality,
        )


# Shared instance, read once at import
config = Config()
