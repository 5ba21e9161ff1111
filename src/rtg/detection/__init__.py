"""Frame sampling and scene change detection."""

from .decoder import FrameDecoder, MoviePyDecoder, probe_duration
from .sampler import (
    Frame,
    FrameSampler,
    sample_timestamps,
    prepare_raster,
    encode_thumbnail,
)
from .detector import SceneDetector, frame_difference
from .run import DetectionSettings, DetectionResult, DetectionRun, detect_scenes

__all__ = [
    # Decoding
    "FrameDecoder",
    "MoviePyDecoder",
    "probe_duration",
    # Sampling
    "Frame",
    "FrameSampler",
    "sample_timestamps",
    "prepare_raster",
    "encode_thumbnail",
    # Detection
    "SceneDetector",
    "frame_difference",
    "DetectionSettings",
    "DetectionResult",
    "DetectionRun",
    "detect_scenes",
]
