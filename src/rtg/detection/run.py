"""Scene detection runs: sampler + detector + progress, per video."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..errors import EmptyResult, ExtractionTimeout
from ..models import Scene
from ..progress import ProgressObserver, ProgressReporter
from ..timing import require_positive_duration
from .decoder import FrameDecoder
from .detector import SceneDetector
from .sampler import (
    DEFAULT_MAX_EDGE,
    DEFAULT_SEEK_TIMEOUT,
    DEFAULT_THUMBNAIL_QUALITY,
    FrameSampler,
    sample_timestamps,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionSettings:
    """Tunable parameters for one detection run."""

    threshold: float = 0.3
    min_scene_duration: float = 1.0
    sample_interval: float = 1.0
    sample_count: Optional[int] = None
    seek_timeout: float = DEFAULT_SEEK_TIMEOUT
    max_edge: int = DEFAULT_MAX_EDGE
    thumbnail_quality: int = DEFAULT_THUMBNAIL_QUALITY


@dataclass
class DetectionResult:
    """Outcome of a completed detection run."""

    scenes: List[Scene]
    total_duration: float
    timestamps: List[float]
    skipped: List[float] = field(default_factory=list)

    @property
    def covered_duration(self) -> float:
        """Return the end of the last scene (0 when none)."""
        return self.scenes[-1].end_time if self.scenes else 0.0

    @property
    def sample_rate(self) -> float:
        """Return scheduled samples per second."""
        return len(self.timestamps) / self.total_duration


class DetectionRun:
    """One scene detection pass over one video.

    Each run owns its detector state and progress reporter, so independent
    runs can proceed concurrently. If the run is cancelled or times out,
    :attr:`scenes` still holds every scene finalized before the abort.
    """

    def __init__(
        self,
        decoder: FrameDecoder,
        duration: Optional[float] = None,
        settings: Optional[DetectionSettings] = None,
        observers: Optional[List[ProgressObserver]] = None,
        timestamps: Optional[Sequence[float]] = None,
    ) -> None:
        """Initialize the run.

        Args:
            decoder: Frame source.
            duration: Video duration in seconds. Defaults to the decoder's.
            settings: Detection parameters.
            observers: Progress callbacks receiving a fraction in [0, 1].
            timestamps: Explicit sampling schedule. Computed from the
                settings when omitted.
        """
        self.settings = settings or DetectionSettings()
        self.duration = require_positive_duration(
            duration if duration is not None else decoder.duration
        )
        if timestamps is None:
            timestamps = sample_timestamps(
                self.duration,
                interval=self.settings.sample_interval,
                count=self.settings.sample_count,
            )
        self.timestamps = [t for t in timestamps if 0 <= t < self.duration]

        self.detector = SceneDetector(
            threshold=self.settings.threshold,
            min_scene_duration=self.settings.min_scene_duration,
        )
        self.sampler = FrameSampler(
            decoder,
            max_edge=self.settings.max_edge,
            thumbnail_quality=self.settings.thumbnail_quality,
            seek_timeout=self.settings.seek_timeout,
        )
        self.progress = ProgressReporter(len(self.timestamps), observers)

    @property
    def scenes(self) -> List[Scene]:
        """Return the scenes finalized so far."""
        return list(self.detector.scenes)

    async def execute(self, budget: Optional[float] = None) -> DetectionResult:
        """Run detection to completion.

        Args:
            budget: Optional wall-clock limit for the whole run in seconds.

        Raises:
            DecodeError: If the first frame cannot be decoded.
            SeekTimeout: If the first frame seek times out.
            EmptyResult: If no usable frame was produced.
            ExtractionTimeout: If the run exceeds ``budget``.
        """
        if not self.timestamps:
            raise EmptyResult("No sample timestamps scheduled")

        logger.info(
            f"Detecting scenes over {self.duration:.1f}s with {len(self.timestamps)} samples "
            f"(threshold={self.settings.threshold}, min={self.settings.min_scene_duration}s)"
        )

        if budget is None:
            await self._consume()
        else:
            try:
                await asyncio.wait_for(self._consume(), timeout=budget)
            except asyncio.TimeoutError:
                logger.warning(
                    f"Detection exceeded {budget:.1f}s budget after "
                    f"{self.detector.frames_processed} frame(s)"
                )
                raise ExtractionTimeout(budget, self.detector.frames_processed) from None

        scenes = self.detector.finish(self.duration)
        logger.info(f"Detected {len(scenes)} scene(s), skipped {len(self.sampler.skipped)} frame(s)")
        return DetectionResult(
            scenes=scenes,
            total_duration=self.duration,
            timestamps=list(self.timestamps),
            skipped=list(self.sampler.skipped),
        )

    async def _consume(self) -> None:
        frames = self.sampler.frames(
            self.timestamps,
            on_skip=lambda _t: self.progress.advance(),
        )
        async for frame in frames:
            self.detector.process(frame)
            self.progress.advance()


async def detect_scenes(
    decoder: FrameDecoder,
    duration: Optional[float] = None,
    settings: Optional[DetectionSettings] = None,
    on_progress: Optional[ProgressObserver] = None,
    budget: Optional[float] = None,
) -> DetectionResult:
    """Detect scenes in a video.

    Args:
        decoder: Frame source.
        duration: Video duration in seconds. Defaults to the decoder's.
        settings: Detection parameters.
        on_progress: Optional progress callback.
        budget: Optional wall-clock limit in seconds.

    Returns:
        DetectionResult with the ordered, contiguous scene list.
    """
    observers = [on_progress] if on_progress else None
    run = DetectionRun(decoder, duration=duration, settings=settings, observers=observers)
    return await run.execute(budget=budget)
