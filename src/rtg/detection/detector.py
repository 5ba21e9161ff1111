"""Scene change detection by per-pixel colour difference."""

import logging
from typing import List, Optional

import numpy as np

from ..errors import ComputationError
from ..models import Scene
from ..timing import round_tenth
from .sampler import Frame

logger = logging.getLogger(__name__)

# Largest per-pixel |dR| + |dG| + |dB|
MAX_PIXEL_DELTA = 255 * 3


def frame_difference(previous: np.ndarray, current: np.ndarray) -> float:
    """Return the normalized colour difference between two rasters.

    The score is the mean over pixels of (|dR| + |dG| + |dB|) / 765, in
    [0, 1]. Channels past the third (alpha) are ignored.

    Raises:
        ComputationError: If the rasters differ in size.
    """
    a = np.asarray(previous)[..., :3]
    b = np.asarray(current)[..., :3]
    if a.shape != b.shape:
        raise ComputationError(f"Raster shapes differ: {a.shape} vs {b.shape}")

    pixels = a.shape[0] * a.shape[1]
    if pixels == 0:
        return 0.0

    # Integer total first, one division: identical inputs give identical scores
    total = int(np.abs(a.astype(np.int16) - b.astype(np.int16)).sum(dtype=np.int64))
    return total / (MAX_PIXEL_DELTA * pixels)


class SceneDetector:
    """Per-run scene boundary state machine.

    Feed frames in timestamp order with :meth:`process`, then call
    :meth:`finish` with the video duration. Scenes in :attr:`scenes` are
    always finalized: stopping early never leaves a partial scene behind.
    """

    def __init__(self, threshold: float = 0.3, min_scene_duration: float = 1.0) -> None:
        """Initialize the detector.

        Args:
            threshold: Minimum difference score for a boundary, in (0, 1).
            min_scene_duration: Shortest scene emitted, in seconds.

        Raises:
            ComputationError: If a parameter is out of range.
        """
        if not 0 < threshold < 1:
            raise ComputationError(f"Threshold must be in (0, 1), got {threshold}")
        if min_scene_duration < 0:
            raise ComputationError(
                f"Minimum scene duration must be non-negative, got {min_scene_duration}"
            )

        self.threshold = threshold
        self.min_scene_duration = min_scene_duration

        self.scenes: List[Scene] = []
        self.frames_processed = 0
        self.boundaries_suppressed = 0
        self._previous: Optional[np.ndarray] = None
        self._last_thumbnail: Optional[str] = None
        self._scene_start = 0.0
        self._last_timestamp: Optional[float] = None
        self._finished = False

    @property
    def scene_start(self) -> float:
        """Return the start time of the scene in progress."""
        return self._scene_start

    def process(self, frame: Frame) -> Optional[Scene]:
        """Score a frame against its predecessor.

        Returns:
            The scene finalized by this frame, if any.

        Raises:
            ComputationError: If frames arrive out of order or after finish.
        """
        if self._finished:
            raise ComputationError("Detector already finished")
        if self._last_timestamp is not None and frame.timestamp <= self._last_timestamp:
            raise ComputationError(
                f"Frames must be strictly increasing: {frame.timestamp} after {self._last_timestamp}"
            )

        finalized: Optional[Scene] = None
        if self._previous is not None:
            score = frame_difference(self._previous, frame.raster)
            logger.debug(f"t={frame.timestamp:.3f}s score={score:.4f}")

            if score > self.threshold:
                if frame.timestamp - self._scene_start >= self.min_scene_duration:
                    finalized = self._emit(frame.timestamp)
                    self._scene_start = frame.timestamp
                else:
                    # Too close to the last boundary: absorb into the current scene
                    self.boundaries_suppressed += 1
                    logger.debug(
                        f"Suppressed boundary at {frame.timestamp:.3f}s "
                        f"({frame.timestamp - self._scene_start:.3f}s < {self.min_scene_duration}s)"
                    )

        self._previous = frame.raster
        self._last_thumbnail = frame.thumbnail
        self._last_timestamp = frame.timestamp
        self.frames_processed += 1
        return finalized

    def finish(self, duration: float) -> List[Scene]:
        """Flush the trailing scene and return all scenes.

        The trailing scene [scene_start, duration) is dropped when shorter
        than the minimum scene duration.
        """
        if not self._finished:
            self._finished = True
            if duration - self._scene_start >= self.min_scene_duration and duration > self._scene_start:
                self._emit(duration)
            else:
                logger.debug(
                    f"Dropped trailing remainder [{self._scene_start:.3f}, {duration:.3f})"
                )
            self._previous = None
        return list(self.scenes)

    def _emit(self, end_time: float) -> Scene:
        scene_id = len(self.scenes) + 1
        start = round(self._scene_start, 3)
        end = round(end_time, 3)
        scene = Scene(
            id=scene_id,
            start_time=start,
            end_time=end,
            duration=round_tenth(end - start),
            thumbnail=self._last_thumbnail,
            description=f"Scene {scene_id}",
        )
        self.scenes.append(scene)
        logger.debug(f"Scene {scene_id}: [{start:.3f}, {end:.3f})")
        return scene
