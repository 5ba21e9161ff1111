"""Frame sampling: timestamp schedules and decoded samples."""

import asyncio
import base64
import io
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Callable, List, Optional, Sequence

import numpy as np
from PIL import Image

from ..errors import ComputationError, DecodeError, EmptyResult, SeekTimeout
from ..timing import require_positive_duration
from .decoder import FrameDecoder

logger = logging.getLogger(__name__)

# Fixed-cadence sample count bounds
MIN_SAMPLES = 10
MAX_SAMPLES = 30

# Early sample catches intro text before fades complete
INTRO_OFFSET = 0.1
# Near-final sample catches the outro
OUTRO_OFFSET = 0.5

DEFAULT_MAX_EDGE = 720
DEFAULT_THUMBNAIL_QUALITY = 70
DEFAULT_SEEK_TIMEOUT = 5.0


@dataclass
class Frame:
    """A decoded sample."""

    timestamp: float
    raster: np.ndarray
    thumbnail: Optional[str] = None


def sample_timestamps(
    duration: float,
    interval: float = 1.0,
    count: Optional[int] = None,
) -> List[float]:
    """Compute a sampling schedule for a video.

    Args:
        duration: Video duration in seconds.
        interval: Seconds between samples for fixed-cadence sampling. The
            resulting count is clamped to [MIN_SAMPLES, MAX_SAMPLES].
        count: Explicit number of samples; overrides ``interval``.

    Returns:
        Strictly increasing timestamps within [0, duration), starting with a
        very early sample and ending with a near-final one.

    Raises:
        ComputationError: If duration, interval or count is invalid.
    """
    duration = require_positive_duration(duration)

    if count is not None:
        if count < 1:
            raise ComputationError(f"Sample count must be positive, got {count}")
        n = max(count, 2)
    else:
        if interval <= 0:
            raise ComputationError(f"Sample interval must be positive, got {interval}")
        n = min(MAX_SAMPLES, max(MIN_SAMPLES, round(duration / interval)))

    first = min(INTRO_OFFSET, duration * 0.1)
    last = max(duration - OUTRO_OFFSET, duration * 0.9)
    span = last - first

    timestamps: List[float] = []
    for i in range(n):
        t = round(first + span * i / (n - 1), 3)
        # Rounding must not push a sample onto the end of the video
        if t >= duration:
            continue
        if not timestamps or t > timestamps[-1]:
            timestamps.append(t)

    return timestamps


def prepare_raster(frame: np.ndarray, max_edge: int = DEFAULT_MAX_EDGE) -> np.ndarray:
    """Return an RGB uint8 raster of ``frame`` with longest edge <= ``max_edge``."""
    array = np.asarray(frame)
    if array.ndim == 2:
        array = np.stack([array] * 3, axis=-1)
    if array.ndim != 3 or array.shape[2] < 3:
        raise DecodeError(f"Unsupported frame shape: {array.shape}")
    array = np.ascontiguousarray(array[..., :3])
    if array.dtype != np.uint8:
        array = np.clip(array, 0, 255).astype(np.uint8)

    height, width = array.shape[:2]
    longest = max(height, width)
    if longest <= max_edge:
        return array

    scale = max_edge / longest
    size = (max(1, round(width * scale)), max(1, round(height * scale)))
    image = Image.fromarray(array).resize(size, Image.BILINEAR)
    return np.asarray(image, dtype=np.uint8)


def encode_thumbnail(raster: np.ndarray, quality: int = DEFAULT_THUMBNAIL_QUALITY) -> str:
    """Encode a raster as a JPEG data URL."""
    buffer = io.BytesIO()
    Image.fromarray(raster).save(buffer, format="JPEG", quality=quality)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


class FrameSampler:
    """Reads ordered samples from a decoder.

    A failed or timed-out seek is skipped, except for the first timestamp of
    a run: if the very first frame cannot be read the source is treated as
    unreadable and the error propagates.
    """

    def __init__(
        self,
        decoder: FrameDecoder,
        max_edge: int = DEFAULT_MAX_EDGE,
        thumbnail_quality: int = DEFAULT_THUMBNAIL_QUALITY,
        seek_timeout: float = DEFAULT_SEEK_TIMEOUT,
        thumbnails: bool = True,
    ) -> None:
        """Initialize the sampler.

        Args:
            decoder: Frame source.
            max_edge: Longest edge of comparison rasters in pixels.
            thumbnail_quality: JPEG quality for previews.
            seek_timeout: Seconds allowed per seek.
            thumbnails: Whether to encode a preview for each sample.
        """
        self._decoder = decoder
        self._max_edge = max_edge
        self._thumbnail_quality = thumbnail_quality
        self._seek_timeout = seek_timeout
        self._thumbnails = thumbnails
        self.skipped: List[float] = []

    async def read(self, timestamp: float) -> Frame:
        """Read a single sample.

        Raises:
            SeekTimeout: If the seek exceeds the per-seek timeout.
            DecodeError: If the decoder cannot render the frame.
        """
        try:
            pixels = await asyncio.wait_for(
                self._decoder.read_frame(timestamp),
                timeout=self._seek_timeout,
            )
        except asyncio.TimeoutError:
            raise SeekTimeout(timestamp, self._seek_timeout) from None

        raster = prepare_raster(pixels, self._max_edge)
        thumbnail = encode_thumbnail(raster, self._thumbnail_quality) if self._thumbnails else None
        return Frame(timestamp=timestamp, raster=raster, thumbnail=thumbnail)

    async def frames(
        self,
        timestamps: Sequence[float],
        on_skip: Optional[Callable[[float], None]] = None,
    ) -> AsyncIterator[Frame]:
        """Yield samples for ``timestamps`` in order.

        Args:
            timestamps: Increasing timestamps to read.
            on_skip: Optional callable invoked with the timestamp of each
                skipped sample.

        Raises:
            DecodeError: If the first timestamp cannot be decoded.
            SeekTimeout: If the first timestamp times out.
            EmptyResult: If no usable frame was produced.
        """
        self.skipped = []
        produced = 0

        for index, timestamp in enumerate(timestamps):
            try:
                frame = await self.read(timestamp)
            except (DecodeError, SeekTimeout) as e:
                if index == 0:
                    logger.error(f"First frame unreadable: {e}")
                    raise
                logger.warning(f"Skipping frame at {timestamp:.3f}s: {e}")
                self.skipped.append(timestamp)
                if on_skip is not None:
                    on_skip(timestamp)
                continue

            produced += 1
            yield frame

        if produced == 0:
            raise EmptyResult("No usable frames were sampled")
