"""Frame decoders: timestamp -> RGB pixel buffer."""

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import numpy as np

from ..errors import DecodeError

logger = logging.getLogger(__name__)


class FrameDecoder(ABC):
    """Abstract source of video frames.

    Implementations return an ``H x W x C`` uint8 array for a timestamp.
    Arrays with an alpha channel are accepted; only RGB is read.
    """

    @property
    @abstractmethod
    def duration(self) -> float:
        """Return the video duration in seconds."""
        ...

    @abstractmethod
    async def read_frame(self, timestamp: float) -> np.ndarray:
        """Seek to ``timestamp`` and return the rendered frame.

        Raises:
            DecodeError: If the frame cannot be produced.
        """
        ...

    def close(self) -> None:
        """Release decoder resources."""

    def __enter__(self) -> "FrameDecoder":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class MoviePyDecoder(FrameDecoder):
    """Decoder backed by moviepy's ``VideoFileClip``.

    ``get_frame`` is blocking, so reads run in a worker thread. A lock keeps
    reads serialized even when an earlier seek was abandoned after a timeout.
    """

    def __init__(self, source: Union[str, Path], target_resolution: Optional[tuple] = None) -> None:
        """Open the video.

        Args:
            source: Path or URL of the video.
            target_resolution: Optional (height, width) resize applied by ffmpeg.

        Raises:
            DecodeError: If the video cannot be opened.
        """
        from moviepy import VideoFileClip

        self._source = str(source)
        self._lock = threading.Lock()
        try:
            self._clip = VideoFileClip(
                self._source,
                audio=False,
                target_resolution=target_resolution,
            )
        except (OSError, IOError, KeyError) as e:
            raise DecodeError(f"Failed to open video {self._source}: {e}") from e

        if not self._clip.duration or self._clip.duration <= 0:
            self._clip.close()
            raise DecodeError(f"Video has no playable duration: {self._source}")

        logger.debug(
            f"Opened {self._source}: {self._clip.duration:.2f}s, "
            f"{self._clip.w}x{self._clip.h}"
        )

    @property
    def duration(self) -> float:
        """Return the video duration in seconds."""
        return float(self._clip.duration)

    async def read_frame(self, timestamp: float) -> np.ndarray:
        """Seek to ``timestamp`` and return the RGB frame."""
        return await asyncio.to_thread(self._read_locked, timestamp)

    def _read_locked(self, timestamp: float) -> np.ndarray:
        with self._lock:
            try:
                frame = self._clip.get_frame(timestamp)
            except Exception as e:
                raise DecodeError(f"Failed to render frame at {timestamp:.3f}s: {e}") from e
        if frame is None:
            raise DecodeError(f"No frame at {timestamp:.3f}s")
        return np.asarray(frame, dtype=np.uint8)

    def close(self) -> None:
        """Close the underlying clip."""
        self._clip.close()


def probe_duration(source: Union[str, Path]) -> float:
    """Return the duration of a video file in seconds.

    Raises:
        DecodeError: If the video cannot be opened.
    """
    with MoviePyDecoder(source) as decoder:
        return decoder.duration
