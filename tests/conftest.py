"""Shared fixtures: in-memory decoders and raster helpers."""

import asyncio
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np
import pytest

from rtg.detection import Frame, FrameDecoder
from rtg.errors import DecodeError

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
GREY = (128, 128, 128)

Color = Tuple[int, int, int]


def solid(color: Color, size: Tuple[int, int] = (8, 8)) -> np.ndarray:
    """Return an H x W x 3 raster filled with one colour."""
    height, width = size
    return np.full((height, width, 3), color, dtype=np.uint8)


def make_frame(timestamp: float, color: Color, thumbnail: Optional[str] = None) -> Frame:
    """Return a Frame with a solid raster."""
    return Frame(timestamp=timestamp, raster=solid(color), thumbnail=thumbnail or f"thumb-{timestamp}")


def frames_from(colors: Iterable[Tuple[float, Color]]) -> List[Frame]:
    """Build frames from (timestamp, colour) pairs."""
    return [make_frame(t, c) for t, c in colors]


class FakeDecoder(FrameDecoder):
    """Decoder rendering solid frames from a colour function."""

    def __init__(
        self,
        duration: float,
        color_at: Callable[[float], Color],
        fail_at: Iterable[float] = (),
        hang_from: Optional[int] = None,
        delay: float = 0.0,
        size: Tuple[int, int] = (8, 8),
    ) -> None:
        self._duration = duration
        self._color_at = color_at
        self._fail_at = set(fail_at)
        self._hang_from = hang_from
        self._delay = delay
        self._size = size
        self.reads: List[float] = []
        self.closed = False

    @property
    def duration(self) -> float:
        return self._duration

    async def read_frame(self, timestamp: float) -> np.ndarray:
        index = len(self.reads)
        self.reads.append(timestamp)
        if self._hang_from is not None and index >= self._hang_from:
            await asyncio.Event().wait()
        if self._delay:
            await asyncio.sleep(self._delay)
        if timestamp in self._fail_at:
            raise DecodeError(f"cannot render {timestamp}")
        return solid(self._color_at(timestamp), self._size)

    def close(self) -> None:
        self.closed = True


class BrokenDecoder(FrameDecoder):
    """Decoder for an unreadable source."""

    def __init__(self, duration: float = 10.0) -> None:
        self._duration = duration

    @property
    def duration(self) -> float:
        return self._duration

    async def read_frame(self, timestamp: float) -> np.ndarray:
        raise DecodeError("cross-origin video")


def cut_at(*boundaries: float, colors: Tuple[Color, ...] = (BLACK, WHITE, RED, GREY)) -> Callable[[float], Color]:
    """Colour function changing colour at each boundary."""
    def color_at(t: float) -> Color:
        index = sum(1 for b in boundaries if t >= b)
        return colors[index % len(colors)]
    return color_at


@pytest.fixture
def two_shot_decoder() -> FakeDecoder:
    """A 10s video: black until 5s, then white."""
    return FakeDecoder(10.0, cut_at(5.0))
