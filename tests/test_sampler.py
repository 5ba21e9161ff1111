"""Tests for sampling schedules and frame sampling."""

import asyncio

import numpy as np
import pytest

from rtg.detection import FrameSampler, encode_thumbnail, prepare_raster, sample_timestamps
from rtg.detection.sampler import MAX_SAMPLES, MIN_SAMPLES
from rtg.errors import ComputationError, DecodeError, EmptyResult, SeekTimeout

from conftest import BLACK, FakeDecoder, cut_at, solid


async def _collect(sampler, timestamps, on_skip=None):
    return [frame async for frame in sampler.frames(timestamps, on_skip=on_skip)]


def _strictly_increasing(values) -> bool:
    return all(a < b for a, b in zip(values, values[1:]))


# Schedules

def test_schedule_for_twenty_seconds() -> None:
    timestamps = sample_timestamps(20.0)
    assert len(timestamps) == 20
    assert timestamps[0] == 0.1
    assert timestamps[-1] == 19.5
    assert _strictly_increasing(timestamps)


def test_schedule_count_is_clamped() -> None:
    assert len(sample_timestamps(5.0)) == MIN_SAMPLES
    assert len(sample_timestamps(120.0)) == MAX_SAMPLES


def test_schedule_with_explicit_count() -> None:
    assert sample_timestamps(10.0, count=3) == [0.1, 4.8, 9.5]
    assert len(sample_timestamps(10.0, count=1)) == 2


@pytest.mark.parametrize("duration", [0.5, 1.0, 3.0, 7.3, 59.9, 600.0])
def test_schedule_stays_inside_video(duration) -> None:
    timestamps = sample_timestamps(duration)
    assert timestamps
    assert all(0 <= t < duration for t in timestamps)
    assert _strictly_increasing(timestamps)
    # Very early and near-final samples are always present
    assert timestamps[0] <= 0.1
    assert timestamps[-1] >= duration * 0.9 - 1e-9 or timestamps[-1] >= duration - 0.5


def test_schedule_is_deterministic() -> None:
    assert sample_timestamps(33.3) == sample_timestamps(33.3)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"duration": 0},
        {"duration": -4},
        {"duration": 10, "count": 0},
        {"duration": 10, "interval": 0},
    ],
)
def test_schedule_rejects_invalid_input(kwargs) -> None:
    with pytest.raises(ComputationError):
        sample_timestamps(**kwargs)


# Rasters

def test_prepare_raster_downscales_and_drops_alpha() -> None:
    rgba = np.zeros((200, 50, 4), dtype=np.uint8)
    raster = prepare_raster(rgba, max_edge=100)
    assert raster.shape == (100, 25, 3)
    assert raster.dtype == np.uint8


def test_prepare_raster_expands_grayscale() -> None:
    gray = np.full((4, 6), 200, dtype=np.uint8)
    raster = prepare_raster(gray)
    assert raster.shape == (4, 6, 3)
    assert (raster == 200).all()


def test_prepare_raster_rejects_bad_shapes() -> None:
    with pytest.raises(DecodeError):
        prepare_raster(np.zeros((4, 4, 2), dtype=np.uint8))


def test_encode_thumbnail_is_jpeg_data_url() -> None:
    assert encode_thumbnail(solid(BLACK)).startswith("data:image/jpeg;base64,")


# Sampler

def test_sampler_reads_all_frames_in_order() -> None:
    decoder = FakeDecoder(10.0, cut_at(5.0))
    sampler = FrameSampler(decoder)
    timestamps = sample_timestamps(10.0, count=5)

    frames = asyncio.run(_collect(sampler, timestamps))

    assert [f.timestamp for f in frames] == timestamps
    assert all(f.thumbnail.startswith("data:image/jpeg") for f in frames)
    assert sampler.skipped == []


def test_sampler_skips_unreadable_later_frames() -> None:
    timestamps = [0.1, 1.0, 2.0, 3.0]
    decoder = FakeDecoder(4.0, cut_at(), fail_at=[2.0])
    sampler = FrameSampler(decoder, thumbnails=False)
    skipped = []

    frames = asyncio.run(_collect(sampler, timestamps, on_skip=skipped.append))

    assert [f.timestamp for f in frames] == [0.1, 1.0, 3.0]
    assert sampler.skipped == [2.0]
    assert skipped == [2.0]
    assert frames[0].thumbnail is None


def test_sampler_first_frame_failure_is_fatal() -> None:
    decoder = FakeDecoder(4.0, cut_at(), fail_at=[0.1])
    sampler = FrameSampler(decoder)

    with pytest.raises(DecodeError):
        asyncio.run(_collect(sampler, [0.1, 1.0, 2.0]))


def test_sampler_first_frame_timeout_is_fatal() -> None:
    decoder = FakeDecoder(4.0, cut_at(), hang_from=0)
    sampler = FrameSampler(decoder, seek_timeout=0.01)

    with pytest.raises(SeekTimeout) as excinfo:
        asyncio.run(_collect(sampler, [0.1, 1.0]))
    assert excinfo.value.timestamp == 0.1


def test_sampler_skips_later_timeouts() -> None:
    decoder = FakeDecoder(4.0, cut_at(), hang_from=2)
    sampler = FrameSampler(decoder, seek_timeout=0.01, thumbnails=False)

    frames = asyncio.run(_collect(sampler, [0.1, 1.0, 2.0, 3.0]))

    assert [f.timestamp for f in frames] == [0.1, 1.0]
    assert sampler.skipped == [2.0, 3.0]


def test_sampler_with_no_timestamps_is_empty() -> None:
    sampler = FrameSampler(FakeDecoder(4.0, cut_at()))
    with pytest.raises(EmptyResult):
        asyncio.run(_collect(sampler, []))
