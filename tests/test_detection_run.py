"""Tests for detection runs: progress, budgets, cancellation."""

import asyncio

import pytest

from rtg.detection import DetectionRun, DetectionSettings, detect_scenes
from rtg.errors import DecodeError, ExtractionTimeout

from conftest import BrokenDecoder, FakeDecoder, cut_at

TEN_SAMPLES = DetectionSettings(sample_count=10, seek_timeout=60.0)


def _bounds(scenes):
    return [(s.start_time, s.end_time) for s in scenes]


def test_run_detects_a_single_cut(two_shot_decoder) -> None:
    result = asyncio.run(detect_scenes(two_shot_decoder, settings=TEN_SAMPLES))

    assert len(result.scenes) == 2
    first, second = result.scenes
    assert 5.0 < first.end_time < 5.5
    assert second.start_time == first.end_time
    assert second.end_time == 10.0
    assert result.covered_duration == 10.0
    assert result.sample_rate == 1.0
    assert result.skipped == []
    assert len(two_shot_decoder.reads) == 10


def test_progress_is_monotonic_and_reaches_one(two_shot_decoder) -> None:
    fractions = []
    asyncio.run(detect_scenes(two_shot_decoder, settings=TEN_SAMPLES, on_progress=fractions.append))

    assert len(fractions) == 10
    assert fractions == sorted(fractions)
    assert all(0.0 <= f <= 1.0 for f in fractions)
    assert fractions[-1] == 1.0


def test_skipped_frames_still_advance_progress() -> None:
    decoder = FakeDecoder(10.0, cut_at(5.0), fail_at=[4.278])
    fractions = []
    result = asyncio.run(detect_scenes(decoder, settings=TEN_SAMPLES, on_progress=fractions.append))

    assert result.skipped == [4.278]
    assert len(fractions) == 10
    assert fractions[-1] == 1.0


def test_failing_observer_does_not_affect_run(two_shot_decoder) -> None:
    def broken(fraction: float) -> None:
        raise RuntimeError("observer bug")

    seen = []
    run = DetectionRun(two_shot_decoder, settings=TEN_SAMPLES, observers=[broken, seen.append])
    result = asyncio.run(run.execute())

    assert len(result.scenes) == 2
    assert len(seen) == 10


def test_unreadable_first_frame_fails_the_run() -> None:
    with pytest.raises(DecodeError):
        asyncio.run(detect_scenes(BrokenDecoder(), settings=TEN_SAMPLES))


def test_budget_overrun_raises_extraction_timeout() -> None:
    decoder = FakeDecoder(10.0, cut_at(5.0), delay=0.05)

    with pytest.raises(ExtractionTimeout) as excinfo:
        asyncio.run(detect_scenes(decoder, settings=TEN_SAMPLES, budget=0.12))

    assert excinfo.value.budget == 0.12
    assert excinfo.value.frames_processed < 10


def test_cancelled_run_keeps_only_finalized_scenes() -> None:
    # Cuts at 1s and 2s; the fourth seek never returns
    decoder = FakeDecoder(10.0, cut_at(1.0, 2.0), hang_from=3)

    async def scenario() -> DetectionRun:
        run = DetectionRun(decoder, settings=TEN_SAMPLES)
        task = asyncio.create_task(run.execute())
        while run.progress.completed < 3:
            await asyncio.sleep(0.001)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return run

    run = asyncio.run(scenario())

    assert run.timestamps[:3] == [0.1, 1.144, 2.189]
    assert _bounds(run.scenes) == [(0.0, 1.144), (1.144, 2.189)]
    assert run.detector.scene_start == 2.189
    assert run.progress.fraction == pytest.approx(0.3)


def test_concurrent_runs_are_independent() -> None:
    def make_decoders():
        return FakeDecoder(10.0, cut_at(3.0)), FakeDecoder(12.0, cut_at(4.0, 8.0))

    async def together():
        a, b = make_decoders()
        return await asyncio.gather(
            detect_scenes(a, settings=TEN_SAMPLES),
            detect_scenes(b, settings=TEN_SAMPLES),
        )

    async def one_by_one():
        a, b = make_decoders()
        return [
            await detect_scenes(a, settings=TEN_SAMPLES),
            await detect_scenes(b, settings=TEN_SAMPLES),
        ]

    concurrent = asyncio.run(together())
    sequential = asyncio.run(one_by_one())

    assert [_bounds(r.scenes) for r in concurrent] == [_bounds(r.scenes) for r in sequential]
    assert len(concurrent[1].scenes) == 3


def test_explicit_schedule_is_clipped_to_duration(two_shot_decoder) -> None:
    run = DetectionRun(two_shot_decoder, timestamps=[0.5, 3.0, 12.0])
    assert run.timestamps == [0.5, 3.0]
