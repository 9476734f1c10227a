"""Tests for electronbeam.sequencer module."""

import multiprocessing as mp

import numpy as np
import pytest

from electronbeam import AnimationConfig, ElectronBeam, FrameGenerationError, NotPreparedError
from electronbeam.sequencer import (
    FrameResult,
    FrameTask,
    ParallelFrameGenerator,
    build_tasks,
    generate_frames,
    get_optimal_worker_count,
    progress_values,
)


class FlakyBeam:
    """Stand-in engine whose middle frame always fails."""

    is_prepared = True

    def __init__(self, frame_count: int = 3):
        self.config = AnimationConfig(frame_count=frame_count)

    def draw(self, progress: float) -> np.ndarray:
        if progress == 0.5:
            raise RuntimeError("beam misfire")
        return np.zeros((2, 2, 4), dtype=np.uint8)


class TestProgressValues:
    """Tests for the timeline sampling."""

    def test_evenly_spaced(self):
        assert progress_values(5) == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_two_frames(self):
        assert progress_values(2) == [0.0, 1.0]

    def test_single_frame_starts_at_zero(self):
        assert progress_values(1) == [0.0]

    @pytest.mark.parametrize("count", [0, -3])
    def test_rejects_non_positive(self, count):
        with pytest.raises(ValueError, match="frame_count must be positive"):
            progress_values(count)

    def test_build_tasks(self):
        tasks = build_tasks(3)
        assert tasks == [FrameTask(0, 0.0), FrameTask(1, 0.5), FrameTask(2, 1.0)]


class TestGetOptimalWorkerCount:
    """Tests for worker count resolution."""

    def test_explicit_request(self):
        assert get_optimal_worker_count(2, 10) == 2

    def test_never_more_than_frames(self):
        assert get_optimal_worker_count(8, 3) == 3

    def test_zero_means_cpu_count(self):
        assert get_optimal_worker_count(0, 10_000) == mp.cpu_count()

    def test_at_least_one(self):
        assert get_optimal_worker_count(0, 0) == 1


class TestGenerateFrames:
    """Tests for in-process frame generation."""

    def test_frames_follow_timeline(self, make_beam, gradient_source):
        beam = make_beam(gradient_source, frames=5)
        frames = generate_frames(beam)

        assert len(frames) == 5
        for frame, progress in zip(frames, progress_values(5)):
            assert np.array_equal(frame, beam.draw(progress))
        assert np.array_equal(frames[0], gradient_source)

    def test_frame_count_override(self, make_beam, solid_red):
        beam = make_beam(solid_red, frames=10)
        assert len(generate_frames(beam, 3)) == 3

    def test_progress_callback(self, make_beam, solid_red):
        beam = make_beam(solid_red, frames=4)
        calls = []
        generate_frames(beam, progress_callback=lambda done, total: calls.append((done, total)))
        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_requires_prepared_engine(self):
        with pytest.raises(NotPreparedError):
            generate_frames(ElectronBeam())

    def test_failed_frames_are_reported(self):
        with pytest.raises(FrameGenerationError, match="1 of 3 frames failed") as exc_info:
            generate_frames(FlakyBeam())
        assert exc_info.value.context["failed_frames"] == [1]


class TestParallelFrameGeneratorSetup:
    """Checks that do not start worker processes."""

    def test_default_workers(self):
        generator = ParallelFrameGenerator()
        assert generator.max_workers == mp.cpu_count()

    def test_requires_prepared_engine(self):
        with pytest.raises(NotPreparedError):
            ParallelFrameGenerator(max_workers=2).generate(ElectronBeam())

    def test_frame_result_defaults(self):
        result = FrameResult(frame_index=3, success=False, error_message="boom")
        assert result.frame is None
        assert result.generation_time == 0.0
