"""Frame sequencing: turn a prepared engine into an ordered list of frames.

Frames are independent of each other, so they can be drawn in worker
processes. Each worker receives the prepared engine once through the pool
initializer; results come back tagged with their frame index and are put
back into timeline order before they are returned.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
import time
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass

import numpy as np

from .animator import ElectronBeam
from .error_handling import FrameGenerationError, NotPreparedError

ProgressCallback = Callable[[int, int], None]

_worker_beam: ElectronBeam | None = None


@dataclass
class FrameTask:
    """One frame to draw."""

    frame_index: int
    progress: float


@dataclass
class FrameResult:
    """Outcome of drawing one frame."""

    frame_index: int
    success: bool
    frame: np.ndarray | None = None
    error_message: str | None = None
    generation_time: float = 0.0


def progress_values(frame_count: int) -> list[float]:
    """Evenly spaced progress values ``i / (n - 1)``; one frame gets ``[0.0]``.

    Raises:
        ValueError: If frame_count is not positive
    """
    if frame_count <= 0:
        raise ValueError(f"frame_count must be positive, got {frame_count}")
    if frame_count == 1:
        return [0.0]
    last = frame_count - 1
    return [index / last for index in range(frame_count)]


def build_tasks(frame_count: int) -> list[FrameTask]:
    return [
        FrameTask(frame_index=index, progress=progress)
        for index, progress in enumerate(progress_values(frame_count))
    ]


def get_optimal_worker_count(requested: int, frame_count: int) -> int:
    """Resolve a worker request; 0 means one per CPU, never more than frames."""
    workers = requested if requested > 0 else mp.cpu_count()
    return max(1, min(workers, frame_count))


def _draw_task(beam: ElectronBeam, task: FrameTask) -> FrameResult:
    start_time = time.time()
    try:
        frame = beam.draw(task.progress)
    except NotPreparedError:
        raise
    except Exception as e:
        return FrameResult(
            frame_index=task.frame_index,
            success=False,
            error_message=str(e),
            generation_time=time.time() - start_time,
        )
    return FrameResult(
        frame_index=task.frame_index,
        success=True,
        frame=frame,
        generation_time=time.time() - start_time,
    )


def _init_worker(beam: ElectronBeam) -> None:
    global _worker_beam
    _worker_beam = beam


def _draw_in_worker(task: FrameTask) -> FrameResult:
    """Worker entry point; uses the engine installed by ``_init_worker``."""
    if _worker_beam is None:
        raise NotPreparedError("Worker process has no prepared engine")
    return _draw_task(_worker_beam, task)


def _collect(results: list[FrameResult], logger: logging.Logger) -> list[np.ndarray]:
    results.sort(key=lambda r: r.frame_index)
    failures = [r for r in results if not r.success]
    if failures:
        for failure in failures:
            logger.error(
                f"Frame {failure.frame_index + 1} failed: {failure.error_message}"
            )
        raise FrameGenerationError(
            f"{len(failures)} of {len(results)} frames failed",
            context={"failed_frames": [f.frame_index for f in failures]},
        )
    return [r.frame for r in results]  # type: ignore[misc]


def generate_frames(
    beam: ElectronBeam,
    frame_count: int | None = None,
    progress_callback: ProgressCallback | None = None,
    logger: logging.Logger | None = None,
) -> list[np.ndarray]:
    """Draw every frame of the animation in the calling process.

    Args:
        beam: Prepared engine
        frame_count: Number of frames (default: ``beam.config.frame_count``)
        progress_callback: Called with (completed, total) after each frame
        logger: Logger instance for debugging

    Returns:
        Frames in timeline order

    Raises:
        NotPreparedError: If the engine has not been prepared
        FrameGenerationError: If any frame could not be drawn
    """
    logger = logger or logging.getLogger(__name__)
    if not beam.is_prepared:
        raise NotPreparedError()

    tasks = build_tasks(frame_count or beam.config.frame_count)
    results = []
    for task in tasks:
        logger.debug(
            f"Generating frame {task.frame_index + 1}/{len(tasks)} "
            f"(level: {task.progress:.3f})"
        )
        results.append(_draw_task(beam, task))
        if progress_callback:
            progress_callback(len(results), len(tasks))

    return _collect(results, logger)


class ParallelFrameGenerator:
    """Draw frames across worker processes.

    The prepared source is read-only and every frame is independent, so
    there is no coordination between workers beyond reassembling results
    in frame order.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the parallel frame generator.

        Args:
            max_workers: Maximum number of worker processes (default: CPU count)
            logger: Logger instance for debugging
        """
        self.max_workers = max_workers or mp.cpu_count()
        self.logger = logger or logging.getLogger(__name__)

        self._completed_tasks = 0
        self._failed_tasks = 0

    def generate(
        self,
        beam: ElectronBeam,
        frame_count: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> list[np.ndarray]:
        """Draw all frames of the animation in parallel.

        Args:
            beam: Prepared engine, shipped once to each worker
            frame_count: Number of frames (default: ``beam.config.frame_count``)
            progress_callback: Called with (completed, total) as frames finish

        Returns:
            Frames in timeline order, regardless of completion order

        Raises:
            NotPreparedError: If the engine has not been prepared
            FrameGenerationError: If any frame could not be drawn
        """
        if not beam.is_prepared:
            raise NotPreparedError()

        tasks = build_tasks(frame_count or beam.config.frame_count)
        workers = get_optimal_worker_count(self.max_workers, len(tasks))
        self._completed_tasks = 0
        self._failed_tasks = 0
        start_time = time.time()

        self.logger.info(
            f"Starting parallel frame generation: {len(tasks)} frames "
            f"with {workers} workers"
        )

        results: list[FrameResult] = []
        with ProcessPoolExecutor(
            max_workers=workers, initializer=_init_worker, initargs=(beam,)
        ) as executor:
            future_to_task = {
                executor.submit(_draw_in_worker, task): task for task in tasks
            }

            for future in as_completed(future_to_task):
                task = future_to_task[future]
                try:
                    result = future.result()
                except NotPreparedError:
                    raise
                except Exception as e:
                    self.logger.error(
                        f"Frame generation exception for frame {task.frame_index + 1}: {e}"
                    )
                    result = FrameResult(
                        frame_index=task.frame_index,
                        success=False,
                        error_message=str(e),
                    )

                results.append(result)
                if result.success:
                    self._completed_tasks += 1
                else:
                    self._failed_tasks += 1

                if progress_callback:
                    progress_callback(len(results), len(tasks))

        elapsed_time = max(time.time() - start_time, 1e-9)
        self.logger.info(
            f"Parallel frame generation completed: {self._completed_tasks} successful, "
            f"{self._failed_tasks} failed in {elapsed_time:.2f}s "
            f"({len(tasks) / elapsed_time:.1f} frames/sec)"
        )

        return _collect(results, self.logger)
