"""Input validation utilities for ElectronBeam.

Checks applied to user-supplied paths and numbers before any rendering
starts, so the command line can fail fast with a clear message.
"""

import logging
import multiprocessing
import os
from pathlib import Path

from .error_handling import ValidationError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}


def validate_path_security(path: str | Path) -> Path:
    """Reject paths containing null bytes or of unreasonable length.

    Raises:
        ValidationError: If the path is unusable
    """
    if not path:
        raise ValidationError("Path cannot be empty")

    path_str = str(path)
    if "\x00" in path_str:
        raise ValidationError(f"Path contains null bytes: {path_str!r}")

    if len(path_str) > 4096:
        raise ValidationError(
            f"Path too long ({len(path_str)} chars): {path_str[:100]}..."
        )

    return Path(path)


def validate_input_image(path: str | Path) -> Path:
    """Validate that *path* names a readable image file.

    Raises:
        ValidationError: If the file is missing, unreadable or not an image
    """
    path_obj = validate_path_security(path)

    if not path_obj.exists():
        raise ValidationError(f"Input file does not exist: {path_obj}")

    if not path_obj.is_file():
        raise ValidationError(f"Input path is not a file: {path_obj}")

    if not os.access(path_obj, os.R_OK):
        raise ValidationError(f"Input file is not readable: {path_obj}")

    if path_obj.suffix.lower() not in IMAGE_EXTENSIONS:
        logger.warning(
            f"⚠️  Unrecognised image extension '{path_obj.suffix}', trying anyway"
        )

    return path_obj


def validate_output_path(path: str | Path, create_parent: bool = True) -> Path:
    """Validate output path for writing.

    Args:
        path: Output path to validate
        create_parent: Whether to create parent directories if they don't exist

    Returns:
        Validated Path object

    Raises:
        ValidationError: If path is invalid or not writable
    """
    path_obj = validate_path_security(path)

    parent = path_obj.parent
    if not parent.exists():
        if not create_parent:
            raise ValidationError(f"Parent directory does not exist: {parent}")
        logger.warning(f"Output directory does not exist, creating: {parent}")
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"Cannot create parent directory {parent}: {e}", cause=e) from e

    if not os.access(parent, os.W_OK):
        raise ValidationError(f"Parent directory is not writable: {parent}")

    if path_obj.exists() and not os.access(path_obj, os.W_OK):
        raise ValidationError(f"Output file is not writable: {path_obj}")

    return path_obj


def validate_frame_settings(frames: int, duration_ms: int) -> tuple[int, int]:
    """Validate frame count and per-frame duration.

    Raises:
        ValidationError: If either value is not a positive integer
    """
    if frames <= 0:
        raise ValidationError("Frame count must be greater than 0")
    if duration_ms <= 0:
        raise ValidationError("Frame duration must be greater than 0")
    return frames, duration_ms


def validate_stretch(name: str, value: float) -> float:
    """Validate a stretch fraction given on the command line."""
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{name} duration must be between 0.0 and 1.0")
    return value


def validate_worker_count(workers: int) -> int:
    """Validate worker count parameter.

    Args:
        workers: Number of worker processes (0 = one per CPU)

    Returns:
        Validated worker count

    Raises:
        ValidationError: If worker count is invalid
    """
    if not isinstance(workers, int):
        raise ValidationError(f"Worker count must be an integer, got {type(workers)}")

    if workers < 0:
        raise ValidationError(f"Worker count cannot be negative: {workers}")

    max_workers = multiprocessing.cpu_count() * 4
    if workers > max_workers:
        raise ValidationError(f"Worker count too high: {workers} (max: {max_workers})")

    return workers
