"""I/O utilities: logging setup, atomic writes, image decoding and GIF output."""

import logging
import tempfile
from collections.abc import Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from shutil import move

import numpy as np
from PIL import Image

from .error_handling import (
    ImageIOError,
    ResizeFailedError,
    ValidationError,
    error_context,
)

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Set up logging configuration for ElectronBeam.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Optional directory for a timestamped log file

    Returns:
        Configured logger instance
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handlers.append(logging.FileHandler(log_dir / f"electronbeam_{timestamp}.log"))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    return logging.getLogger("electronbeam")


@contextmanager
def atomic_write(target_path: Path, mode: str = "w"):
    """Context manager for atomic file writes using temporary files.

    Args:
        target_path: Final path where file should be written
        mode: File open mode

    Yields:
        File handle for writing

    Example:
        with atomic_write(Path("out.gif"), "wb") as f:
            image.save(f, format="GIF")
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode=mode,
        dir=target_path.parent,
        delete=False,
        suffix=f".tmp_{target_path.name}",
    ) as temp_file:
        try:
            yield temp_file
            temp_file.flush()
            move(temp_file.name, target_path)
        except Exception:
            Path(temp_file.name).unlink(missing_ok=True)
            raise


def to_rgba_array(image: Image.Image | np.ndarray) -> np.ndarray:
    """Convert a Pillow image or an array into an (H, W, 4) uint8 buffer.

    Arrays may be greyscale (H, W), RGB (H, W, 3) or RGBA (H, W, 4); RGB and
    greyscale inputs get an opaque alpha channel.
    """
    if isinstance(image, Image.Image):
        return np.array(image.convert("RGBA"), dtype=np.uint8)

    array = np.asarray(image)
    if array.dtype != np.uint8:
        array = np.clip(array, 0, 255).astype(np.uint8)

    if array.ndim == 2:
        array = np.stack([array, array, array], axis=-1)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValidationError(f"Unsupported pixel buffer shape: {array.shape}")
    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        array = np.concatenate([array, alpha], axis=2)
    return np.array(array, dtype=np.uint8)


def load_image(path: Path) -> np.ndarray:
    """Decode an image file into an RGBA buffer.

    Raises:
        ImageIOError: If the file cannot be opened or decoded
    """
    with error_context("open image", ImageIOError, context={"path": str(path)}, logger=logger):
        with Image.open(path) as img:
            pixels = to_rgba_array(img)
    logger.debug(f"Loaded {path} ({pixels.shape[1]}x{pixels.shape[0]})")
    return pixels


def resize_pixels(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resample an RGBA buffer to ``width`` x ``height`` with Lanczos.

    Raises:
        ResizeFailedError: If Pillow fails or returns the wrong size
    """
    with error_context(
        "resize image",
        ResizeFailedError,
        context={"width": width, "height": height},
        logger=logger,
    ):
        img = Image.fromarray(np.array(pixels, dtype=np.uint8))
        resized = np.array(
            img.resize((width, height), Image.Resampling.LANCZOS), dtype=np.uint8
        )

    if resized.shape != (height, width, 4):
        raise ResizeFailedError(
            f"Resampling produced {resized.shape[1]}x{resized.shape[0]}, "
            f"expected {width}x{height}"
        )
    return resized


def flatten_to_rgb(frame: np.ndarray) -> np.ndarray:
    """Blend an RGBA frame onto black; GIF frames carry no alpha."""
    rgb = frame[..., :3].astype(np.uint16)
    alpha = frame[..., 3:4].astype(np.uint16)
    return (rgb * alpha // 255).astype(np.uint8)


def save_gif(
    frames: Sequence[np.ndarray],
    output_path: Path,
    frame_duration_ms: int = 100,
    loop: bool = False,
) -> Path:
    """Write frames as an animated GIF.

    Args:
        frames: RGBA frames in display order, all the same size
        output_path: Destination file
        frame_duration_ms: Display time of each frame
        loop: Repeat forever when True, play once otherwise

    Returns:
        The output path

    Raises:
        ImageIOError: If there is nothing to write or the file cannot be written
        ValidationError: If the frames differ in size
    """
    if not frames:
        raise ImageIOError("No frames to write")

    shape = frames[0].shape
    for index, frame in enumerate(frames):
        if frame.shape != shape:
            raise ValidationError(
                f"Frame {index + 1} has shape {frame.shape}, expected {shape}"
            )

    images = [Image.fromarray(flatten_to_rgb(frame)) for frame in frames]
    save_kwargs: dict = {
        "format": "GIF",
        "save_all": True,
        "append_images": images[1:],
        "duration": frame_duration_ms,
    }
    if loop:
        save_kwargs["loop"] = 0

    with error_context("write GIF", ImageIOError, context={"path": str(output_path)}, logger=logger):
        with atomic_write(output_path, "wb") as f:
            images[0].save(f, **save_kwargs)

    logger.info(f"Wrote {len(images)} frames to {output_path}")
    return output_path


def ensure_directories(*paths: Path) -> None:
    """Ensure that all specified directories exist."""
    for path in paths:
        path.mkdir(parents=True, exist_ok=True)
