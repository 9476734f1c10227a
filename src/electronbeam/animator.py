"""ElectronBeam: the frame transform engine behind the CRT animations.

The engine is prepared once with a source image and then asked for frames
at arbitrary progress values. ``draw`` never touches engine state, so frames
can be produced in any order, or in parallel, from the same prepared source.

Example:
    config = AnimationConfigBuilder().mode("cool-down").build()
    beam = ElectronBeam(config)
    beam.prepare(load_image(Path("logo.png")))
    frames = [beam.draw(i / 29) for i in range(30)]
"""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from .config import AnimationConfig
from .easing import clamp_unit
from .error_handling import InvalidDimensionsError, NotPreparedError
from .io import resize_pixels, to_rgba_array
from .modes import render

logger = logging.getLogger(__name__)


class ElectronBeam:
    """Owns the prepared source and renders frames from it."""

    def __init__(self, config: AnimationConfig | None = None):
        self._config = config or AnimationConfig()
        self._source: np.ndarray | None = None

    @property
    def config(self) -> AnimationConfig:
        return self._config

    @property
    def is_prepared(self) -> bool:
        return self._source is not None

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)`` of the frames ``draw`` returns."""
        if self._source is None:
            raise NotPreparedError()
        height, width = self._source.shape[:2]
        return width, height

    @property
    def source(self) -> np.ndarray:
        """The prepared, read-only source buffer."""
        if self._source is None:
            raise NotPreparedError()
        return self._source

    def prepare(self, image: Image.Image | np.ndarray) -> None:
        """Validate *image*, resize it to the output size and keep it.

        Args:
            image: Pillow image or (H, W, 3|4) uint8 array

        Raises:
            InvalidDimensionsError: If the image is empty or a configured
                dimension is not positive
            ResizeFailedError: If resampling to the output size fails
        """
        pixels = to_rgba_array(image)
        src_height, src_width = pixels.shape[:2]
        if src_width == 0 or src_height == 0:
            raise InvalidDimensionsError(
                f"Source image is empty ({src_width}x{src_height})"
            )

        width = self._config.width if self._config.width is not None else src_width
        height = self._config.height if self._config.height is not None else src_height
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(
                f"Output dimensions must be positive, got {width}x{height}",
                context={"width": width, "height": height},
            )

        if (width, height) != (src_width, src_height):
            logger.info(
                f"Resizing source from {src_width}x{src_height} to {width}x{height}"
            )
            pixels = resize_pixels(pixels, width, height)

        # transparent pixels carry no colour into the additive sums
        pixels = pixels.copy()
        pixels[pixels[..., 3] == 0] = 0
        pixels.flags.writeable = False

        self._source = pixels
        logger.debug(f"Prepared {width}x{height} source for {self._config.mode.value}")

    def draw(self, progress: float) -> np.ndarray:
        """Render the frame at *progress*.

        Out-of-range progress is clamped into [0, 1]. With ``reverse`` set
        the timeline runs from 1 to 0.

        Returns:
            New (H, W, 4) uint8 RGBA frame owned by the caller

        Raises:
            NotPreparedError: If ``prepare`` has not succeeded yet
        """
        if self._source is None:
            raise NotPreparedError()

        level = clamp_unit(float(progress))
        if self._config.reverse:
            level = 1.0 - level

        return render(self._config.mode, self._source, level, self._config)

    def reset(self) -> None:
        """Drop the prepared source; ``draw`` fails until ``prepare`` again."""
        self._source = None
