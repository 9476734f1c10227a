"""The four animation variants and their render functions.

Each mode is a pure function ``(source, progress, config) -> frame`` over
the shared geometry and compositor primitives. Dispatch is a plain lookup
on the mode tag.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from .compositor import (
    Layer,
    accumulate,
    add_highlight,
    blank_frame,
    composite_over,
    dim,
    flatten,
    layer_from_pixels,
    place,
)
from .easing import ease
from .error_handling import InvalidModeError
from .geometry import (
    channel_progress,
    horizontal_collapse,
    scaled_rect,
    vertical_collapse,
)
from .io import resize_pixels
from .phases import Phase, schedule

if TYPE_CHECKING:
    from .config import AnimationConfig

# Brightness lost by the horizontal line as it shrinks to a dot
LINE_DIMMING: float = 0.75

# Extra dimming applied on top of the shrink in scale-down mode
SCALE_DIMMING: float = 0.5


class AnimationMode(Enum):
    """Animation variants; values are the names used on the command line."""

    COOL_DOWN = "cool-down"
    WARM_UP = "warm-up"
    FADE = "fade"
    SCALE_DOWN = "scale-down"

    @classmethod
    def parse(cls, value: str | AnimationMode) -> AnimationMode:
        """Look up a mode by its CLI name (``cool-down``) or enum name."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-")
        for mode in cls:
            if mode.value == key:
                return mode
        raise InvalidModeError(
            f"Invalid animation mode: {value}",
            context={"valid_modes": cls.names()},
        )

    @classmethod
    def names(cls) -> list[str]:
        return [mode.value for mode in cls]


def _vertical_layer(source: np.ndarray, local_t: float, config: AnimationConfig) -> Layer:
    amounts = channel_progress(local_t, config.channel_skew)
    rows = vertical_collapse(source.shape[0], amounts)
    layer = accumulate(layer_from_pixels(source), rows, axis=0)
    # the beam glows white as it flattens, tracking the green channel
    return add_highlight(layer, amounts[1])


def _horizontal_layer(source: np.ndarray, local_t: float, config: AnimationConfig) -> Layer:
    band = _vertical_layer(source, 1.0, config)
    columns = horizontal_collapse(source.shape[1], local_t)
    layer = accumulate(band, columns, axis=1)
    return dim(layer, 1.0 - LINE_DIMMING * local_t)


def render_cool_down(
    source: np.ndarray, progress: float, config: AnimationConfig
) -> np.ndarray:
    """Vertical squeeze into a glowing band, then horizontal squeeze to black."""
    height, width = source.shape[:2]
    state = schedule(
        progress,
        config.v_stretch_fraction,
        config.h_stretch_fraction,
        config.easing_steepness,
    )

    if state.phase is Phase.VERTICAL:
        return flatten(_vertical_layer(source, state.local_t, config))
    if state.phase is Phase.HORIZONTAL and state.local_t < 1.0:
        return flatten(_horizontal_layer(source, state.local_t, config))
    return blank_frame(width, height)


def render_warm_up(
    source: np.ndarray, progress: float, config: AnimationConfig
) -> np.ndarray:
    """Cool-down played backwards."""
    return render_cool_down(source, 1.0 - progress, config)


def render_fade(source: np.ndarray, progress: float, config: AnimationConfig) -> np.ndarray:
    """Linear fade to the background."""
    return composite_over(layer_from_pixels(source), 1.0 - progress)


def render_scale_down(
    source: np.ndarray, progress: float, config: AnimationConfig
) -> np.ndarray:
    """Shrink toward the centre while dimming."""
    height, width = source.shape[:2]
    curved = ease(progress, config.easing_steepness)
    scale = 1.0 - curved
    rect = scaled_rect(width, height, scale)
    if rect.is_empty:
        return blank_frame(width, height)

    if (rect.width, rect.height) == (width, height):
        scaled = source
    else:
        scaled = resize_pixels(source, rect.width, rect.height)

    layer = place(layer_from_pixels(scaled), rect, (width, height))
    return composite_over(layer, scale * (1.0 - SCALE_DIMMING * curved))


Renderer = Callable[[np.ndarray, float, "AnimationConfig"], np.ndarray]

RENDERERS: dict[AnimationMode, Renderer] = {
    AnimationMode.COOL_DOWN: render_cool_down,
    AnimationMode.WARM_UP: render_warm_up,
    AnimationMode.FADE: render_fade,
    AnimationMode.SCALE_DOWN: render_scale_down,
}


def render(
    mode: AnimationMode, source: np.ndarray, progress: float, config: AnimationConfig
) -> np.ndarray:
    """Render one frame of *mode* at canonical *progress*."""
    return RENDERERS[mode](source, progress, config)
