"""Geometric primitives: where each source row or column lands on screen.

Collapses are expressed as forward index maps. Entry ``i`` of a map is the
destination row (or column) that source row ``i`` is deflected onto, so
several source lines can pile up on one destination line. Summing them is
the compositor's job.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .easing import clamp_unit

ChannelMaps = tuple[np.ndarray, np.ndarray, np.ndarray]

# Exponents applied to the phase progress per colour channel (R, G, B).
# Red leads the collapse, blue trails it, all agree at 0 and 1.
DEFAULT_CHANNEL_SKEW: tuple[float, float, float] = (0.5, 1.0, 2.0)


@dataclass(frozen=True)
class ScaledRect:
    """Placement of a uniformly scaled image inside the frame."""

    width: int
    height: int
    offset_x: int
    offset_y: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def collapse_map(length: int, amount: float) -> np.ndarray:
    """Forward map squeezing ``length`` lines toward the centre line.

    Args:
        length: Number of rows or columns
        amount: 0.0 keeps every line in place, 1.0 puts them all on the centre

    Returns:
        Integer array of destination indices, one per source line
    """
    amount = clamp_unit(amount)
    centre = length / 2.0
    # sample at pixel centres so amount == 0 is an exact identity
    positions = np.arange(length, dtype=np.float64) + 0.5
    dest = np.floor(centre + (positions - centre) * (1.0 - amount))
    return np.clip(dest, 0, max(length - 1, 0)).astype(np.intp)


def channel_progress(
    local_t: float, skew: tuple[float, float, float] = DEFAULT_CHANNEL_SKEW
) -> tuple[float, float, float]:
    """Split one phase progress into per-channel progress values."""
    t = clamp_unit(local_t)
    red, green, blue = (t**exponent for exponent in skew)
    return red, green, blue


def vertical_collapse(
    height: int, amounts: tuple[float, float, float]
) -> ChannelMaps:
    """Row maps for the vertical collapse, one per colour channel."""
    red, green, blue = (collapse_map(height, amount) for amount in amounts)
    return red, green, blue


def horizontal_collapse(width: int, amount: float) -> ChannelMaps:
    """Column maps for the horizontal collapse; channels move in unison."""
    columns = collapse_map(width, amount)
    return columns, columns, columns


def scaled_rect(width: int, height: int, scale: float) -> ScaledRect:
    """Centre a ``scale``-sized copy of a ``width`` x ``height`` frame."""
    scale = clamp_unit(scale)
    new_width = int(width * scale)
    new_height = int(height * scale)
    return ScaledRect(
        width=new_width,
        height=new_height,
        offset_x=(width - new_width) // 2,
        offset_y=(height - new_height) // 2,
    )
