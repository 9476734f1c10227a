"""Additive colour compositing for the beam effect.

Phosphor brightness builds up where the beam sweeps the same spot several
times, so overlapping contributions are summed and clamped instead of
averaged.

Clamping policy: colour sums are clamped per channel on straight
(non-premultiplied) values. Alpha is summed along each channel's own
geometry and the pixel keeps the largest of the three channel sums, clamped
to 255. Fully transparent source pixels carry zero colour (the animator
normalises them) and zero alpha, so they add nothing to any sum.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .geometry import ChannelMaps, ScaledRect

BLACK: tuple[int, int, int, int] = (0, 0, 0, 255)
MAX_VALUE: float = 255.0


@dataclass(frozen=True)
class Layer:
    """Float working buffer produced between geometry and the final frame.

    Attributes:
        rgb: (H, W, 3) float32 straight colour values
        alpha: (H, W) float32 alpha in 0..255
        coverage: (H, W) bool, True where the beam reached the pixel
    """

    rgb: np.ndarray
    alpha: np.ndarray
    coverage: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return self.alpha.shape  # type: ignore[return-value]


def layer_from_pixels(pixels: np.ndarray) -> Layer:
    """Wrap an (H, W, 4) uint8 buffer as a fully covered layer."""
    return Layer(
        rgb=pixels[..., :3].astype(np.float32),
        alpha=pixels[..., 3].astype(np.float32),
        coverage=np.ones(pixels.shape[:2], dtype=bool),
    )


def _scatter_add(values: np.ndarray, index_map: np.ndarray, axis: int) -> np.ndarray:
    """Sum slices of *values* along *axis* into the slots named by *index_map*."""
    moved = np.moveaxis(values, axis, 0)
    out = np.zeros_like(moved)
    np.add.at(out, index_map, moved)
    return np.moveaxis(out, 0, axis)


def accumulate(layer: Layer, maps: ChannelMaps, axis: int) -> Layer:
    """Deflect every line of *layer* along *axis* and blend additively.

    Args:
        layer: Input layer
        maps: Destination index maps for the red, green and blue channels
        axis: 0 to move rows, 1 to move columns

    Returns:
        New layer with clamped channel sums
    """
    rgb = np.empty_like(layer.rgb)
    alpha_sums = []
    coverage = np.zeros(layer.shape, dtype=bool)
    hits = layer.coverage.astype(np.int32)

    for channel, index_map in enumerate(maps):
        rgb[..., channel] = _scatter_add(layer.rgb[..., channel], index_map, axis)
        alpha_sums.append(_scatter_add(layer.alpha, index_map, axis))
        coverage |= _scatter_add(hits, index_map, axis) > 0

    alpha = np.maximum.reduce(alpha_sums)
    return Layer(
        rgb=np.minimum(rgb, MAX_VALUE),
        alpha=np.minimum(alpha, MAX_VALUE),
        coverage=coverage,
    )


def add_highlight(layer: Layer, intensity: float) -> Layer:
    """Add a white glow of *intensity* (0..1) to every covered pixel."""
    if intensity <= 0.0:
        return layer
    glow = np.float32(MAX_VALUE * intensity)
    mask = layer.coverage
    rgb = layer.rgb.copy()
    rgb[mask] = np.minimum(rgb[mask] + glow, MAX_VALUE)
    alpha = layer.alpha.copy()
    alpha[mask] = np.maximum(alpha[mask], glow)
    return Layer(rgb=rgb, alpha=alpha, coverage=mask)


def dim(layer: Layer, factor: float) -> Layer:
    """Scale colour intensity by *factor*, leaving alpha untouched."""
    return Layer(
        rgb=layer.rgb * np.float32(factor), alpha=layer.alpha, coverage=layer.coverage
    )


def place(layer: Layer, rect: ScaledRect, size: tuple[int, int]) -> Layer:
    """Paste *layer* into an empty ``(width, height)`` canvas at *rect*."""
    width, height = size
    rgb = np.zeros((height, width, 3), dtype=np.float32)
    alpha = np.zeros((height, width), dtype=np.float32)
    coverage = np.zeros((height, width), dtype=bool)
    if not rect.is_empty:
        rows = slice(rect.offset_y, rect.offset_y + rect.height)
        cols = slice(rect.offset_x, rect.offset_x + rect.width)
        rgb[rows, cols] = layer.rgb
        alpha[rows, cols] = layer.alpha
        coverage[rows, cols] = layer.coverage
    return Layer(rgb=rgb, alpha=alpha, coverage=coverage)


def blank_frame(
    width: int, height: int, background: tuple[int, int, int, int] = BLACK
) -> np.ndarray:
    """A frame filled with *background*."""
    frame = np.empty((height, width, 4), dtype=np.uint8)
    frame[...] = background
    return frame


def flatten(layer: Layer, background: tuple[int, int, int, int] = BLACK) -> np.ndarray:
    """Quantise *layer* to uint8 RGBA; uncovered pixels show *background*."""
    height, width = layer.shape
    frame = blank_frame(width, height, background)
    mask = layer.coverage
    frame[mask, :3] = np.clip(layer.rgb[mask], 0.0, MAX_VALUE).astype(np.uint8)
    frame[mask, 3] = np.clip(layer.alpha[mask], 0.0, MAX_VALUE).astype(np.uint8)
    return frame


def composite_over(
    layer: Layer, opacity: float, background: tuple[int, int, int, int] = BLACK
) -> np.ndarray:
    """Blend *layer* at *opacity* over *background* ("source over").

    Used for the opacity-only effects, where the image fades into the
    background rather than glowing.
    """
    height, width = layer.shape
    bg = np.asarray(background, dtype=np.float32)
    weight = (layer.alpha / MAX_VALUE) * np.float32(opacity)
    weight = np.where(layer.coverage, weight, np.float32(0.0))[..., np.newaxis]

    rgb = layer.rgb * weight + bg[:3] * (1.0 - weight)
    alpha = MAX_VALUE * weight[..., 0] + bg[3] * (1.0 - weight[..., 0])

    frame = np.empty((height, width, 4), dtype=np.uint8)
    frame[..., :3] = np.clip(rgb, 0.0, MAX_VALUE).astype(np.uint8)
    frame[..., 3] = np.clip(alpha, 0.0, MAX_VALUE).astype(np.uint8)
    return frame
