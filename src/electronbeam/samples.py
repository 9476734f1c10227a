"""Sample source images for trying out the animations.

Three synthetic pictures exercise different parts of the effect: a smooth
colour gradient (shows the channel fringing), a retro ring pattern with
scanlines (shows the additive build-up) and a dark logo (shows the beam
highlight against a mostly dark screen).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from .io import ensure_directories

logger = logging.getLogger(__name__)


@dataclass
class SampleImageSpec:
    """Specification for a sample image."""

    name: str
    size: tuple[int, int]
    content_type: str
    description: str

    @property
    def filename(self) -> str:
        return f"{self.name}.png"


DEFAULT_SAMPLE_SPECS: list[SampleImageSpec] = [
    SampleImageSpec(
        "test_gradient", (640, 480), "gradient", "Colour gradient with sine-wave bands"
    ),
    SampleImageSpec(
        "test_retro", (320, 240), "retro", "Concentric rings with radial pattern and scanlines"
    ),
    SampleImageSpec(
        "test_logo", (400, 300), "logo", "Stylised letter E with glow on a dark screen"
    ),
]

RING_COLORS = np.array(
    [(255, 80, 80), (80, 255, 80), (80, 80, 255), (255, 255, 80)], dtype=np.float32
)


def _opaque(rgb: np.ndarray) -> Image.Image:
    height, width = rgb.shape[:2]
    alpha = np.full((height, width, 1), 255, dtype=np.uint8)
    return Image.fromarray(np.concatenate([rgb.astype(np.uint8), alpha], axis=2))


class SampleImageGenerator:
    """Generator for the synthetic sample images."""

    def __init__(self, specs: list[SampleImageSpec] | None = None):
        self.specs = specs if specs is not None else list(DEFAULT_SAMPLE_SPECS)

    def create_image(self, content_type: str, size: tuple[int, int]) -> Image.Image:
        """Create an image based on content type.

        Args:
            content_type: One of ``gradient``, ``retro`` or ``logo``
            size: Image dimensions (width, height)

        Returns:
            Generated RGBA Pillow image
        """
        generators = {
            "gradient": self._create_gradient,
            "retro": self._create_retro,
            "logo": self._create_logo,
        }
        if content_type not in generators:
            raise ValueError(
                f"Unknown content type '{content_type}', expected one of {sorted(generators)}"
            )
        return generators[content_type](size)

    def generate(self, output_dir: Path) -> list[Path]:
        """Write every configured sample into *output_dir*."""
        ensure_directories(output_dir)
        paths = []
        for spec in self.specs:
            path = output_dir / spec.filename
            self.create_image(spec.content_type, spec.size).save(path)
            logger.info(f"Created {spec.content_type} image: {path}")
            paths.append(path)
        return paths

    def _create_gradient(self, size: tuple[int, int]) -> Image.Image:
        width, height = size
        y, x = np.mgrid[0:height, 0:width].astype(np.float32)

        red = np.floor(255.0 * x / width)
        green = np.floor(255.0 * y / height)
        blue = np.floor(255.0 * (x + y) / (width + height))

        wave_x = np.sin(2.0 * np.pi * x / width * 4.0)
        wave_y = np.sin(2.0 * np.pi * y / height * 3.0)
        intensity = ((wave_x + wave_y) * 0.5 + 1.0) * 0.5
        factor = 0.7 + 0.3 * intensity

        rgb = np.stack([red, green, blue], axis=-1) * factor[..., np.newaxis]
        return _opaque(np.clip(rgb, 0, 255))

    def _create_retro(self, size: tuple[int, int]) -> Image.Image:
        width, height = size
        y, x = np.mgrid[0:height, 0:width].astype(np.float32)
        dx = x - width / 2.0
        dy = y - height / 2.0
        distance = np.sqrt(dx * dx + dy * dy)
        angle = np.arctan2(dy, dx)

        ring = (distance / 15.0).astype(np.int64) % len(RING_COLORS)
        base = RING_COLORS[ring]

        radial = (np.sin(angle * 8.0) * 0.5 + 1.0) * 0.5
        scanline = np.where(y.astype(np.int64) % 3 == 0, 0.6, 1.0)

        rgb = base * (radial * scanline)[..., np.newaxis]
        return _opaque(np.clip(rgb, 0, 255))

    def _create_logo(self, size: tuple[int, int]) -> Image.Image:
        width, height = size
        rgb = np.empty((height, width, 3), dtype=np.float32)
        rgb[...] = (20, 20, 40)

        cx, cy = width // 2, height // 2
        stroke, letter_w, letter_h = 10, 80, 100
        top = cy - letter_h // 2
        left = cx - letter_w // 2

        # vertical bar fades from bright to dim cyan
        ramp = np.arange(letter_h, dtype=np.float32) / letter_h
        bar = np.stack([np.zeros_like(ramp), 255 - 75 * ramp, 255 - 75 * ramp], axis=-1)
        rgb[top : top + letter_h, left : left + stroke] = bar[:, np.newaxis, :]

        cyan = (0, 255, 255)
        rgb[top : top + stroke, left : cx + letter_w // 3 * 2] = cyan
        rgb[cy - stroke // 2 : cy + stroke // 2, left : cx + letter_w // 4] = cyan
        rgb[top + letter_h - stroke : top + letter_h, left : cx + letter_w // 3 * 2] = cyan

        # soft glow around the letter centre
        y, x = np.mgrid[0:height, 0:width].astype(np.float32)
        distance = np.sqrt((x - cx) ** 2 + (y - cy) ** 2)
        glow = (1.0 - np.minimum(distance / 25.0, 1.0)) * 0.2
        rgb += np.floor(np.array([30.0, 60.0, 60.0]) * glow[..., np.newaxis])

        img = _opaque(np.clip(rgb, 0, 255))
        draw = ImageDraw.Draw(img)
        dot_color = (100, 100, 200, 255)
        for i in range(5):
            for dot_x, dot_y in ((20 + i * 15, 20), (width - 80 + i * 15, height - 30)):
                draw.ellipse((dot_x - 3, dot_y - 3, dot_x + 3, dot_y + 3), fill=dot_color)
        for line_y in range(50, max(height - 50, 50), 8):
            draw.point([(10, line_y), (width - 11, line_y)], fill=(60, 60, 120, 255))
        return img
