import numpy as np
import pytest
from PIL import Image as _PILImage

from electronbeam import AnimationConfigBuilder, ElectronBeam

# ---------------------------------------------------------------------------
# Small in-memory sources; every test works on a few pixels so the whole
# suite stays fast.
# ---------------------------------------------------------------------------


def _solid(width: int, height: int, color: tuple[int, int, int, int]) -> np.ndarray:
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[...] = color
    return pixels


@pytest.fixture
def solid_red() -> np.ndarray:
    """4x4 opaque red source."""
    return _solid(4, 4, (255, 0, 0, 255))


@pytest.fixture
def warm_source() -> np.ndarray:
    """12x10 opaque source with no black pixels."""
    return _solid(12, 10, (200, 100, 50, 255))


@pytest.fixture
def gradient_source() -> np.ndarray:
    """16x12 opaque colour gradient."""
    y, x = np.mgrid[0:12, 0:16]
    pixels = np.empty((12, 16, 4), dtype=np.uint8)
    pixels[..., 0] = (x * 16).astype(np.uint8)
    pixels[..., 1] = (y * 20).astype(np.uint8)
    pixels[..., 2] = ((x + y) * 9).astype(np.uint8)
    pixels[..., 3] = 255
    return pixels


@pytest.fixture
def make_beam():
    """Factory returning a prepared engine for a source and builder options."""

    def _make(source: np.ndarray, mode: str = "cool-down", v: float = 0.5, h: float = 0.5,
              reverse: bool = False, frames: int = 10) -> ElectronBeam:
        config = (
            AnimationConfigBuilder()
            .mode(mode)
            .stretch_durations(v, h)
            .reverse(reverse)
            .frames(frames)
            .build()
        )
        beam = ElectronBeam(config)
        beam.prepare(source)
        return beam

    return _make


@pytest.fixture
def sample_png(tmp_path):
    """A small PNG on disk for I/O and CLI tests."""
    path = tmp_path / "source.png"
    y, x = np.mgrid[0:12, 0:16]
    rgb = np.stack([x * 16, y * 20, (x + y) * 9], axis=-1).astype(np.uint8)
    _PILImage.fromarray(rgb).save(path)
    return path
