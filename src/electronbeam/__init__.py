"""ElectronBeam - CRT-style turn-off animations from still images."""

__version__: str = "0.1.0"
__author__: str = "ElectronBeam Team"

from .animator import ElectronBeam
from .config import (
    DEFAULT_RENDER_DEFAULTS,
    AnimationConfig,
    AnimationConfigBuilder,
    RenderDefaults,
)
from .easing import ease
from .error_handling import (
    ConfigurationError,
    ElectronBeamError,
    FrameGenerationError,
    ImageIOError,
    InvalidDimensionsError,
    InvalidModeError,
    InvalidStretchFractionError,
    InvalidTimingError,
    NotPreparedError,
    ResizeFailedError,
    ValidationError,
)
from .io import load_image, save_gif
from .modes import AnimationMode
from .phases import Phase, PhaseState, schedule
from .sequencer import ParallelFrameGenerator, generate_frames, progress_values

__all__ = [
    "DEFAULT_RENDER_DEFAULTS",
    "AnimationConfig",
    "AnimationConfigBuilder",
    "AnimationMode",
    "ConfigurationError",
    "ElectronBeam",
    "ElectronBeamError",
    "FrameGenerationError",
    "ImageIOError",
    "InvalidDimensionsError",
    "InvalidModeError",
    "InvalidStretchFractionError",
    "InvalidTimingError",
    "NotPreparedError",
    "ParallelFrameGenerator",
    "Phase",
    "PhaseState",
    "RenderDefaults",
    "ResizeFailedError",
    "ValidationError",
    "ease",
    "generate_frames",
    "load_image",
    "progress_values",
    "save_gif",
    "schedule",
]
