"""Configuration settings for ElectronBeam."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from .easing import DEFAULT_STEEPNESS
from .error_handling import (
    ConfigurationError,
    InvalidStretchFractionError,
    InvalidTimingError,
    log_warning_with_context,
)
from .geometry import DEFAULT_CHANNEL_SKEW
from .modes import AnimationMode

logger = logging.getLogger(__name__)


@dataclass
class RenderDefaults:
    """Default values used when a setting is not given explicitly."""

    # Output size used when neither the caller nor the source supplies one
    WIDTH: int = 640
    HEIGHT: int = 480

    MODE: AnimationMode = AnimationMode.COOL_DOWN

    # Share of the timeline for each collapse (vertical happens first)
    V_STRETCH: float = 0.5
    H_STRETCH: float = 0.5

    FRAMES: int = 30
    FRAME_DURATION_MS: int = 100

    EASING_STEEPNESS: float = DEFAULT_STEEPNESS
    CHANNEL_SKEW: tuple[float, float, float] = DEFAULT_CHANNEL_SKEW

    def __post_init__(self) -> None:
        if self.WIDTH <= 0 or self.HEIGHT <= 0:
            raise ValueError(
                f"Default size must be positive, got {self.WIDTH}x{self.HEIGHT}"
            )
        for name in ("V_STRETCH", "H_STRETCH"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")
        if self.FRAMES <= 0 or self.FRAME_DURATION_MS <= 0:
            raise ValueError("FRAMES and FRAME_DURATION_MS must be positive")
        if self.EASING_STEEPNESS <= 0:
            raise ValueError("EASING_STEEPNESS must be positive")
        if len(self.CHANNEL_SKEW) != 3 or any(s <= 0 for s in self.CHANNEL_SKEW):
            raise ValueError(
                f"CHANNEL_SKEW needs three positive exponents, got {self.CHANNEL_SKEW}"
            )


DEFAULT_RENDER_DEFAULTS = RenderDefaults()


@dataclass(frozen=True)
class AnimationConfig:
    """Immutable parameters of one animation run.

    ``width`` and ``height`` of ``None`` mean "keep the source size". Frame
    count, duration and looping are read by the frame sequencer and the
    encoder, not by the transform.
    """

    width: int | None = None
    height: int | None = None
    mode: AnimationMode = DEFAULT_RENDER_DEFAULTS.MODE
    v_stretch_fraction: float = DEFAULT_RENDER_DEFAULTS.V_STRETCH
    h_stretch_fraction: float = DEFAULT_RENDER_DEFAULTS.H_STRETCH
    reverse: bool = False
    frame_count: int = DEFAULT_RENDER_DEFAULTS.FRAMES
    frame_duration_ms: int = DEFAULT_RENDER_DEFAULTS.FRAME_DURATION_MS
    loop: bool = False
    easing_steepness: float = DEFAULT_RENDER_DEFAULTS.EASING_STEEPNESS
    channel_skew: tuple[float, float, float] = DEFAULT_RENDER_DEFAULTS.CHANNEL_SKEW

    @property
    def stretch_overlaps(self) -> bool:
        """True when the two stretch fractions add up to more than 1."""
        return self.v_stretch_fraction + self.h_stretch_fraction > 1.0

    def with_dimensions(self, width: int, height: int) -> AnimationConfig:
        return replace(self, width=width, height=height)


def validate_stretch_fraction(name: str, value: float) -> float:
    """Return *value* as float or raise InvalidStretchFractionError."""
    try:
        fraction = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidStretchFractionError(
            f"{name} must be a number, got {value!r}", cause=e
        ) from e
    if math.isnan(fraction) or not 0.0 <= fraction <= 1.0:
        raise InvalidStretchFractionError(
            f"{name} must be between 0.0 and 1.0, got {value}",
            context={name: value},
        )
    return fraction


class AnimationConfigBuilder:
    """Fluent builder for AnimationConfig.

    Example:
        config = (
            AnimationConfigBuilder()
            .dimensions(320, 240)
            .mode("cool-down")
            .stretch_durations(0.3, 0.7)
            .build()
        )
    """

    def __init__(self, defaults: RenderDefaults = DEFAULT_RENDER_DEFAULTS):
        self._defaults = defaults
        self._values: dict = {
            "mode": defaults.MODE,
            "v_stretch_fraction": defaults.V_STRETCH,
            "h_stretch_fraction": defaults.H_STRETCH,
            "frame_count": defaults.FRAMES,
            "frame_duration_ms": defaults.FRAME_DURATION_MS,
            "easing_steepness": defaults.EASING_STEEPNESS,
            "channel_skew": tuple(defaults.CHANNEL_SKEW),
        }

    def dimensions(self, width: int | None, height: int | None) -> AnimationConfigBuilder:
        # size is checked against the source in ElectronBeam.prepare
        self._values["width"] = width
        self._values["height"] = height
        return self

    def mode(self, mode: AnimationMode | str) -> AnimationConfigBuilder:
        self._values["mode"] = AnimationMode.parse(mode)
        return self

    def stretch_durations(self, v_fraction: float, h_fraction: float) -> AnimationConfigBuilder:
        self._values["v_stretch_fraction"] = v_fraction
        self._values["h_stretch_fraction"] = h_fraction
        return self

    def frames(self, count: int) -> AnimationConfigBuilder:
        self._values["frame_count"] = count
        return self

    def duration(self, milliseconds: int) -> AnimationConfigBuilder:
        self._values["frame_duration_ms"] = milliseconds
        return self

    def reverse(self, enabled: bool = True) -> AnimationConfigBuilder:
        self._values["reverse"] = bool(enabled)
        return self

    def looping(self, enabled: bool = True) -> AnimationConfigBuilder:
        self._values["loop"] = bool(enabled)
        return self

    def easing(self, steepness: float) -> AnimationConfigBuilder:
        self._values["easing_steepness"] = steepness
        return self

    def build(self) -> AnimationConfig:
        """Validate the collected options and freeze them.

        Raises:
            InvalidStretchFractionError: If a stretch fraction is outside [0, 1]
            InvalidTimingError: If frame count or duration is not positive
            ConfigurationError: If the easing steepness is not positive
        """
        values = dict(self._values)
        values["v_stretch_fraction"] = validate_stretch_fraction(
            "v_stretch_fraction", values["v_stretch_fraction"]
        )
        values["h_stretch_fraction"] = validate_stretch_fraction(
            "h_stretch_fraction", values["h_stretch_fraction"]
        )

        if int(values["frame_count"]) <= 0:
            raise InvalidTimingError(
                f"Frame count must be greater than 0, got {values['frame_count']}"
            )
        if int(values["frame_duration_ms"]) <= 0:
            raise InvalidTimingError(
                f"Frame duration must be greater than 0, got {values['frame_duration_ms']}"
            )
        values["frame_count"] = int(values["frame_count"])
        values["frame_duration_ms"] = int(values["frame_duration_ms"])

        if not float(values["easing_steepness"]) > 0:
            raise ConfigurationError(
                f"Easing steepness must be positive, got {values['easing_steepness']}"
            )

        config = AnimationConfig(**values)
        if config.stretch_overlaps:
            log_warning_with_context(
                f"Stretch fractions sum to "
                f"{config.v_stretch_fraction + config.h_stretch_fraction:.2f}; "
                f"horizontal phase clamped to {1.0 - config.v_stretch_fraction:.2f}",
                context={
                    "v_stretch_fraction": config.v_stretch_fraction,
                    "h_stretch_fraction": config.h_stretch_fraction,
                },
                logger=logger,
            )
        logger.debug(f"Built animation config: {config}")
        return config
