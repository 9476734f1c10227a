"""Sigmoid easing used to shape the beam's collapse over time.

A linear timeline makes the collapse look mechanical. Real CRT beams snap:
slow to start, fast through the middle, slow to settle. The logistic curve
below is normalised so that its end points land exactly on 0 and 1.
"""

from __future__ import annotations

import math

DEFAULT_STEEPNESS: float = 8.0


def clamp_unit(value: float) -> float:
    """Clamp *value* into [0, 1]; NaN maps to 0."""
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


def sigmoid(x: float, steepness: float) -> float:
    """Logistic function ``1 / (1 + e^(-x*s))``."""
    return 1.0 / (1.0 + math.exp(-x * steepness))


def ease(t: float, steepness: float = DEFAULT_STEEPNESS) -> float:
    """Map linear progress *t* onto an S-shaped curve.

    Args:
        t: Linear progress, clamped into [0, 1]
        steepness: Slope of the logistic curve; larger values snap harder

    Returns:
        Eased progress in [0, 1] with ``ease(0) == 0``, ``ease(0.5) == 0.5``
        and ``ease(1) == 1``

    Raises:
        ValueError: If steepness is not positive
    """
    if not steepness > 0:
        raise ValueError(f"steepness must be positive, got {steepness}")

    t = clamp_unit(t)
    if t == 0.0:
        return 0.0
    if t == 1.0:
        return 1.0

    y = sigmoid(t - 0.5, steepness) - 0.5
    span = sigmoid(0.5, steepness) - 0.5
    return clamp_unit(y / span * 0.5 + 0.5)
