"""Phase scheduling for the collapse animation.

The cool-down effect is two sub-effects played back to back: the image
first squeezes vertically into a bright horizontal band, then the band
shrinks horizontally into a dot. The two stretch fractions say how much of
the timeline each sub-effect gets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .easing import DEFAULT_STEEPNESS, clamp_unit, ease


class Phase(Enum):
    """Active sub-effect at a given progress."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    DONE = "done"


@dataclass(frozen=True)
class PhaseState:
    """Phase plus the eased progress within it."""

    phase: Phase
    local_t: float


def effective_fractions(v_fraction: float, h_fraction: float) -> tuple[float, float]:
    """Return ``(v, h)`` with ``h`` clamped so that ``v + h <= 1``."""
    v = clamp_unit(v_fraction)
    h = min(clamp_unit(h_fraction), 1.0 - v)
    return v, h


def schedule(
    progress: float,
    v_fraction: float,
    h_fraction: float,
    steepness: float = DEFAULT_STEEPNESS,
) -> PhaseState:
    """Work out which sub-effect is active at *progress*.

    Args:
        progress: Global progress in [0, 1]
        v_fraction: Share of the timeline spent on the vertical collapse
        h_fraction: Share of the timeline spent on the horizontal collapse
        steepness: Easing steepness applied to the local progress

    Returns:
        PhaseState for the progress value
    """
    p = clamp_unit(progress)
    v, h = effective_fractions(v_fraction, h_fraction)

    if v > 0.0 and p <= v:
        return PhaseState(Phase.VERTICAL, ease(p / v, steepness))

    if p <= v + h:
        if h == 0.0:
            # zero-length phase is already over
            return PhaseState(Phase.HORIZONTAL, 1.0)
        return PhaseState(Phase.HORIZONTAL, ease((p - v) / h, steepness))

    return PhaseState(Phase.DONE, 1.0)
