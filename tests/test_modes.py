"""Tests for electronbeam.modes module."""

import numpy as np
import pytest

from electronbeam import AnimationConfig, InvalidModeError
from electronbeam.compositor import BLACK
from electronbeam.modes import (
    RENDERERS,
    AnimationMode,
    render,
    render_cool_down,
    render_fade,
    render_scale_down,
    render_warm_up,
)


class TestAnimationMode:
    """Tests for mode parsing."""

    def test_names(self):
        assert AnimationMode.names() == ["cool-down", "warm-up", "fade", "scale-down"]

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("cool-down", AnimationMode.COOL_DOWN),
            ("WARM-UP", AnimationMode.WARM_UP),
            ("scale_down", AnimationMode.SCALE_DOWN),
            ("  fade ", AnimationMode.FADE),
            (AnimationMode.FADE, AnimationMode.FADE),
        ],
    )
    def test_parse(self, value, expected):
        assert AnimationMode.parse(value) is expected

    def test_parse_unknown_mode(self):
        with pytest.raises(InvalidModeError, match="Invalid animation mode: sparkle") as exc_info:
            AnimationMode.parse("sparkle")
        assert exc_info.value.context["valid_modes"] == AnimationMode.names()

    def test_every_mode_has_a_renderer(self):
        assert set(RENDERERS) == set(AnimationMode)


class TestRenderFunctions:
    """Direct tests of the per-mode render functions."""

    def test_dispatch(self, gradient_source):
        config = AnimationConfig()
        for mode, renderer in RENDERERS.items():
            expected = renderer(gradient_source, 0.4, config)
            assert np.array_equal(render(mode, gradient_source, 0.4, config), expected)

    def test_warm_up_mirrors_cool_down(self, gradient_source):
        config = AnimationConfig()
        assert np.array_equal(
            render_warm_up(gradient_source, 0.25, config),
            render_cool_down(gradient_source, 0.75, config),
        )

    def test_warm_up_starts_black(self, gradient_source):
        frame = render_warm_up(gradient_source, 0.0, AnimationConfig())
        assert np.all(frame == np.array(BLACK, dtype=np.uint8))

    def test_fade_keeps_geometry(self, gradient_source):
        frame = render_fade(gradient_source, 0.25, AnimationConfig())
        expected = (gradient_source[..., :3].astype(np.float32) * 0.75).astype(np.uint8)
        assert np.array_equal(frame[..., :3], expected)
        assert np.all(frame[..., 3] == 255)

    def test_scale_down_corners_go_black(self, warm_source):
        frame = render_scale_down(warm_source, 0.5, AnimationConfig())
        black = np.array(BLACK, dtype=np.uint8)
        for row, col in ((0, 0), (0, -1), (-1, 0), (-1, -1)):
            assert np.array_equal(frame[row, col], black)
        assert frame[5, 6, 0] > 0

    def test_cool_down_vertical_phase_only_moves_rows(self, warm_source):
        frame = render_cool_down(warm_source, 0.25, AnimationConfig())
        # every column sees the same rows because the collapse is vertical
        assert np.all(frame == frame[:, :1, :])
