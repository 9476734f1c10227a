"""Tests for the sample image generator."""

import numpy as np
import pytest
from PIL import Image

from electronbeam.samples import DEFAULT_SAMPLE_SPECS, SampleImageGenerator, SampleImageSpec


class TestSampleImageGenerator:
    """Tests for SampleImageGenerator."""

    @pytest.mark.parametrize("spec", DEFAULT_SAMPLE_SPECS, ids=lambda s: s.content_type)
    def test_create_image(self, spec):
        img = SampleImageGenerator().create_image(spec.content_type, spec.size)
        assert img.size == spec.size
        assert img.mode == "RGBA"
        pixels = np.array(img)
        assert np.all(pixels[..., 3] == 255)
        assert pixels[..., :3].std() > 0

    def test_unknown_content_type(self):
        with pytest.raises(ValueError, match="Unknown content type"):
            SampleImageGenerator().create_image("noise", (10, 10))

    def test_generate_default_set(self, tmp_path):
        paths = SampleImageGenerator().generate(tmp_path)

        assert [p.name for p in paths] == ["test_gradient.png", "test_retro.png", "test_logo.png"]
        for path, spec in zip(paths, DEFAULT_SAMPLE_SPECS):
            with Image.open(path) as img:
                assert img.size == spec.size

    def test_custom_specs(self, tmp_path):
        spec = SampleImageSpec("tiny", (8, 6), "retro", "Small retro pattern")
        paths = SampleImageGenerator([spec]).generate(tmp_path / "out")
        assert paths == [tmp_path / "out" / "tiny.png"]
