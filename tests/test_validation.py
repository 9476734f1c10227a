"""Tests for command-line input validation."""

import multiprocessing

import pytest

from electronbeam.error_handling import ElectronBeamError, ValidationError
from electronbeam.validation import (
    validate_frame_settings,
    validate_input_image,
    validate_output_path,
    validate_path_security,
    validate_stretch,
    validate_worker_count,
)


class TestValidatePathSecurity:
    """Tests for validate_path_security function."""

    def test_valid_path(self, tmp_path):
        assert validate_path_security(tmp_path / "a.png") == tmp_path / "a.png"

    def test_empty_path(self):
        with pytest.raises(ValidationError, match="Path cannot be empty"):
            validate_path_security("")

    def test_null_byte(self):
        with pytest.raises(ValidationError, match="null bytes"):
            validate_path_security("image\x00.png")

    def test_too_long(self):
        with pytest.raises(ValidationError, match="Path too long"):
            validate_path_security("a" * 5000)


class TestValidateInputImage:
    """Tests for validate_input_image function."""

    def test_existing_image(self, sample_png):
        assert validate_input_image(sample_png) == sample_png

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Input file does not exist"):
            validate_input_image(tmp_path / "nope.png")

    def test_directory(self, tmp_path):
        with pytest.raises(ValidationError, match="Input path is not a file"):
            validate_input_image(tmp_path)

    def test_unknown_extension_warns(self, tmp_path, caplog):
        path = tmp_path / "picture.xyz"
        path.write_bytes(b"")
        assert validate_input_image(path) == path
        assert "Unrecognised image extension" in caplog.text


class TestValidateOutputPath:
    """Tests for validate_output_path function."""

    def test_existing_parent(self, tmp_path):
        assert validate_output_path(tmp_path / "out.gif") == tmp_path / "out.gif"

    def test_creates_parent(self, tmp_path):
        output = tmp_path / "new" / "out.gif"
        validate_output_path(output)
        assert output.parent.is_dir()

    def test_missing_parent_without_create(self, tmp_path):
        with pytest.raises(ValidationError, match="Parent directory does not exist"):
            validate_output_path(tmp_path / "new" / "out.gif", create_parent=False)


class TestValidateNumbers:
    """Tests for the numeric option checks."""

    def test_frame_settings(self):
        assert validate_frame_settings(30, 100) == (30, 100)

    def test_zero_frames(self):
        with pytest.raises(ValidationError, match="Frame count must be greater than 0"):
            validate_frame_settings(0, 100)

    def test_zero_duration(self):
        with pytest.raises(ValidationError, match="Frame duration must be greater than 0"):
            validate_frame_settings(10, 0)

    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0])
    def test_stretch_in_range(self, value):
        assert validate_stretch("Vertical stretch", value) == value

    @pytest.mark.parametrize("value", [-0.01, 1.5, float("nan")])
    def test_stretch_out_of_range(self, value):
        with pytest.raises(ValidationError, match="Vertical stretch duration must be between"):
            validate_stretch("Vertical stretch", value)

    def test_worker_count(self):
        assert validate_worker_count(0) == 0
        assert validate_worker_count(2) == 2

    def test_negative_workers(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            validate_worker_count(-1)

    def test_too_many_workers(self):
        with pytest.raises(ValidationError, match="too high"):
            validate_worker_count(multiprocessing.cpu_count() * 4 + 1)

    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)
        assert issubclass(ValidationError, ElectronBeamError)
