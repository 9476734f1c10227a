"""Tests for electronbeam.error_handling module."""

import logging

import pytest

from electronbeam.error_handling import (
    ElectronBeamError,
    ErrorLevel,
    ImageIOError,
    NotPreparedError,
    ResizeFailedError,
    error_context,
    handle_error,
    log_warning_with_context,
)


class TestElectronBeamError:
    """Tests for the base exception."""

    def test_message_and_context(self):
        error = ElectronBeamError("broken", context={"frame": 3})
        assert str(error) == "broken"
        assert error.context == {"frame": 3}
        assert error.cause is None

    def test_cause_in_message(self):
        error = ElectronBeamError("broken", cause=OSError("disk full"))
        assert str(error) == "broken (caused by: disk full)"

    def test_not_prepared_default_message(self):
        assert str(NotPreparedError()) == "Animation not prepared"


class TestHandleError:
    """Tests for handle_error."""

    def test_reraises_transformed(self):
        original = OSError("no such file")
        with pytest.raises(ImageIOError, match="Failed to read image") as exc_info:
            handle_error(original, "read image", context={"path": "a.png"})

        error = exc_info.value
        assert error.cause is original
        assert error.__cause__ is original
        assert error.context["path"] == "a.png"
        assert error.context["original_error_type"] == "OSError"

    def test_returns_without_reraise(self):
        error = handle_error(
            ValueError("bad"),
            "resize image",
            ResizeFailedError,
            level=ErrorLevel.WARNING,
            reraise=False,
        )
        assert isinstance(error, ResizeFailedError)

    def test_logs_at_requested_level(self, caplog):
        logger = logging.getLogger("electronbeam.test")
        with caplog.at_level(logging.WARNING, logger="electronbeam.test"):
            handle_error(
                ValueError("bad"), "resize image", level=ErrorLevel.WARNING,
                logger=logger, reraise=False,
            )
        assert caplog.records[0].levelno == logging.WARNING
        assert "Resize image failed: bad" in caplog.records[0].getMessage()


class TestErrorContext:
    """Tests for error_context."""

    def test_wraps_foreign_exceptions(self):
        with pytest.raises(ResizeFailedError):
            with error_context("resize image", ResizeFailedError):
                raise ValueError("bad size")

    def test_passes_library_errors_through(self):
        with pytest.raises(NotPreparedError):
            with error_context("draw frame", ImageIOError):
                raise NotPreparedError()

    def test_no_error(self):
        with error_context("noop"):
            value = 1
        assert value == 1


def test_log_warning_with_context(caplog):
    with caplog.at_level(logging.WARNING):
        log_warning_with_context("Slow frame", {"frame": 7})
    assert "Slow frame (context: frame=7)" in caplog.text
