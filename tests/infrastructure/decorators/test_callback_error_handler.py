"""Tests for the callback error logging decorator."""

import logging

import pytest

from orm_doubles import ManualScheduler, create_model_double
from orm_doubles.infrastructure.decorators import log_callback_errors


class TestLogCallbackErrors:
    """Test callback error decorator."""

    def test_successful_execution(self):
        """Test decorator passes through the return value."""

        @log_callback_errors("save")
        def on_saved(err, result):
            return result

        assert on_saved(None, "ok") == "ok"

    def test_exception_logged_and_reraised(self, caplog):
        """Test exceptions are logged then re-raised."""

        @log_callback_errors("save")
        def on_saved(err, result):
            raise ValueError("bad result")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ValueError):
                on_saved(None, None)

        assert "save callback error" in caplog.text
        assert "bad result" in caplog.text

    def test_no_reraise(self):
        """Test default_return when not re-raising."""

        @log_callback_errors("destroy", reraise=False, default_return=42)
        def on_destroyed(err):
            raise RuntimeError("error")

        assert on_destroyed(None) == 42

    def test_custom_logger(self, caplog):
        """Test using a custom logger."""
        custom_logger = logging.getLogger("custom")

        @log_callback_errors("exec", logger=custom_logger, reraise=False)
        def on_found(err, rows):
            raise ValueError("error")

        with caplog.at_level(logging.ERROR):
            on_found(None, [])

        assert "custom" in caplog.text

    def test_preserves_arguments(self):
        """Test decorator forwards positional and keyword arguments."""

        @log_callback_errors("exec")
        def on_found(a, b, c=None):
            return f"{a}-{b}-{c}"

        assert on_found("x", "y", c="z") == "x-y-z"

    @pytest.mark.asyncio
    async def test_async_callback(self, caplog):
        """Test coroutine callbacks are wrapped too."""

        @log_callback_errors("save", reraise=False, default_return="default")
        async def on_saved(err, result):
            raise ValueError("async error")

        with caplog.at_level(logging.ERROR):
            assert await on_saved(None, None) == "default"

        assert "save callback error" in caplog.text

    def test_model_callback_failure(self, caplog):
        """Test a failing save callback is logged when drained."""
        scheduler = ManualScheduler()
        model = create_model_double(scheduler=scheduler)

        def on_saved(err, result):
            assert err == "expected an error"

        model.save(on_saved)
        with caplog.at_level(logging.ERROR):
            with pytest.raises(AssertionError):
                scheduler.run_pending()

        assert "save callback error" in caplog.text
