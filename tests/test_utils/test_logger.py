from __future__ import annotations

import io
import logging
import pytest
from typing import Generator
from unittest.mock import MagicMock, patch

import relver.utils.logger as logger_module
from relver.utils.logger import (
    ColoredFormatter,
    get_logger,
    is_logging_configured,
    setup_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the ``relver`` logger and configuration flag around a test."""
    root_logger = logging.getLogger("relver")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False


@pytest.fixture
def captured_stream() -> io.StringIO:
    return io.StringIO()


def _record(level: int = logging.INFO, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("relver.test", level, __file__, 1, msg, None, None)


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_plain_when_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s %(message)s", use_color=False)

        assert formatter.format(_record()) == "INFO hello"

    def test_colors_level_name(self) -> None:
        formatter = ColoredFormatter("%(levelname)s %(message)s", use_color=True)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            output = formatter.format(_record(logging.WARNING))

        assert output == "\033[33mWARNING\033[0m hello"

    def test_record_is_restored(self) -> None:
        """Test the colored level name does not leak to other handlers."""
        formatter = ColoredFormatter("%(levelname)s", use_color=True)
        record = _record(logging.ERROR)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "ERROR"

    def test_unknown_level_uncolored(self) -> None:
        formatter = ColoredFormatter("%(levelname)s", use_color=True)
        record = _record(25)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            assert "\033[" not in formatter.format(record)

    @pytest.mark.parametrize("env", ["NO_COLOR", "CI"])
    def test_env_disables_color(self, env: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(env, "1")

        assert ColoredFormatter._should_use_color() is False

    def test_tty_enables_color(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        fake_stderr = MagicMock()
        fake_stderr.isatty.return_value = True

        with patch("sys.stderr", fake_stderr):
            assert ColoredFormatter._should_use_color() is True

    def test_isatty_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        fake_stderr = MagicMock()
        fake_stderr.isatty.side_effect = OSError

        with patch("sys.stderr", fake_stderr):
            assert ColoredFormatter._should_use_color() is False


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_installs_single_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)
        setup_logging(stream=captured_stream)

        root = logging.getLogger("relver")
        assert len(root.handlers) == 1
        assert root.propagate is False
        assert is_logging_configured() is True

    def test_level_filters_output(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.WARNING, color=False, stream=captured_stream)
        log = get_logger("resolver")

        log.info("hidden")
        log.warning("Failed to retrieve artifacts metadata")

        output = captured_stream.getvalue()
        assert "hidden" not in output
        assert "Failed to retrieve artifacts metadata" in output

    def test_verbose_format_includes_logger_name(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.DEBUG, verbose=True, color=False, stream=captured_stream)

        get_logger("metadata").debug("querying")

        assert "relver.metadata" in captured_stream.getvalue()

    def test_color_disabled_output_is_plain(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(color=False, stream=captured_stream)

        get_logger("cli").error("bad")

        assert "\033[" not in captured_stream.getvalue()


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger naming."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            (None, "relver"),
            ("", "relver"),
            ("relver", "relver"),
            ("metadata", "relver.metadata"),
            ("relver.core.resolver", "relver.core.resolver"),
            ("commands.resolve", "relver.commands.resolve"),
        ],
    )
    def test_names(self, clean_logger_state: None, name, expected: str) -> None:
        assert get_logger(name).name == expected

    def test_same_instance(self, clean_logger_state: None) -> None:
        assert get_logger("selector") is get_logger("selector")

    def test_null_handler_when_unconfigured(self, clean_logger_state: None) -> None:
        log = get_logger("library-only")

        assert any(isinstance(h, logging.NullHandler) for h in log.handlers)

    def test_not_configured_initially(self, clean_logger_state: None) -> None:
        assert is_logging_configured() is False
