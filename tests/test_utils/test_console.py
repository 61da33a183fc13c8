from __future__ import annotations

import sys
from typing import Generator
from unittest.mock import patch

import pytest
from rich.console import Console
from rich.table import Table

from relver.utils.console import (
    RELVER_THEME,
    _get_console,
    _get_err_console,
    _should_use_color,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset console singletons before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CI", raising=False)


@pytest.mark.unit
class TestTheme:
    """Tests for the console theme."""

    @pytest.mark.parametrize("style", ["success", "error", "warning", "info", "dim"])
    def test_has_style(self, style: str) -> None:
        assert style in RELVER_THEME.styles


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color."""

    def test_no_color_env(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _should_use_color() is False

    def test_ci_env(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CI", "true")

        assert _should_use_color() is False

    @pytest.mark.parametrize("is_tty", [True, False])
    def test_follows_tty(self, clean_env: None, is_tty: bool) -> None:
        with patch.object(sys.stdout, "isatty", return_value=is_tty):
            assert _should_use_color() is is_tty

    def test_isatty_raises(self, clean_env: None) -> None:
        with patch.object(sys.stdout, "isatty", side_effect=OSError):
            assert _should_use_color() is False


@pytest.mark.unit
class TestConsoleLifecycle:
    """Tests for console singletons and reconfiguration."""

    def test_singletons(self) -> None:
        assert isinstance(_get_console(), Console)
        assert _get_console() is _get_console()
        assert _get_err_console() is _get_err_console()
        assert _get_console() is not _get_err_console()

    def test_err_console_targets_stderr(self) -> None:
        assert _get_err_console().stderr is True
        assert _get_console().stderr is False

    def test_reconfigure_rebuilds(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = _get_console()
        monkeypatch.setenv("NO_COLOR", "1")

        reconfigure_console()

        second = _get_console()
        assert second is not first
        assert second.no_color is True


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success, print_error and print_warning."""

    @pytest.mark.parametrize(
        "func, prefix, style",
        [
            (print_success, "[OK]", "success"),
            (print_error, "[ERROR]", "error"),
            (print_warning, "[WARNING]", "warning"),
        ],
    )
    def test_prefix_and_style(self, func, prefix: str, style: str) -> None:
        with patch.object(Console, "print") as mock_print:
            func("No released version found")

        mock_print.assert_called_once_with(f"{prefix} No released version found", style=style)

    def test_custom_prefix(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_error("bad", prefix="!")

        mock_print.assert_called_once_with("! bad", style="error")

    def test_messages_go_to_stderr(
        self, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        reconfigure_console()

        print_warning("careful")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[WARNING] careful" in captured.err


@pytest.mark.unit
class TestPrintTable:
    """Tests for print_table."""

    def test_empty_data_prints_nothing(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_table([])

        mock_print.assert_not_called()

    def test_builds_table(self) -> None:
        rows = [
            {"Property": "releasedVersion.version", "Value": "1.0.1"},
            {"Property": "releasedVersion.qualifier", "Value": ""},
        ]

        with patch.object(Console, "print") as mock_print:
            print_table(
                rows,
                title="org.example:demo 1.0.1",
                column_styles={"Property": {"style": "cyan", "no_wrap": True}},
            )

        table = mock_print.call_args[0][0]
        assert isinstance(table, Table)
        assert table.title == "org.example:demo 1.0.1"
        assert [c.header for c in table.columns] == ["Property", "Value"]
        assert table.columns[0].style == "cyan"
        assert table.columns[0].no_wrap is True
        assert table.row_count == 2

    def test_explicit_headers_order(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_table([{"a": 1, "b": 2}], headers=["b", "a"])

        table = mock_print.call_args[0][0]
        assert [c.header for c in table.columns] == ["b", "a"]

    def test_renders_to_stdout(
        self, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        reconfigure_console()

        print_table([{"Property": "rv.version", "Value": "2.0"}])

        captured = capsys.readouterr()
        assert "rv.version" in captured.out
        assert captured.err == ""
