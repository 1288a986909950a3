"""Tests for the pomodorian CLI layer."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import click.testing
import pytest

from pomodorian.cli.main import cli


@pytest.fixture()
def runner() -> click.testing.CliRunner:
    """Return a Click CliRunner for invoking CLI commands."""
    return click.testing.CliRunner()


def _advance_on_sleep(mock_time: MagicMock) -> None:
    mock_time.monotonic.return_value = 0.0

    def sleep(seconds: float) -> None:
        mock_time.monotonic.return_value += seconds

    mock_time.sleep.side_effect = sleep


# ---------------------------------------------------------------------------
# pomodorian run
# ---------------------------------------------------------------------------


class TestRunCommand:
    """Tests for ``pomodorian run``."""

    @patch("pomodorian.core.session.time")
    def test_run_to_completion(self, mock_time: MagicMock, runner: click.testing.CliRunner) -> None:
        _advance_on_sleep(mock_time)
        result = runner.invoke(cli, ["run", "--minutes", "1", "--interval", "1"])
        assert result.exit_code == 0
        # The final gauge is drawn first; the message ends the output on its own line.
        assert result.output.endswith(
            "\r[##########] 00:00\033[K\n\aTime's up! Take a break.\n"
        )
        assert result.output.count("Time's up!") == 1

    @patch("pomodorian.core.session.time")
    def test_bar_not_full_before_completion(
        self, mock_time: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        _advance_on_sleep(mock_time)
        result = runner.invoke(cli, ["run", "--minutes", "1", "--interval", "1"])
        assert "[##########] 00:03" not in result.output
        assert "[#########-] 00:03" in result.output

    @patch("pomodorian.core.session.time")
    def test_run_pie_with_minutes_only(
        self, mock_time: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        _advance_on_sleep(mock_time)
        result = runner.invoke(
            cli, ["run", "--minutes", "1", "--interval", "1", "--pie", "--hide-seconds"]
        )
        assert result.exit_code == 0
        assert "● 0m" in result.output

    @patch("pomodorian.core.session.time")
    def test_run_reads_environment(
        self, mock_time: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        _advance_on_sleep(mock_time)
        result = runner.invoke(
            cli,
            ["run", "--interval", "1"],
            env={"POMODORIAN_MINUTES": "1", "POMODORIAN_SECONDS": "5"},
        )
        assert result.exit_code == 0
        assert "01:05" in result.output
        assert mock_time.sleep.call_count == 65

    @patch("pomodorian.core.session.time")
    def test_interrupt_exits_130(self, mock_time: MagicMock, runner: click.testing.CliRunner) -> None:
        mock_time.monotonic.return_value = 0.0
        mock_time.sleep.side_effect = KeyboardInterrupt
        result = runner.invoke(cli, ["run", "--minutes", "5"])
        assert result.exit_code == 130
        assert "Ready: 05:00" in result.output

    def test_invalid_minutes(self, runner: click.testing.CliRunner) -> None:
        """Out-of-range minutes print the settings error and exit 1."""
        result = runner.invoke(cli, ["run", "--minutes", "0"])
        assert result.exit_code == 1
        assert "minutes must be between 1 and 60" in result.output

    def test_invalid_interval(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--interval", "10"])
        assert result.exit_code == 1
        assert "tick interval" in result.output

    def test_invalid_color(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--full-color", "red"])
        assert result.exit_code != 0
        assert "RRGGBB" in result.output

    def test_non_integer_minutes(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--minutes", "abc"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# pomodorian pie / bar
# ---------------------------------------------------------------------------


class TestGeometryCommands:
    """Tests for ``pomodorian pie`` and ``pomodorian bar``."""

    def test_pie(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["pie", "0.25"])
        assert result.exit_code == 0
        assert "background: circle center=(8, 8) radius=8" in result.output
        assert "clockwise sweep=90.0deg (25.0%)" in result.output

    def test_pie_diameter(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["pie", "0", "--diameter", "32"])
        assert result.exit_code == 0
        assert "radius=16" in result.output
        assert "foreground: none" in result.output

    def test_pie_rejects_zero_diameter(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["pie", "0.5", "--diameter", "0"])
        assert result.exit_code != 0

    def test_bar(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["bar", "0.5", "--width", "10", "--height", "40"])
        assert result.exit_code == 0
        assert "fill: x=0 y=0 width=10 height=20" in result.output

    def test_bar_clamps_progress(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["bar", "3"])
        assert result.exit_code == 0
        assert "height=16" in result.output


# ---------------------------------------------------------------------------
# pomodorian --version / --verbose
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    def test_version_output(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @patch("pomodorian.cli.main.logging")
    def test_verbose_enables_debug_logging(
        self, mock_logging: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        result = runner.invoke(cli, ["--verbose", "pie", "0.5"])
        assert result.exit_code == 0
        assert mock_logging.basicConfig.call_args.kwargs["level"] == mock_logging.DEBUG
