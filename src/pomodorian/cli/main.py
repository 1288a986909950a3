"""CLI entry point for pomodorian.

Uses Click to expose the ``pomodorian`` command group: ``run`` drives a
countdown in the terminal, ``pie`` and ``bar`` print indicator geometry.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Optional, TypeVar

import click

import pomodorian
from pomodorian.cli.display import describe, status_line
from pomodorian.core.events import TimerEvent
from pomodorian.core.render import (
    BAR_HEIGHT,
    BAR_WIDTH,
    DEFAULT_COLORS,
    PIE_DIAMETER,
    Color,
    render_bar,
    render_pie,
)
from pomodorian.core.session import Frame, Session
from pomodorian.core.settings import Settings, SettingsError
from pomodorian.core.timer import InvalidDuration

T = TypeVar("T")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_EXIT_INTERRUPTED = 130
_POSITIVE = click.FloatRange(min=0, min_open=True)


class ColorParamType(click.ParamType):
    """Accept ``#RRGGBB`` / ``#RRGGBBAA`` and convert to :class:`Color`."""

    name = "color"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> Color:
        if isinstance(value, Color):
            return value
        try:
            return Color.from_hex(value)
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


COLOR = ColorParamType()


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting settings errors to a CLI error.

    On ``SettingsError`` or ``InvalidDuration`` the message is printed to
    stderr and the process exits with code 1.
    """
    try:
        return action()
    except (SettingsError, InvalidDuration) as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _draw(frame: Frame) -> None:
    click.echo("\r" + status_line(frame) + "\033[K", nl=False)



@click.group()
@click.version_option(version=pomodorian.__version__, prog_name="pomodorian")
@click.option("-v", "--verbose", is_flag=True, help="Log timer transitions to stderr.")
def cli(verbose: bool) -> None:
    """pomodorian: a Pomodoro timer with a pie or bar progress indicator."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT)


@cli.command()
@click.option("--minutes", type=int, default=25, show_default=True, envvar="POMODORIAN_MINUTES",
              help="Countdown minutes (1-60).")
@click.option("--seconds", type=int, default=0, show_default=True, envvar="POMODORIAN_SECONDS",
              help="Extra countdown seconds (0-59).")
@click.option("--pie/--bar", "use_pie_chart", default=False, envvar="POMODORIAN_PIE",
              help="Progress indicator style.")
@click.option("--show-minutes/--hide-minutes", default=True, envvar="POMODORIAN_SHOW_MINUTES")
@click.option("--show-seconds/--hide-seconds", default=True, envvar="POMODORIAN_SHOW_SECONDS")
@click.option("--empty-color", type=COLOR, default=DEFAULT_COLORS.empty.to_hex(),
              envvar="POMODORIAN_EMPTY_COLOR", help="Indicator background color.")
@click.option("--full-color", type=COLOR, default=DEFAULT_COLORS.full.to_hex(),
              envvar="POMODORIAN_FULL_COLOR", help="Indicator fill color.")
@click.option("--interval", type=float, default=0.1, show_default=True,
              envvar="POMODORIAN_INTERVAL", help="Seconds between ticks.")
def run(
    minutes: int,
    seconds: int,
    use_pie_chart: bool,
    show_minutes: bool,
    show_seconds: bool,
    empty_color: Color,
    full_color: Color,
    interval: float,
) -> None:
    """Run a countdown, redrawing the progress indicator until it completes."""
    settings = Settings(
        minutes=minutes,
        seconds=seconds,
        show_minutes=show_minutes,
        show_seconds=show_seconds,
        use_pie_chart=use_pie_chart,
        empty_color=empty_color,
        full_color=full_color,
        tick_interval=interval,
    )
    session = _run(lambda: Session(settings))
    # The completion message waits until the final frame is drawn.
    completions: list[Any] = []
    session.timer.subscribe(TimerEvent.COMPLETED, lambda event, snapshot: completions.append(snapshot))
    try:
        session.run(on_frame=_draw)
    except KeyboardInterrupt:
        click.echo()
        message, _ = session.status()
        click.echo(message)
        sys.exit(_EXIT_INTERRUPTED)
    click.echo()
    if completions:
        click.echo("\aTime's up! Take a break.")


@cli.command()
@click.argument("progress", type=float)
@click.option("--diameter", type=_POSITIVE, default=PIE_DIAMETER, show_default=True)
def pie(progress: float, diameter: float) -> None:
    """Print the pie geometry for PROGRESS (0-1)."""
    for line in describe(render_pie(progress, diameter)):
        click.echo(line)


@cli.command()
@click.argument("progress", type=float)
@click.option("--width", type=_POSITIVE, default=BAR_WIDTH, show_default=True)
@click.option("--height", type=_POSITIVE, default=BAR_HEIGHT, show_default=True)
def bar(progress: float, width: float, height: float) -> None:
    """Print the bar geometry for PROGRESS (0-1)."""
    for line in describe(render_bar(progress, width, height)):
        click.echo(line)
