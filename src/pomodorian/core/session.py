"""Session: drives a Timer from a periodic tick loop and renders frames."""

from __future__ import annotations

import logging
import time
from typing import Callable, NamedTuple, Optional

from pomodorian.core.render import ProgressGeometry, render
from pomodorian.core.settings import Settings, format_time_label
from pomodorian.core.timer import Timer, TimerSnapshot, TimerState

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    """What a display needs to draw the current instant."""

    label: str
    geometry: ProgressGeometry
    snapshot: TimerSnapshot


class Session:
    """Binds a :class:`Timer` to user :class:`Settings`.

    The timer reads its duration from the settings whenever a fresh
    countdown starts, so edits made between countdowns take effect without
    an explicit ``apply_duration()``.  All timing goes through this module's
    ``time`` import.
    """

    def __init__(self, settings: Optional[Settings] = None, timer: Optional[Timer] = None) -> None:
        self.settings: Settings = settings if settings is not None else Settings()
        self.settings.validate()
        self.timer: Timer = (
            timer
            if timer is not None
            else Timer(
                self.settings.duration,
                clock=self._now,
                duration_source=lambda: self.settings.duration,
            )
        )

    # -- public API ----------------------------------------------------------

    def status(self) -> tuple[str, int]:
        """Return ``(message, exit_code)``."""
        state = self.timer.state
        remaining = format_time_label(self.timer.remaining)
        if state == TimerState.RUNNING:
            return f"{remaining} remaining", 0
        if state == TimerState.COMPLETED:
            return "Time's up! Take a break.", 1
        if self.timer.progress > 0:
            return f"{remaining} remaining (paused)", 0
        return f"Ready: {remaining}", 1

    def frame(self) -> Frame:
        """Render the current progress with the configured style and colors."""
        return Frame(
            label=self.settings.time_label(self.timer.remaining),
            geometry=render(self.timer.progress, self.settings.style, self.settings.colors),
            snapshot=self.timer.snapshot(),
        )

    def apply_duration(self) -> None:
        """Reset the timer to the duration currently in the settings."""
        self.settings.validate()
        self.timer.configure(self.settings.duration)

    def run(
        self,
        on_frame: Optional[Callable[[Frame], None]] = None,
        max_ticks: Optional[int] = None,
    ) -> TimerSnapshot:
        """Start the timer and tick it until it stops.

        Ticks every ``settings.tick_interval`` seconds, handing each frame to
        *on_frame*.  Returns early after *max_ticks* ticks if given.  A
        ``KeyboardInterrupt`` pauses the timer before propagating.
        """
        self.settings.validate()
        self.timer.start()
        ticks = 0
        try:
            while self.timer.running:
                self.timer.tick()
                if on_frame is not None:
                    on_frame(self.frame())
                ticks += 1
                if max_ticks is not None and ticks >= max_ticks:
                    break
                if self.timer.running:
                    time.sleep(self.settings.tick_interval)
        except KeyboardInterrupt:
            self.timer.pause()
            logger.debug("Run interrupted after %d ticks", ticks)
            raise
        logger.debug("Run finished after %d ticks in state %s", ticks, self.timer.state.value)
        return self.timer.snapshot()

    # -- private helpers -----------------------------------------------------

    def _now(self) -> float:
        return time.monotonic()
