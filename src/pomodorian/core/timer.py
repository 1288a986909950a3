"""Timer core — a wall-clock anchored countdown state machine."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from pomodorian.core.events import EventEmitter, Handler, TimerEvent

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 25 * 60.0


class TimerState(Enum):
    """Possible states of the timer."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class InvalidDuration(ValueError):
    """Raised when a countdown duration is not a positive number of seconds."""


@dataclass(frozen=True)
class TimerSnapshot:
    """The externally visible values of a timer at one instant."""

    time_remaining: float
    progress: float
    is_running: bool


def validate_duration(duration: object) -> float:
    """Return *duration* as float seconds, or raise ``InvalidDuration``."""
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise InvalidDuration(
            f"duration must be a number of seconds, got {type(duration).__name__}"
        )
    if not math.isfinite(duration) or duration <= 0:
        raise InvalidDuration(f"duration must be a positive number of seconds, got {duration}")
    return float(duration)


class Timer:
    """A countdown timer driven by an external tick source.

    Elapsed time is always recomputed as ``now - anchor`` where the anchor is
    re-derived on every ``start()`` from the remaining time captured at the
    last pause.  Ticks never decrement a counter, so missed or late ticks do
    not make the countdown drift.

    The timer does no threading and no I/O.  *clock* returns the current
    instant in seconds and defaults to ``time.monotonic()``.  When given,
    *duration_source* is consulted on ``start()`` from a fresh or completed
    countdown so externally edited settings take effect.
    """

    def __init__(
        self,
        duration: float = DEFAULT_DURATION,
        clock: Optional[Callable[[], float]] = None,
        duration_source: Optional[Callable[[], float]] = None,
    ) -> None:
        self._total: float = validate_duration(duration)
        self._remaining: float = self._total
        self._progress: float = 0.0
        self._running: bool = False
        self._anchor: Optional[float] = None
        self._paused_remaining: float = self._total
        self._completion_fired: bool = False
        self._clock = clock
        self._duration_source = duration_source
        self._events = EventEmitter()

    # -- public interface ----------------------------------------------------

    def configure(self, duration: float) -> None:
        """Set a new countdown length, pausing first if running.

        Raises ``InvalidDuration`` for a non-positive *duration*, leaving the
        timer untouched.
        """
        self.reset(duration)

    def start(self) -> None:
        """Start or resume the countdown.  No-op while already running."""
        if self._running:
            return
        if self._remaining <= 0.0 or self._at_fresh_reset():
            self._refresh_duration()

        self._running = True
        self._completion_fired = False
        self._anchor = self._now() - (self._total - self._paused_remaining)
        logger.debug(
            "Timer started: %.1fs of %.1fs remaining", self._paused_remaining, self._total
        )
        self._notify()

    def pause(self) -> None:
        """Freeze the countdown at the value of the most recent tick.

        No-op when not running.
        """
        if not self._running:
            return
        self._paused_remaining = self._remaining
        self._running = False
        logger.debug("Timer paused: %.1fs remaining", self._remaining)
        self._notify()

    def reset(self, duration: Optional[float] = None) -> None:
        """Return to the full duration, stopped.

        With an explicit *duration* this behaves like :meth:`configure` and
        emits a state-changed notification; the plain reset only notifies
        through the implicit pause.
        """
        new_total = self._total if duration is None else validate_duration(duration)
        self.pause()
        self._reset_fields(new_total)
        logger.debug("Timer reset to %.1fs", new_total)
        if duration is not None:
            self._notify()

    def tick(self, now: Optional[float] = None) -> None:
        """Recompute remaining time and progress at instant *now*.

        Ignored unless running.  A clock that went backwards is clamped: the
        elapsed time never goes below zero and the published values never
        move back while running.
        """
        if not self._running or self._anchor is None:
            return
        if now is None:
            now = self._now()

        elapsed = max(0.0, now - self._anchor)
        remaining = max(0.0, self._total - elapsed)
        progress = min(1.0, elapsed / self._total)
        if progress < self._progress:
            return

        changed = remaining != self._remaining or progress != self._progress
        self._remaining = remaining
        self._progress = progress
        if remaining <= 0.0:
            self._complete()
        elif changed:
            self._notify()

    def subscribe(self, event: TimerEvent, handler: Handler) -> None:
        """Call *handler(event, snapshot)* whenever *event* fires."""
        self._events.subscribe(event, handler)

    def unsubscribe(self, event: TimerEvent, handler: Handler) -> None:
        self._events.unsubscribe(event, handler)

    @property
    def remaining(self) -> float:
        return self._remaining

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def running(self) -> bool:
        return self._running

    @property
    def total_duration(self) -> float:
        return self._total

    @property
    def state(self) -> TimerState:
        if self._running:
            return TimerState.RUNNING
        if self._remaining <= 0.0:
            return TimerState.COMPLETED
        return TimerState.IDLE

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            time_remaining=self._remaining,
            progress=self._progress,
            is_running=self._running,
        )

    # -- private helpers -----------------------------------------------------

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return time.monotonic()

    def _at_fresh_reset(self) -> bool:
        return self._paused_remaining == self._total and self._remaining == self._total

    def _refresh_duration(self) -> None:
        """Pick up an externally configured duration before a fresh countdown."""
        duration = self._total
        if self._duration_source is not None:
            try:
                duration = validate_duration(self._duration_source())
            except InvalidDuration as exc:
                logger.warning("Ignoring configured duration: %s", exc)
        if duration != self._total or self._remaining <= 0.0:
            self._reset_fields(duration)

    def _reset_fields(self, duration: float) -> None:
        self._total = duration
        self._remaining = duration
        self._progress = 0.0
        self._anchor = None
        self._paused_remaining = duration

    def _complete(self) -> None:
        self._remaining = 0.0
        self._progress = 1.0
        self.pause()
        if self._completion_fired:
            return
        self._completion_fired = True
        logger.info("Countdown of %.1fs completed", self._total)
        self._events.emit(TimerEvent.COMPLETED, self.snapshot())

    def _notify(self) -> None:
        self._events.emit(TimerEvent.STATE_CHANGED, self.snapshot())
