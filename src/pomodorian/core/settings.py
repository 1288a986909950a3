"""User-facing timer and indicator settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from pomodorian.core.render import DEFAULT_COLORS, Color, IndicatorColors, IndicatorStyle

MIN_MINUTES = 1
MAX_MINUTES = 60
MAX_SECONDS = 59
MIN_TICK_INTERVAL = 0.05
MAX_TICK_INTERVAL = 1.0


class SettingsError(ValueError):
    """Raised when a settings value is out of range."""


def format_time_label(seconds: float, show_minutes: bool = True, show_seconds: bool = True) -> str:
    """Format remaining *seconds* for the status line.

    ``MM:SS`` with both flags, ``<m>m`` with minutes only, ``<s>s`` (total
    seconds) with seconds only, and an empty string with neither.
    """
    total = int(max(seconds, 0.0))
    minutes, secs = divmod(total, 60)
    if show_minutes and show_seconds:
        return f"{minutes:02d}:{secs:02d}"
    if show_minutes:
        return f"{minutes}m"
    if show_seconds:
        return f"{total}s"
    return ""


@dataclass
class Settings:
    """Duration, label and indicator preferences.

    Mutable so a host can edit them while a timer runs; the timer only reads
    the duration when a fresh countdown starts.
    """

    minutes: int = 25
    seconds: int = 0
    show_minutes: bool = True
    show_seconds: bool = True
    use_pie_chart: bool = False
    empty_color: Color = field(default=DEFAULT_COLORS.empty)
    full_color: Color = field(default=DEFAULT_COLORS.full)
    tick_interval: float = 0.1

    def validate(self) -> None:
        """Raise ``SettingsError`` if any field is out of range."""
        if not MIN_MINUTES <= self.minutes <= MAX_MINUTES:
            raise SettingsError(
                f"minutes must be between {MIN_MINUTES} and {MAX_MINUTES}, got {self.minutes}"
            )
        if not 0 <= self.seconds <= MAX_SECONDS:
            raise SettingsError(f"seconds must be between 0 and {MAX_SECONDS}, got {self.seconds}")
        if not MIN_TICK_INTERVAL <= self.tick_interval <= MAX_TICK_INTERVAL:
            raise SettingsError(
                f"tick interval must be between {MIN_TICK_INTERVAL} and "
                f"{MAX_TICK_INTERVAL} seconds, got {self.tick_interval}"
            )

    @property
    def duration(self) -> float:
        """Configured countdown length in seconds."""
        return float(self.minutes * 60 + self.seconds)

    @property
    def style(self) -> IndicatorStyle:
        return IndicatorStyle.PIE if self.use_pie_chart else IndicatorStyle.BAR

    @property
    def colors(self) -> IndicatorColors:
        return IndicatorColors(empty=self.empty_color, full=self.full_color)

    def time_label(self, seconds: float) -> str:
        return format_time_label(seconds, self.show_minutes, self.show_seconds)
