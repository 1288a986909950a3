"""pomodorian: a Pomodoro countdown timer with pie and bar progress indicators."""

__version__ = "0.1.0"
