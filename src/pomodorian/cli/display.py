"""Terminal text for progress geometry."""

from __future__ import annotations

import math

from pomodorian.core.render import BarFill, Circle, PieWedge, ProgressGeometry, RoundedRect
from pomodorian.core.session import Frame

PIE_GLYPHS = "○◔◑◕●"
BAR_CELLS = 10


def gauge(geometry: ProgressGeometry) -> str:
    """A one-line text gauge for *geometry*.

    Any visible foreground shows at least one step, mirroring the minimum
    visible fill of the bar.
    """
    foreground = geometry.foreground
    if isinstance(geometry.background, Circle):
        step = 0
        if isinstance(foreground, PieWedge):
            step = max(1, round(foreground.fraction * (len(PIE_GLYPHS) - 1)))
        return PIE_GLYPHS[step]

    filled = 0
    if isinstance(foreground, BarFill):
        share = foreground.height / geometry.background.height
        filled = max(1, math.floor(share * BAR_CELLS))
    return "[" + "#" * filled + "-" * (BAR_CELLS - filled) + "]"


def status_line(frame: Frame) -> str:
    return f"{gauge(frame.geometry)} {frame.label}".rstrip()


def _fmt(value: float) -> str:
    return f"{value:g}"


def describe(geometry: ProgressGeometry) -> list[str]:
    """Human-readable lines describing every shape in *geometry*."""
    lines = []
    background = geometry.background
    if isinstance(background, Circle):
        lines.append(
            f"background: circle center=({_fmt(background.center.x)}, "
            f"{_fmt(background.center.y)}) radius={_fmt(background.radius)}"
        )
    elif isinstance(background, RoundedRect):
        lines.append(
            f"background: rect {_fmt(background.width)}x{_fmt(background.height)} "
            f"corner={_fmt(background.corner_radius)}"
        )

    foreground = geometry.foreground
    if isinstance(foreground, PieWedge):
        direction = "clockwise" if foreground.clockwise else "counterclockwise"
        lines.append(
            f"wedge: start={math.degrees(foreground.start_angle):.1f}deg "
            f"end={math.degrees(foreground.end_angle):.1f}deg {direction} "
            f"sweep={math.degrees(foreground.sweep):.1f}deg ({foreground.fraction:.1%})"
        )
    elif isinstance(foreground, BarFill):
        lines.append(
            f"fill: x={_fmt(foreground.x)} y={_fmt(foreground.y)} "
            f"width={_fmt(foreground.width)} height={_fmt(foreground.height)}"
        )
    else:
        lines.append("foreground: none")

    lines.append(f"colors: empty={geometry.background_color.to_hex()} full={geometry.fill_color.to_hex()}")
    return lines
