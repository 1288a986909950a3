"""Progress renderer: pure geometry for the pie and bar indicators.

Coordinates have their origin at the bottom-left corner of the icon with y
growing upward.  Angles are radians measured counterclockwise from
3 o'clock, so 12 o'clock is ``pi / 2`` and a visually clockwise sweep has a
decreasing angle.  Drawing layers with a y-down canvas must flip y (and
therefore the angle sign) when they paint these shapes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Union

TAU = 2 * math.pi
TWELVE_OCLOCK = math.pi / 2

PIE_DIAMETER = 16.0
BAR_WIDTH = 8.0
BAR_HEIGHT = 16.0
BAR_CORNER_RADIUS = 2.0
MIN_VISIBLE = 1.0


class IndicatorStyle(Enum):
    """The two visual encodings of progress."""

    PIE = "pie"
    BAR = "bar"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Color:
    """An sRGB color with components in ``[0, 1]``."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#RRGGBB`` or ``#RRGGBBAA`` (the ``#`` is optional)."""
        digits = text.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"expected #RRGGBB or #RRGGBBAA, got {text!r}")
        try:
            channels = [int(digits[i : i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
        except ValueError:
            raise ValueError(f"invalid hex color {text!r}") from None
        return cls(*channels)

    def to_hex(self) -> str:
        channels = (self.red, self.green, self.blue, self.alpha)
        return "#" + "".join(f"{round(c * 255):02X}" for c in channels)

    def with_alpha(self, alpha: float) -> Color:
        return Color(self.red, self.green, self.blue, alpha)


class IndicatorColors(NamedTuple):
    """Background (``empty``) and filled-region (``full``) colors."""

    empty: Color
    full: Color


DEFAULT_COLORS = IndicatorColors(
    empty=Color.from_hex("#FF2D55").with_alpha(0.3),
    full=Color.from_hex("#FF3B30"),
)


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float

    def contains(self, point: Point) -> bool:
        return math.hypot(point.x - self.center.x, point.y - self.center.y) <= self.radius


@dataclass(frozen=True)
class RoundedRect:
    x: float
    y: float
    width: float
    height: float
    corner_radius: float = 0.0


@dataclass(frozen=True)
class PieWedge:
    """A circular sector swept from *start_angle* to *end_angle*."""

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    clockwise: bool = True

    @property
    def sweep(self) -> float:
        """Radians covered, measured in the wedge's own direction."""
        if self.clockwise:
            return self.start_angle - self.end_angle
        return self.end_angle - self.start_angle

    @property
    def fraction(self) -> float:
        """Share of the full circle the wedge covers."""
        return self.sweep / TAU

    @property
    def is_full(self) -> bool:
        return self.sweep >= TAU or math.isclose(self.sweep, TAU)

    @property
    def sweep_degrees(self) -> float:
        """Signed sweep for canvases taking a counterclockwise ``extent``.

        Tk's ``create_arc(start=90, extent=...)`` is one such canvas; a
        clockwise wedge yields a negative extent.
        """
        degrees = math.degrees(self.sweep)
        return -degrees if self.clockwise else degrees

    def point_at(self, angle: float) -> Point:
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    def contains(self, point: Point) -> bool:
        dx = point.x - self.center.x
        dy = point.y - self.center.y
        if math.hypot(dx, dy) > self.radius:
            return False
        if self.is_full or (dx == 0 and dy == 0):
            return True
        angle = math.atan2(dy, dx)
        if self.clockwise:
            offset = (self.start_angle - angle) % TAU
        else:
            offset = (angle - self.start_angle) % TAU
        return offset <= self.sweep


@dataclass(frozen=True)
class BarFill:
    """The filled part of the bar, anchored to the bar's bottom edge."""

    x: float
    y: float
    width: float
    height: float
    corner_radius: float = 0.0

    @property
    def top(self) -> float:
        return self.y + self.height


Shape = Union[Circle, RoundedRect]
Foreground = Union[PieWedge, BarFill]


@dataclass(frozen=True)
class ProgressGeometry:
    """Everything a drawing layer needs for one frame."""

    background: Shape
    foreground: Optional[Foreground]
    background_color: Color
    fill_color: Color


def clamp_progress(progress: float) -> float:
    """Clamp *progress* into ``[0, 1]``; NaN counts as no progress."""
    if not progress > 0:
        return 0.0
    return min(1.0, float(progress))


def render_pie(
    progress: float,
    diameter: float = PIE_DIAMETER,
    colors: IndicatorColors = DEFAULT_COLORS,
) -> ProgressGeometry:
    """Pie indicator: a wedge from 12 o'clock sweeping clockwise with progress."""
    if not diameter > 0:
        raise ValueError(f"diameter must be positive, got {diameter}")
    progress = clamp_progress(progress)
    radius = diameter / 2.0
    center = Point(radius, radius)

    wedge = None
    if progress > 0:
        wedge = PieWedge(
            center=center,
            radius=radius,
            start_angle=TWELVE_OCLOCK,
            end_angle=TWELVE_OCLOCK - TAU * progress,
            clockwise=True,
        )
    return ProgressGeometry(
        background=Circle(center, radius),
        foreground=wedge,
        background_color=colors.empty,
        fill_color=colors.full,
    )


def render_bar(
    progress: float,
    width: float = BAR_WIDTH,
    height: float = BAR_HEIGHT,
    colors: IndicatorColors = DEFAULT_COLORS,
) -> ProgressGeometry:
    """Bar indicator: a fill growing from the bottom edge upward."""
    if not (width > 0 and height > 0):
        raise ValueError(f"bar size must be positive, got {width}x{height}")
    progress = clamp_progress(progress)
    corner = min(BAR_CORNER_RADIUS, width / 2.0, height / 2.0)

    fill = None
    if progress > 0:
        # A sliver of progress still shows at least MIN_VISIBLE units.
        fill_height = min(height, max(MIN_VISIBLE, height * progress))
        fill = BarFill(
            x=0.0,
            y=0.0,
            width=width,
            height=fill_height,
            corner_radius=min(corner, fill_height / 2.0),
        )
    return ProgressGeometry(
        background=RoundedRect(0.0, 0.0, width, height, corner_radius=corner),
        foreground=fill,
        background_color=colors.empty,
        fill_color=colors.full,
    )


def render(
    progress: float,
    style: IndicatorStyle,
    colors: IndicatorColors = DEFAULT_COLORS,
) -> ProgressGeometry:
    """Render *progress* at the default icon size for *style*."""
    if style is IndicatorStyle.PIE:
        return render_pie(progress, colors=colors)
    return render_bar(progress, colors=colors)
