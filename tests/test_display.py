"""Tests for the terminal text rendering of indicator geometry."""

import pytest

from pomodorian.cli.display import describe, gauge, status_line
from pomodorian.core.render import render_bar, render_pie
from pomodorian.core.session import Frame
from pomodorian.core.timer import TimerSnapshot


class TestGauge:
    @pytest.mark.parametrize(
        "progress, glyph",
        [(0.0, "○"), (0.01, "◔"), (0.25, "◔"), (0.5, "◑"), (0.75, "◕"), (1.0, "●")],
    )
    def test_pie_glyphs(self, progress: float, glyph: str) -> None:
        assert gauge(render_pie(progress)) == glyph

    def test_empty_bar(self) -> None:
        assert gauge(render_bar(0.0)) == "[----------]"

    def test_half_bar(self) -> None:
        assert gauge(render_bar(0.5)) == "[#####-----]"

    def test_full_bar(self) -> None:
        assert gauge(render_bar(1.0)) == "[##########]"

    def test_nearly_full_bar_is_not_full(self) -> None:
        assert gauge(render_bar(0.95)) == "[#########-]"

    def test_tiny_progress_shows_one_cell(self) -> None:
        assert gauge(render_bar(0.001)) == "[#---------]"


class TestStatusLine:
    def test_gauge_and_label(self) -> None:
        frame = Frame("12:30", render_bar(0.5), TimerSnapshot(750.0, 0.5, True))
        assert status_line(frame) == "[#####-----] 12:30"

    def test_empty_label(self) -> None:
        frame = Frame("", render_pie(0.5), TimerSnapshot(750.0, 0.5, True))
        assert status_line(frame) == "◑"


class TestDescribe:
    def test_quarter_pie(self) -> None:
        lines = describe(render_pie(0.25, 16))
        assert lines[0] == "background: circle center=(8, 8) radius=8"
        assert lines[1] == "wedge: start=90.0deg end=0.0deg clockwise sweep=90.0deg (25.0%)"
        assert lines[2].startswith("colors: empty=#FF2D55")

    def test_empty_pie(self) -> None:
        assert describe(render_pie(0.0))[1] == "foreground: none"

    def test_half_bar(self) -> None:
        lines = describe(render_bar(0.5, 8, 16))
        assert lines[0] == "background: rect 8x16 corner=2"
        assert lines[1] == "fill: x=0 y=0 width=8 height=8"
