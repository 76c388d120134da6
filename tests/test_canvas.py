"""Tests for vector paths and the recording page."""

from __future__ import annotations

import pytest

from itinerarydocs.layout.canvas import (
    LineCommand,
    Page,
    PathCommand,
    RectCommand,
    SealedPageError,
    TextCommand,
)
from itinerarydocs.layout.geometry import (
    ClosePath,
    CurveTo,
    LineTo,
    MoveTo,
    clamp_radius,
    rounded_rect_path,
)

INK = (20, 26, 31)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

class TestRoundedRectPath:
    def test_segment_structure(self):
        path = rounded_rect_path(10, 20, 100, 18, 9)
        segments = list(path)
        assert len(path) == 10
        assert isinstance(segments[0], MoveTo)
        assert isinstance(segments[-1], ClosePath)
        assert sum(isinstance(s, CurveTo) for s in segments) == 4
        assert sum(isinstance(s, LineTo) for s in segments) == 4

    def test_path_closes_on_start_point(self):
        segments = list(rounded_rect_path(0, 0, 50, 30, 6))
        start, last_curve = segments[0], segments[-2]
        assert (last_curve.x, last_curve.y) == pytest.approx((start.x, start.y))

    def test_path_stays_inside_bounds(self):
        for seg in rounded_rect_path(5, 5, 40, 20, 4):
            if isinstance(seg, (MoveTo, LineTo, CurveTo)):
                assert 5 <= seg.x <= 45
                assert 5 <= seg.y <= 25

    def test_zero_radius_is_plain_rectangle(self):
        segments = list(rounded_rect_path(0, 0, 10, 10, 0))
        curves = [s for s in segments if isinstance(s, CurveTo)]
        assert all((c.x1, c.y1) == (c.x, c.y) for c in curves)

    @pytest.mark.parametrize(
        "requested,width,height,expected",
        [(4, 100, 18, 4), (50, 20, 10, 5), (-3, 10, 10, 0)],
    )
    def test_clamp_radius(self, requested, width, height, expected):
        assert clamp_radius(requested, width, height) == expected


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

class TestPage:
    def test_records_in_order(self):
        page = Page(1, 595.28, 841.89)
        page.draw_rect(0, 0, 10, 10, fill=INK)
        page.draw_text(5, 5, "Arusha", font_name="Helvetica", size=10, color=INK)
        page.draw_line(0, 0, 10, 0, color=INK)
        kinds = [type(c) for c in page.commands]
        assert kinds == [RectCommand, TextCommand, LineCommand]

    def test_empty_text_is_skipped(self):
        page = Page(1, 100, 100)
        page.draw_text(0, 0, "", font_name="Helvetica", size=10, color=INK)
        assert page.commands == ()

    def test_rounded_rect_is_a_path(self):
        page = Page(1, 100, 100)
        page.draw_rounded_rect(10, 10, 50, 18, 9, fill=INK)
        (cmd,) = page.commands
        assert isinstance(cmd, PathCommand)
        assert len(cmd.path) == 10

    def test_sealed_page_rejects_drawing(self):
        page = Page(3, 100, 100).seal()
        assert page.sealed
        with pytest.raises(SealedPageError, match="page 3"):
            page.draw_rect(0, 0, 1, 1, fill=INK)

    def test_copy_is_open_and_independent(self):
        page = Page(1, 100, 100)
        page.draw_rect(0, 0, 1, 1, fill=INK)
        page.seal()
        clone = page.copy()
        clone.draw_line(0, 0, 1, 1, color=INK)
        assert not clone.sealed
        assert len(page.commands) == 1
        assert len(clone.commands) == 2

    def test_texts_and_commands_of(self):
        page = Page(1, 100, 100)
        page.draw_text(0, 0, "Day 1", font_name="Helvetica", size=10, color=INK)
        page.draw_rect(0, 0, 1, 1, fill=INK)
        assert page.texts() == ["Day 1"]
        assert len(page.commands_of(RectCommand)) == 1
