"""Measure and draw one section inside a column."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.models import Section
from .canvas import Page
from .wrapping import TextLine, wrap, wrap_bullet

if TYPE_CHECKING:
    from ..generators.resources import RenderResources
    from ..generators.themes import Theme

# Horizontal inset of heading text inside the pill
_PILL_TEXT_INSET = 6
# Heading baseline below the box top
_HEADING_DROP = 24
# Box top to the top edge of the pill
_PILL_TOP_GAP = 10


@dataclass(frozen=True)
class SectionLayout:
    """Everything about a section that can be known without drawing it."""

    heading_lines: tuple[str, ...]
    lines: tuple[TextLine, ...]
    height: float
    pill_width: float
    pill_height: float
    heading_extra: float = 0.0


@dataclass(frozen=True)
class BoxPlacement:
    """Outcome of one placement attempt.

    When ``fits`` is false nothing was drawn and ``cursor_y`` is the
    unchanged top Y.
    """

    fits: bool
    box_height: float
    cursor_y: float
    forced: bool = False
    dropped_lines: int = 0


class SectionBox:
    """Lays out sections in a column of fixed width."""

    def __init__(self, resources: "RenderResources", theme: "Theme", column_width: float) -> None:
        self.resources = resources
        self.theme = theme
        self.column_width = column_width

    @property
    def text_width(self) -> float:
        return self.column_width - self.theme.geometry.box_padding * 2

    # ------------------------------------------------------------------
    # Measurement (pure)
    # ------------------------------------------------------------------

    def body_lines(self, section: Section) -> list[TextLine]:
        g = self.theme.geometry
        metrics = self.resources.regular
        lines: list[TextLine] = []

        if section.body:
            lines.extend(TextLine(ln) for ln in wrap(metrics, g.body_size, section.body, self.text_width))
            lines.append(TextLine(""))

        for bullet in section.bullets:
            wrapped = wrap_bullet(
                metrics, g.body_size, bullet, self.text_width, min_indent=g.bullet_indent_min,
            )
            if wrapped:
                lines.extend(wrapped)
                lines.append(TextLine(""))

        while lines and lines[-1].is_blank:
            lines.pop()
        return lines

    def measure(self, section: Section) -> SectionLayout:
        g = self.theme.geometry
        pill_w = min(self.text_width, g.pill_max_width)
        heading_lines = wrap(
            self.resources.bold, g.heading_size, section.heading.upper(), pill_w - _PILL_TEXT_INSET * 2,
        ) or ["SECTION"]
        extra = (len(heading_lines) - 1) * g.heading_line_height

        lines = self.body_lines(section)
        text_h = len(lines) * g.line_height + g.text_padding
        height = max(g.min_box_height, g.heading_area + extra + text_h)
        return SectionLayout(
            heading_lines=tuple(heading_lines),
            lines=tuple(lines),
            height=height,
            pill_width=pill_w,
            pill_height=g.pill_height + extra,
            heading_extra=extra,
        )

    def fits(self, top_y: float, height: float) -> bool:
        g = self.theme.geometry
        return top_y - height >= g.content_bottom + g.safety_margin

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def measure_and_place(
        self,
        page: Page,
        x: float,
        top_y: float,
        section: Section,
        *,
        force: bool = False,
    ) -> BoxPlacement:
        """Place *section* with its top edge at *top_y*.

        Without *force*, a section that would cross the safety margin is
        rejected and the page is left untouched. With *force* the box is
        clamped to the page bottom margin and overflowing lines are dropped.
        """
        g = self.theme.geometry
        layout = self.measure(section)

        if not force and not self.fits(top_y, layout.height):
            return BoxPlacement(fits=False, box_height=layout.height, cursor_y=top_y)

        height = layout.height
        if force:
            height = min(height, max(top_y - g.content_bottom, 0.0))

        dropped = self._draw(page, x, top_y, height, layout)
        cursor = top_y - height - g.section_gap
        if force:
            cursor = max(cursor, g.content_bottom)
        return BoxPlacement(
            fits=True,
            box_height=height,
            cursor_y=cursor,
            forced=force,
            dropped_lines=dropped,
        )

    def _draw(self, page: Page, x: float, top_y: float, height: float, layout: SectionLayout) -> int:
        """Draw box, pill, heading and lines; return how many lines were clipped."""
        g = self.theme.geometry
        c = self.theme.colors
        res = self.resources
        pad = g.box_padding
        extra = layout.heading_extra
        bottom = top_y - height

        page.draw_rect(x, bottom, self.column_width, height, fill=c.box_fill, stroke=c.line)

        # A clamped box also cuts the pill and the heading at its bottom edge
        pill_h = min(layout.pill_height, height - _PILL_TOP_GAP)
        if pill_h > 0:
            page.draw_rounded_rect(
                x + pad,
                top_y - _PILL_TOP_GAP - pill_h,
                layout.pill_width,
                pill_h,
                g.pill_height / 2,
                fill=c.sand,
            )
        dropped = 0
        for i, text in enumerate(layout.heading_lines):
            heading_y = top_y - _HEADING_DROP - i * g.heading_line_height
            if heading_y < bottom:
                dropped = len(layout.heading_lines) - i
                break
            page.draw_text(
                x + pad + _PILL_TEXT_INSET,
                heading_y,
                text,
                font_name=res.bold_font,
                size=g.heading_size,
                color=c.primary_dark,
            )

        text_y = top_y - g.text_offset - extra
        for n, line in enumerate(layout.lines):
            if line.is_blank:
                text_y -= g.line_height * g.blank_line_ratio
                continue
            if text_y < bottom:
                return dropped + sum(1 for rest in layout.lines[n:] if not rest.is_blank)
            if line.marker:
                page.draw_text(
                    x + pad, text_y, line.marker,
                    font_name=res.regular_font, size=g.body_size, color=c.primary,
                )
            page.draw_text(
                x + pad + line.indent, text_y, line.text,
                font_name=res.regular_font, size=g.body_size, color=c.ink,
                max_width=self.text_width - line.indent,
            )
            text_y -= g.line_height
        return dropped
