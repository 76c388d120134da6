"""Glyph-metric text measurement."""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.pdfbase import pdfmetrics


@dataclass(frozen=True)
class TextMetrics:
    """Measures strings set in one registered font.

    ``font_name`` must be known to ReportLab, either one of the 14 standard
    PDF fonts or a TrueType font registered by
    :class:`~itinerarydocs.generators.resources.RenderResources`.
    """

    font_name: str

    def width(self, text: str, size: float) -> float:
        """Advance width of *text* at *size* points. ``""`` measures 0."""
        if not text:
            return 0.0
        return pdfmetrics.stringWidth(text, self.font_name, size)

    def fits(self, text: str, size: float, max_width: float) -> bool:
        return self.width(text, size) <= max_width
