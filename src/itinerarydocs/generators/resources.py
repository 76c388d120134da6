"""Fonts and logo shared read-only across builds.

Load once at process start with :meth:`RenderResources.load` and pass the
same instance to every :class:`~itinerarydocs.generators.pdf_generator.DocumentBuilder`.
Missing or unreadable assets never fail a build: fonts fall back to the
standard Helvetica pair and the logo falls back to the theme's text logo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from ..layout.metrics import TextMetrics

log = logging.getLogger(__name__)

STANDARD_REGULAR = "Helvetica"
STANDARD_BOLD = "Helvetica-Bold"

# File names looked up inside a font directory, keyed by registered name
CUSTOM_FONT_FILES = {
    "NotoSans": "NotoSans-Regular.ttf",
    "NotoSans-Bold": "NotoSans-Bold.ttf",
}


@dataclass(frozen=True)
class RenderResources:
    """Immutable font names and logo image used by the layout engine."""

    regular_font: str = STANDARD_REGULAR
    bold_font: str = STANDARD_BOLD
    logo: Optional[ImageReader] = None
    custom_fonts: bool = False

    @property
    def regular(self) -> TextMetrics:
        return TextMetrics(self.regular_font)

    @property
    def bold(self) -> TextMetrics:
        return TextMetrics(self.bold_font)

    @property
    def logo_size(self) -> tuple[float, float] | None:
        if self.logo is None:
            return None
        width, height = self.logo.getSize()
        return float(width), float(height)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def standard(cls) -> "RenderResources":
        """Built-in Helvetica fonts and no logo."""
        return cls()

    @classmethod
    def load(
        cls,
        font_dir: str | Path | None = None,
        logo_path: str | Path | None = None,
    ) -> "RenderResources":
        regular, bold, custom = _load_fonts(font_dir)
        return cls(
            regular_font=regular,
            bold_font=bold,
            logo=_load_logo(logo_path),
            custom_fonts=custom,
        )


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def _load_fonts(font_dir: str | Path | None) -> tuple[str, str, bool]:
    if font_dir is None:
        return STANDARD_REGULAR, STANDARD_BOLD, False

    registered = set(pdfmetrics.getRegisteredFontNames())
    try:
        for name, filename in CUSTOM_FONT_FILES.items():
            if name not in registered:
                pdfmetrics.registerFont(TTFont(name, str(Path(font_dir) / filename)))
    except (OSError, TTFError) as exc:
        log.warning("Custom fonts unavailable in %s (%s) -- using Helvetica", font_dir, exc)
        return STANDARD_REGULAR, STANDARD_BOLD, False

    regular, bold = CUSTOM_FONT_FILES
    log.debug("Registered custom fonts %s, %s", regular, bold)
    return regular, bold, True


def _load_logo(logo_path: str | Path | None) -> Optional[ImageReader]:
    if logo_path is None:
        return None
    try:
        reader = ImageReader(str(logo_path))
        width, height = reader.getSize()
    except (OSError, ValueError) as exc:
        log.warning("Logo %s could not be read (%s) -- using text logo", logo_path, exc)
        return None
    if width <= 0 or height <= 0:
        log.warning("Logo %s has no pixels -- using text logo", logo_path)
        return None
    return reader
