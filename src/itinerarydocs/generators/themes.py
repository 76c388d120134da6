"""Brand themes and page geometry for the itinerary PDF.

A theme bundles the brand palette, the site name printed in the footer,
the text used when no logo image is available, and the ``PageGeometry``
that fixes every layout constant. Themes are frozen; a build never
mutates one.

Usage::

    from itinerarydocs.generators.themes import get_theme

    theme = get_theme("savanna")
    builder = DocumentBuilder(resources, theme=theme)
"""

from __future__ import annotations

from dataclasses import dataclass, field

RGB = tuple[int, int, int]


# ---------------------------------------------------------------------------
# Theme dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BrandColors:
    """All color slots used by the chrome, boxes and footer. RGB tuples."""

    primary: RGB = (27, 77, 62)          # header band
    primary_dark: RGB = (17, 55, 45)     # heading pill text
    sand: RGB = (246, 244, 235)          # meta strip, heading pill
    ink: RGB = (20, 26, 31)              # body text
    muted: RGB = (89, 102, 115)          # labels, footer
    line: RGB = (219, 224, 230)          # rules and box borders
    white: RGB = (255, 255, 255)
    subtitle: RGB = (235, 242, 242)      # subtitle on the header band
    box_fill: RGB = (255, 255, 255)


@dataclass(frozen=True)
class PageGeometry:
    """Every layout constant, in PDF points (A4 portrait by default)."""

    page_width: float = 595.28
    page_height: float = 841.89
    margin: float = 42

    # Chrome
    header_height: float = 92
    logo_card_width: float = 180
    logo_card_height: float = 54
    logo_padding: float = 10
    title_size: float = 18
    subtitle_size: float = 10
    title_gap: float = 16
    meta_strip_height: float = 54
    meta_label_size: float = 8.5
    meta_value_size: float = 10.5
    content_gap: float = 18

    # Columns and boxes
    column_gap: float = 16
    content_bottom: float = 58
    safety_margin: float = 90
    box_padding: float = 12
    bullet_indent_min: float = 14
    body_size: float = 10.5
    line_height: float = 14
    blank_line_ratio: float = 0.55
    heading_area: float = 34
    text_offset: float = 52
    text_padding: float = 8
    min_box_height: float = 84
    section_gap: float = 14

    # Heading pill
    pill_height: float = 18
    pill_max_width: float = 220
    heading_size: float = 9
    heading_line_height: float = 11

    # Footer
    footer_rule_y: float = 44
    footer_text_y: float = 26
    footer_size: float = 9

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin * 2

    @property
    def column_width(self) -> float:
        return (self.content_width - self.column_gap) / 2


@dataclass(frozen=True)
class Theme:
    """Complete theme definition."""

    name: str = "safari"
    display_name: str = "Safari Green"
    description: str = "Deep bush green with sand accents."
    site_name: str = "safariconnector.com"
    logo_text: str = "SAFARI CONNECTOR"
    default_title: str = "Branded Itinerary"
    default_subtitle: str = "AI Trip Builder - Branded Itinerary"
    colors: BrandColors = field(default_factory=BrandColors)
    geometry: PageGeometry = field(default_factory=PageGeometry)


# ---------------------------------------------------------------------------
# Built-in themes
# ---------------------------------------------------------------------------

SAFARI_THEME = Theme()

SAVANNA_THEME = Theme(
    name="savanna",
    display_name="Savanna Gold",
    description="Warm ochre header with dusty earth tones.",
    colors=BrandColors(
        primary=(156, 102, 31),
        primary_dark=(110, 68, 17),
        sand=(250, 243, 228),
        ink=(40, 30, 20),
        muted=(120, 100, 80),
        line=(228, 216, 196),
        subtitle=(252, 240, 220),
    ),
)

OCEAN_THEME = Theme(
    name="ocean",
    display_name="Zanzibar Ocean",
    description="Calm teal for coastal and island itineraries.",
    colors=BrandColors(
        primary=(0, 105, 92),
        primary_dark=(0, 77, 64),
        sand=(232, 245, 243),
        ink=(38, 50, 56),
        muted=(96, 125, 139),
        line=(178, 223, 219),
        subtitle=(224, 242, 241),
    ),
)

MINIMAL_THEME = Theme(
    name="minimal",
    display_name="Minimal Mono",
    description="Black-and-white, printer friendly.",
    colors=BrandColors(
        primary=(30, 30, 30),
        primary_dark=(20, 20, 20),
        sand=(242, 242, 242),
        ink=(30, 30, 30),
        muted=(110, 110, 110),
        line=(210, 210, 210),
        subtitle=(230, 230, 230),
    ),
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_THEME_REGISTRY: dict[str, Theme] = {
    t.name: t
    for t in [
        SAFARI_THEME,
        SAVANNA_THEME,
        OCEAN_THEME,
        MINIMAL_THEME,
    ]
}


def get_theme(name: str) -> Theme:
    """Get a theme by name. Raises ``KeyError`` if not found."""
    key = name.lower().strip()
    if key not in _THEME_REGISTRY:
        available = ", ".join(sorted(_THEME_REGISTRY.keys()))
        raise KeyError(f"Unknown theme '{name}'. Available: {available}")
    return _THEME_REGISTRY[key]


def list_themes() -> list[Theme]:
    """Return all registered themes."""
    return list(_THEME_REGISTRY.values())


def register_theme(theme: Theme) -> None:
    """Register a custom theme at runtime."""
    _THEME_REGISTRY[theme.name.lower().strip()] = theme


DEFAULT_THEME = SAFARI_THEME
