"""Header band and meta strip repeated at the top of every page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.models import ItineraryDocument
from .canvas import Page
from .wrapping import first_line, truncate

if TYPE_CHECKING:
    from ..generators.resources import RenderResources
    from ..generators.themes import Theme

# Meta strip rows, measured from the strip's bottom edge
_META_ROW1_OFFSET = 33
_META_ROW2_OFFSET = 14
_META_LABEL_GAP = 6
# Fallback text logo placement inside the logo card
_LOGO_TEXT_SIZE = 12
_LOGO_TEXT_INSET = 12
_LOGO_TEXT_RISE = 18
# Baselines below the page top
_TITLE_DROP = 44
_SUBTITLE_DROP = 62


class DocumentChrome:
    """Draws the same branded header and meta strip on every page.

    Stateless with respect to page number: the chrome of page 7 is
    identical to the chrome of page 1.
    """

    def __init__(self, document: ItineraryDocument, resources: "RenderResources", theme: "Theme") -> None:
        self.document = document
        self.resources = resources
        self.theme = theme

    @property
    def title(self) -> str:
        return self.document.title or self.theme.default_title

    @property
    def subtitle(self) -> str:
        return self.document.subtitle or self.theme.default_subtitle

    @property
    def website(self) -> str:
        return self.document.website or self.theme.site_name

    def draw(self, page: Page) -> float:
        """Draw header and meta strip; return the top-of-content Y."""
        g = self.theme.geometry
        header_bottom = page.height - g.header_height
        self.draw_header(page)
        rule_y = self.draw_meta_strip(page, header_bottom)
        return rule_y - g.content_gap

    # ------------------------------------------------------------------
    # Header band
    # ------------------------------------------------------------------

    def draw_header(self, page: Page) -> None:
        g = self.theme.geometry
        c = self.theme.colors
        fonts = self.resources

        page.draw_rect(0, page.height - g.header_height, page.width, g.header_height, fill=c.primary)

        # White card keeps the logo legible on the brand color
        card_x = g.margin
        card_y = page.height - g.header_height + (g.header_height - g.logo_card_height) / 2
        page.draw_rect(card_x, card_y, g.logo_card_width, g.logo_card_height, fill=c.white)
        self._draw_logo(page, card_x, card_y)

        text_x = card_x + g.logo_card_width + g.title_gap
        max_w = page.width - text_x - g.margin
        title = first_line(fonts.bold, g.title_size, self.title, max_w)
        subtitle = first_line(fonts.regular, g.subtitle_size, self.subtitle, max_w)
        page.draw_text(
            text_x, page.height - _TITLE_DROP, title,
            font_name=fonts.bold_font, size=g.title_size, color=c.white, max_width=max_w,
        )
        page.draw_text(
            text_x, page.height - _SUBTITLE_DROP, subtitle,
            font_name=fonts.regular_font, size=g.subtitle_size, color=c.subtitle, max_width=max_w,
        )

    def _draw_logo(self, page: Page, card_x: float, card_y: float) -> None:
        g = self.theme.geometry
        size = self.resources.logo_size
        if size is None:
            text = truncate(
                self.resources.bold, _LOGO_TEXT_SIZE, self.theme.logo_text,
                g.logo_card_width - _LOGO_TEXT_INSET * 2,
            )
            page.draw_text(
                card_x + _LOGO_TEXT_INSET, card_y + _LOGO_TEXT_RISE, text,
                font_name=self.resources.bold_font, size=_LOGO_TEXT_SIZE,
                color=self.theme.colors.primary,
            )
            return

        img_w, img_h = size
        box_w = g.logo_card_width - g.logo_padding * 2
        box_h = g.logo_card_height - g.logo_padding * 2
        scale = min(box_w / img_w, box_h / img_h)
        w, h = img_w * scale, img_h * scale
        page.draw_image(
            self.resources.logo,
            card_x + (g.logo_card_width - w) / 2,
            card_y + (g.logo_card_height - h) / 2,
            w,
            h,
        )

    # ------------------------------------------------------------------
    # Meta strip
    # ------------------------------------------------------------------

    def meta_fields(self) -> tuple[tuple[str, str], ...]:
        """``(label, value)`` pairs: left column first, then right column."""
        doc = self.document
        operator = doc.operator_name
        if operator and doc.operator_country:
            operator = f"{operator} - {doc.operator_country}"
        return (
            ("Prepared for", doc.customer_name or "Client"),
            ("Email", doc.customer_email or "-"),
            ("Selected operator", operator or "Verified Operator"),
            ("Generated", doc.generated_at or self.website),
        )

    def draw_meta_strip(self, page: Page, y_top: float) -> float:
        """Draw the strip hanging from *y_top*; return the Y of its rule."""
        g = self.theme.geometry
        c = self.theme.colors
        y = y_top - g.meta_strip_height
        page.draw_rect(0, y, page.width, g.meta_strip_height, fill=c.sand)

        half_w = page.width / 2 - g.margin - 16
        columns = (g.margin, page.width / 2 + 8)
        rows = (y + _META_ROW1_OFFSET, y + _META_ROW2_OFFSET)
        fields = self.meta_fields()

        for i, (label, value) in enumerate(fields):
            x = columns[i // 2]
            row_y = rows[i % 2]
            label_text = f"{label}:"
            label_w = self.resources.regular.width(label_text, g.meta_label_size) + _META_LABEL_GAP
            page.draw_text(
                x, row_y, label_text,
                font_name=self.resources.regular_font, size=g.meta_label_size, color=c.muted,
            )
            # First row of each column carries the emphasised value
            metrics = self.resources.bold if i % 2 == 0 else self.resources.regular
            font_name = self.resources.bold_font if i % 2 == 0 else self.resources.regular_font
            page.draw_text(
                x + label_w, row_y,
                truncate(metrics, g.meta_value_size, value, half_w - label_w),
                font_name=font_name, size=g.meta_value_size, color=c.ink,
                max_width=half_w - label_w,
            )

        page.draw_line(g.margin, y, page.width - g.margin, y, color=c.line)
        return y
