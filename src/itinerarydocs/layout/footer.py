"""Second pass: page footers that need the final page count."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from .canvas import Align, Page

if TYPE_CHECKING:
    from ..generators.resources import RenderResources
    from ..generators.themes import Theme


def page_label(number: int, total: int) -> str:
    return f"Page {number} / {total}"


class FooterStamper:
    """Appends a rule, the site name and ``Page i / N`` to each page."""

    def __init__(self, resources: "RenderResources", theme: "Theme", site_name: str = "") -> None:
        self.resources = resources
        self.theme = theme
        self.site_name = site_name or theme.site_name

    def stamp(self, page: Page, number: int, total: int) -> Page:
        """Return a sealed copy of *page* with the footer appended."""
        g = self.theme.geometry
        c = self.theme.colors
        res = self.resources
        stamped = page.copy()

        stamped.draw_line(
            g.margin, g.footer_rule_y, page.width - g.margin, g.footer_rule_y, color=c.line,
        )
        stamped.draw_text(
            g.margin, g.footer_text_y, self.site_name,
            font_name=res.regular_font, size=g.footer_size, color=c.muted,
        )

        label = page_label(number, total)
        label_w = res.regular.width(label, g.footer_size)
        stamped.draw_text(
            page.width - g.margin - label_w, g.footer_text_y, label,
            font_name=res.regular_font, size=g.footer_size, color=c.muted,
            max_width=label_w, align=Align.RIGHT,
        )
        return stamped.seal()

    def stamp_all(self, pages: Sequence[Page], total: int) -> tuple[Page, ...]:
        if total != len(pages):
            raise ValueError(f"total={total} but {len(pages)} page(s) were laid out")
        return tuple(self.stamp(page, i, total) for i, page in enumerate(pages, start=1))


def stamp_footers(
    pages: Sequence[Page],
    total: int,
    resources: "RenderResources",
    theme: "Theme",
    site_name: str = "",
) -> tuple[Page, ...]:
    """Pure footer pass: the input pages are left untouched."""
    return FooterStamper(resources, theme, site_name).stamp_all(pages, total)
