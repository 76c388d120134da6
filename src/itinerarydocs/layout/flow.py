"""Two-column pagination: the first pass of a build.

Sections are dealt round-robin by their global index (0 left, 1 right,
2 left, ...). Each column keeps its own cursor. A section that does not
fit below its column's cursor moves, whole, to a fresh page; starting a
page redraws the chrome and resets *both* cursors.

The page count is only known once :meth:`PageFlowController.run`
returns, which is why footers are stamped in a separate pass (see
:mod:`itinerarydocs.layout.footer`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..core.models import Column, ItineraryDocument, Section
from .canvas import Page
from .chrome import DocumentChrome
from .section_box import BoxPlacement, SectionBox

if TYPE_CHECKING:
    from ..generators.resources import RenderResources
    from ..generators.themes import Theme

log = logging.getLogger(__name__)


class FlowState(str, Enum):
    AWAITING_SECTION = "awaiting_section"
    PLACING = "placing"
    OVERFLOWED = "overflowed"
    DONE = "done"


@dataclass(frozen=True)
class SectionPlacement:
    """Where one section ended up."""

    index: int
    page_number: int
    column: Column
    top_y: float
    box_height: float
    forced: bool = False
    dropped_lines: int = 0


@dataclass(frozen=True)
class LayoutResult:
    pages: tuple[Page, ...]
    placements: tuple[SectionPlacement, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)


class PageFlowController:
    """Flows a document's sections into pages.

    One controller lays out one document once; it owns its pages and
    cursors and shares nothing with other controllers.
    """

    def __init__(self, document: ItineraryDocument, resources: "RenderResources", theme: "Theme") -> None:
        g = theme.geometry
        self.document = document
        self.theme = theme
        self.chrome = DocumentChrome(document, resources, theme)
        self.box = SectionBox(resources, theme, g.column_width)
        self.column_x = {
            Column.LEFT: g.margin,
            Column.RIGHT: g.margin + g.column_width + g.column_gap,
        }

        self.state = FlowState.AWAITING_SECTION
        self.pages: list[Page] = []
        self.placements: list[SectionPlacement] = []
        self.cursors: dict[Column, float] = {}
        self.content_top = 0.0

    @staticmethod
    def column_for(index: int) -> Column:
        return Column.LEFT if index % 2 == 0 else Column.RIGHT

    @property
    def page(self) -> Page:
        return self.pages[-1]

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def new_page(self) -> Page:
        """Seal the current page, open the next one and reset both cursors."""
        g = self.theme.geometry
        if self.pages:
            self.page.seal()
        page = Page(len(self.pages) + 1, g.page_width, g.page_height)
        self.pages.append(page)
        self.content_top = self.chrome.draw(page)
        self.cursors = {Column.LEFT: self.content_top, Column.RIGHT: self.content_top}
        log.debug("Started page %d (content top %.1f)", page.number, self.content_top)
        return page

    def column_is_empty(self, column: Column) -> bool:
        return self.cursors[column] >= self.content_top

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _attempt(self, column: Column, section: Section, force: bool) -> BoxPlacement:
        return self.box.measure_and_place(
            self.page, self.column_x[column], self.cursors[column], section, force=force,
        )

    def place(self, index: int, section: Section) -> SectionPlacement:
        column = self.column_for(index)
        self.state = FlowState.PLACING
        placement = self._attempt(column, section, force=False)

        if not placement.fits and not self.column_is_empty(column):
            self.state = FlowState.OVERFLOWED
            self.new_page()
            self.state = FlowState.PLACING
            placement = self._attempt(column, section, force=False)

        if not placement.fits:
            # An empty column is as much room as any page offers; retrying
            # would loop forever.
            placement = self._attempt(column, section, force=True)
            log.warning(
                "Section %d (%r) is taller than a full column (%.0fpt); "
                "placed clamped on page %d, %d line(s) dropped",
                index,
                section.heading,
                self.box.measure(section).height,
                self.page.number,
                placement.dropped_lines,
            )

        top_y = self.cursors[column]
        self.cursors[column] = placement.cursor_y
        record = SectionPlacement(
            index=index,
            page_number=self.page.number,
            column=column,
            top_y=top_y,
            box_height=placement.box_height,
            forced=placement.forced,
            dropped_lines=placement.dropped_lines,
        )
        self.placements.append(record)
        self.state = FlowState.AWAITING_SECTION
        return record

    def run(self) -> LayoutResult:
        """Lay out every section and return the sealed pages."""
        self.pages = []
        self.placements = []
        self.new_page()
        for index, section in enumerate(self.document.sections):
            self.place(index, section)
        self.page.seal()
        self.state = FlowState.DONE
        log.debug(
            "Laid out %d section(s) on %d page(s)",
            len(self.placements),
            len(self.pages),
        )
        return LayoutResult(pages=tuple(self.pages), placements=tuple(self.placements))


def layout(document: ItineraryDocument, resources: "RenderResources", theme: "Theme") -> LayoutResult:
    """First pass: flow *document* into sealed pages."""
    return PageFlowController(document, resources, theme).run()
