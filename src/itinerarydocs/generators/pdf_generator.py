"""Build a branded itinerary PDF from an ``ItineraryDocument``.

The build is an explicit two-phase pipeline:

1. :func:`~itinerarydocs.layout.flow.layout` flows every section into
   sealed pages and yields the final page count;
2. :func:`~itinerarydocs.layout.footer.stamp_footers` appends
   ``Page i / N`` footers now that ``N`` is known.

The stamped pages are then replayed onto a ReportLab canvas and returned
as bytes. Nothing is written to disk unless :class:`PdfGenerator` is used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..core.errors import DocumentSerializationError
from ..core.models import GenerationResult, ItineraryDocument
from ..layout.canvas import Page
from ..layout.flow import LayoutResult, SectionPlacement, layout
from ..layout.footer import stamp_footers
from .base import BaseGenerator
from .renderer import ReportLabRenderer
from .resources import RenderResources
from .themes import DEFAULT_THEME, Theme

log = logging.getLogger(__name__)

FILENAME_LIMIT = 80


def download_name(
    document: ItineraryDocument,
    default_title: str = DEFAULT_THEME.default_title,
    limit: int = FILENAME_LIMIT,
) -> str:
    """``"{title} - {traveller}"`` (or just the title), cut to *limit* chars."""
    title = document.title or default_title
    name = f"{title} - {document.customer_name}" if document.customer_name else title
    return name[:limit].strip()


@dataclass(frozen=True)
class BuiltDocument:
    """Finished PDF bytes plus what the layout pass decided."""

    content: bytes
    page_count: int
    placements: tuple[SectionPlacement, ...]


class DocumentBuilder:
    """Public entry point of the layout engine.

    A builder holds only read-only collaborators, so one instance can
    serve many concurrent builds; every :meth:`build` call creates its own
    pages and cursors.
    """

    def __init__(
        self,
        resources: RenderResources | None = None,
        theme: Theme | None = None,
        renderer: ReportLabRenderer | None = None,
    ) -> None:
        self.resources = resources or RenderResources.standard()
        self.theme = theme or DEFAULT_THEME
        self.renderer = renderer or ReportLabRenderer()

    def title_for(self, document: ItineraryDocument) -> str:
        return document.title or self.theme.default_title

    def download_name(self, document: ItineraryDocument) -> str:
        """Attachment name built from the same title the PDF metadata carries."""
        return download_name(document, self.theme.default_title)

    def layout(self, document: ItineraryDocument) -> LayoutResult:
        return layout(document, self.resources, self.theme)

    def stamp_footers(self, document: ItineraryDocument, pages: Sequence[Page], total: int) -> tuple[Page, ...]:
        site = document.website or self.theme.site_name
        return stamp_footers(pages, total, self.resources, self.theme, site)

    def build_document(self, document: ItineraryDocument) -> BuiltDocument:
        result = self.layout(document)
        pages = self.stamp_footers(document, result.pages, result.page_count)

        author = document.operator_name or document.website or self.theme.site_name
        try:
            content = self.renderer.render(
                pages,
                title=self.title_for(document),
                author=author,
                subject=document.subtitle or self.theme.default_subtitle,
            )
        except Exception as exc:
            log.exception("PDF serialisation failed for %r", document.title)
            raise DocumentSerializationError("PDF generation failed") from exc

        log.debug("Built %d page(s), %d bytes", result.page_count, len(content))
        return BuiltDocument(
            content=content,
            page_count=result.page_count,
            placements=result.placements,
        )

    def build(self, document: ItineraryDocument) -> bytes:
        """Lay out, stamp and serialise *document*; return the PDF bytes."""
        return self.build_document(document).content


class PdfGenerator(BaseGenerator):
    """Writes the built PDF to an output directory."""

    extension = "pdf"

    def generate(self, doc: ItineraryDocument, output_dir: Path) -> GenerationResult:
        output_dir = self._ensure_dir(Path(output_dir))
        builder = DocumentBuilder(self.resources, self.theme)
        output_path = output_dir / self._safe_filename(builder.download_name(doc), self.extension)
        try:
            built = builder.build_document(doc)
            output_path.write_bytes(built.content)
        except (DocumentSerializationError, OSError) as exc:
            return GenerationResult(output_path=output_path, success=False, error=str(exc))
        return GenerationResult(output_path=output_path, page_count=built.page_count)
