"""Request-scoped boundary between a web handler and the PDF builder.

A handler passes the decoded JSON body in and copies the returned
``PdfResponse`` (status, headers, body) onto its own response object.
Invalid input never reaches the layout engine, and a failed build never
yields a partial PDF.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable
from urllib.parse import quote

from .core.errors import DocumentSerializationError, InvalidPayloadError
from .core.payload import parse_payload
from .generators.pdf_generator import DocumentBuilder

log = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
JSON_CONTENT_TYPE = "application/json"
GENERIC_FAILURE = "PDF generation failed"


@dataclass(frozen=True)
class PdfResponse:
    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200


def content_disposition(name: str) -> str:
    """``attachment`` disposition with an ASCII fallback and an RFC 5987 name."""
    fallback = name.encode("ascii", "ignore").decode("ascii").replace('"', "'").strip() or "itinerary"
    return f"attachment; filename=\"{fallback}.pdf\"; filename*=UTF-8''{quote(name + '.pdf')}"


def error_response(status: int, message: str) -> PdfResponse:
    return PdfResponse(
        status=status,
        body=json.dumps({"error": message}).encode("utf-8"),
        headers={"Content-Type": JSON_CONTENT_TYPE, "Cache-Control": "no-store"},
    )


class ItineraryPdfService:
    """Turns request bodies into PDF responses with one shared builder."""

    def __init__(
        self,
        builder: DocumentBuilder | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.builder = builder or DocumentBuilder()
        self.today = today

    def render(self, body: Any) -> PdfResponse:
        try:
            document = parse_payload(
                body,
                generated_at=self.today().isoformat(),
                website=self.builder.theme.site_name,
            )
        except InvalidPayloadError as exc:
            log.info("Rejected itinerary payload: %s", exc)
            return error_response(exc.status_code, str(exc))

        try:
            content = self.builder.build(document)
        except DocumentSerializationError as exc:
            return error_response(exc.status_code, GENERIC_FAILURE)

        return PdfResponse(
            status=200,
            body=content,
            headers={
                "Content-Type": PDF_CONTENT_TYPE,
                "Content-Disposition": content_disposition(self.builder.download_name(document)),
                "Cache-Control": "no-store",
                "Content-Length": str(len(content)),
            },
        )


def render_itinerary_pdf(body: Any, builder: DocumentBuilder | None = None) -> PdfResponse:
    """One-shot convenience wrapper around :class:`ItineraryPdfService`."""
    return ItineraryPdfService(builder).render(body)
