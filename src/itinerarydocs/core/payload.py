"""Convert request bodies into the canonical ``ItineraryDocument``.

Two body shapes are accepted for backward compatibility:

* **structured** -- ``{"itinerary": {"title", "summary", "days": [str, ...],
  ...}, "travellerName", "email", ...}``
* **legacy** -- ``{"days": [{"day", "title", "date", "locations",
  "bullets", "lodge", "meals"}, ...], "customerName" | "itineraryFor", ...}``

Whichever shape arrives, the layout engine only ever sees the single
``ItineraryDocument`` produced here.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Union

from pydantic import ValidationError

from .errors import InvalidPayloadError
from .models import (
    ItineraryDocument,
    LegacyDay,
    LegacyPayload,
    PayloadShape,
    Section,
    StructuredItinerary,
    StructuredPayload,
)

log = logging.getLogger(__name__)

DEFAULT_TITLE = "Safari Itinerary"
MIN_DAYS = 1
MAX_DAYS = 21
MAX_FOCUS_AREAS = 14

# Keys that may carry the structured itinerary object, in lookup order
_ITINERARY_KEYS = ("itinerary", "itineraryResult", "data")

ParsedPayload = Union[StructuredPayload, LegacyPayload]


# ---------------------------------------------------------------------------
# Shape detection
# ---------------------------------------------------------------------------

def _resolve_itinerary(body: dict[str, Any]) -> dict[str, Any] | None:
    for key in _ITINERARY_KEYS:
        candidate = body.get(key)
        if isinstance(candidate, str):
            try:
                candidate = json.loads(candidate)
            except json.JSONDecodeError:
                log.debug("'%s' is a string but not JSON; ignoring", key)
                continue
        if isinstance(candidate, dict):
            return candidate
    return None


def _has_days(value: Any) -> bool:
    return isinstance(value, list) and any(
        d is not None and str(d).strip() for d in value
    )


def read_payload(body: Any) -> ParsedPayload:
    """Validate *body* into one of the two payload models.

    Raises :class:`InvalidPayloadError` when neither ``itinerary.days[]``
    nor a legacy ``days[]`` list can be found.
    """
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as exc:
            raise InvalidPayloadError(f"Request body is not valid JSON: {exc.msg}") from exc
    if not isinstance(body, dict):
        raise InvalidPayloadError("Request body must be a JSON object")

    itinerary = _resolve_itinerary(body)
    try:
        if itinerary is not None and _has_days(itinerary.get("days")):
            fields = dict(body)
            fields["itinerary"] = itinerary
            fields["travellerName"] = (
                body.get("travellerName") or body.get("name") or body.get("customerName") or ""
            )
            fields["email"] = body.get("email") or body.get("customerEmail") or ""
            return StructuredPayload.model_validate(fields)

        if _has_days(body.get("days")):
            days = [d for d in body["days"] if isinstance(d, dict)]
            if not days:
                raise InvalidPayloadError("Legacy 'days' must be a list of day records")
            return LegacyPayload.model_validate({**body, "days": days})
    except ValidationError as exc:
        raise InvalidPayloadError(f"Malformed itinerary payload: {exc.error_count()} error(s)") from exc

    raise InvalidPayloadError("Missing itinerary days: expected 'itinerary.days[]' or 'days[]'")


def payload_shape(payload: ParsedPayload) -> PayloadShape:
    if isinstance(payload, StructuredPayload):
        return PayloadShape.STRUCTURED
    return PayloadShape.LEGACY


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def format_travel_date(value: str | None) -> str:
    """Render an ISO date as ``Sat Jun 14 2025``; other text passes through."""
    if not value:
        return ""
    raw = value.strip()
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return raw
    return parsed.strftime("%a %b %d %Y")


def clamp_days(value: float | None, fallback: int) -> int:
    n = int(value) if value is not None and value > 0 else fallback
    return max(MIN_DAYS, min(MAX_DAYS, n))


def _contact_section(phone: str, email: str) -> list[Section]:
    bullets: list[str] = []
    if phone.strip():
        bullets.append(f"Phone: {phone.strip()}")
    if email.strip():
        bullets.append(f"Email: {email.strip()}")
    if not bullets:
        return []
    return [Section(heading="Contact", bullets=bullets)]


def trip_facts(it: StructuredItinerary) -> list[str]:
    """``Label: value`` facts given by the itinerary, in display order.

    ``Days`` is derived rather than given, so it only joins the list when
    at least one other fact is present.
    """
    days = str(clamp_days(it.days_count, len(it.days)))
    facts = [
        ("Destination", it.destination.strip()),
        ("Days", days),
        ("When", format_travel_date(it.travel_date)),
        ("Budget", it.budget_range.strip()),
        ("Style", it.style.strip()),
        ("Group", it.group_type.strip()),
    ]
    present = [(label, value) for label, value in facts if value]
    if len(present) == 1:
        return []
    return [f"{label}: {value}" for label, value in present]


def _overview_section(it: StructuredItinerary) -> list[Section]:
    facts = trip_facts(it)
    if not it.summary.strip() and not facts:
        return []
    return [Section(heading="Overview", body=it.summary, bullets=facts)]


def _focus_section(it: StructuredItinerary) -> list[Section]:
    if not it.experiences:
        return []
    return [Section(heading="Focus areas", bullets=it.experiences[:MAX_FOCUS_AREAS])]


def structured_sections(payload: StructuredPayload) -> list[Section]:
    it = payload.itinerary
    sections = _overview_section(it) + _focus_section(it)
    sections += [
        Section(heading=f"Day {i + 1}", body=text)
        for i, text in enumerate(it.days)
    ]
    if it.includes:
        sections.append(Section(heading="Included", bullets=it.includes))
    if it.excludes:
        sections.append(Section(heading="Not included", bullets=it.excludes))
    sections += _contact_section(payload.contact_phone, payload.contact_email)
    return sections


def legacy_day_body(day: LegacyDay) -> str:
    """Flatten one legacy day record into a single body string.

    The first line carries date, locations, lodge and meals; each bullet
    follows on its own line.
    """
    meta = [
        day.date.strip(),
        ", ".join(day.locations),
        f"Lodge: {day.lodge.strip()}" if day.lodge.strip() else "",
        f"Meals: {day.meals.strip()}" if day.meals.strip() else "",
    ]
    lines = []
    meta_line = " | ".join(part for part in meta if part)
    if meta_line:
        lines.append(meta_line)
    lines.extend(f"- {b}" for b in day.bullets)
    return "\n".join(lines)


def legacy_sections(payload: LegacyPayload) -> list[Section]:
    sections = []
    for position, day in enumerate(payload.days, start=1):
        number = day.day if day.day is not None else position
        heading = f"Day {number}"
        if day.title.strip():
            heading = f"{heading} - {day.title.strip()}"
        sections.append(Section(heading=heading, body=legacy_day_body(day)))
    sections += _contact_section(payload.contact_phone, payload.contact_email)
    return sections


def to_document(
    payload: ParsedPayload,
    *,
    generated_at: str = "",
    website: str = "",
) -> ItineraryDocument:
    """Convert a validated payload into the engine's canonical document."""
    if isinstance(payload, StructuredPayload):
        return ItineraryDocument(
            title=payload.itinerary.title.strip() or DEFAULT_TITLE,
            subtitle=payload.subtitle,
            customer_name=payload.traveller_name,
            customer_email=payload.email,
            operator_name=payload.operator_name,
            operator_country=payload.operator_country,
            website=website,
            generated_at=generated_at,
            sections=structured_sections(payload),
        )

    return ItineraryDocument(
        title=payload.title.strip() or DEFAULT_TITLE,
        subtitle=payload.subtitle,
        customer_name=payload.traveller,
        customer_email=payload.customer_email,
        operator_name=payload.operator_name,
        operator_country=payload.operator_country,
        website=website,
        generated_at=generated_at,
        sections=legacy_sections(payload),
    )


def parse_payload(body: Any, *, generated_at: str = "", website: str = "") -> ItineraryDocument:
    """Validate a raw request body and return the canonical document."""
    payload = read_payload(body)
    document = to_document(payload, generated_at=generated_at, website=website)
    log.debug(
        "Resolved %s payload into %d section(s)",
        payload_shape(payload).value,
        len(document.sections),
    )
    return document
