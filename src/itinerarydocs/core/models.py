"""Pydantic models for structured itinerary representation.

These models form the intermediate representation (IR) between the
request payload and the layout engine. The engine only ever consumes an
``ItineraryDocument``; both accepted payload shapes are converted into it
at the boundary (see :mod:`itinerarydocs.core.payload`).
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .sanitize import safe_text


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Column(str, Enum):
    """The two columns of the page grid."""
    LEFT = "left"
    RIGHT = "right"


class PayloadShape(str, Enum):
    """Accepted request body shapes."""
    STRUCTURED = "structured"
    LEGACY = "legacy"


# ---------------------------------------------------------------------------
# Engine input
# ---------------------------------------------------------------------------

class Section(BaseModel):
    """One heading + body + bullets block, the atomic unit of layout."""
    model_config = ConfigDict(frozen=True)

    heading: str = "Section"
    body: str = ""
    bullets: tuple[str, ...] = ()

    @field_validator("heading", mode="before")
    @classmethod
    def _heading(cls, v: object) -> str:
        return safe_text(v, multiline=False) or "Section"

    @field_validator("body", mode="before")
    @classmethod
    def _body(cls, v: object) -> str:
        return safe_text(v, multiline=True)

    @field_validator("bullets", mode="before")
    @classmethod
    def _bullets(cls, v: object) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        cleaned = (safe_text(b, multiline=False) for b in v)
        return tuple(b for b in cleaned if b)


class ItineraryDocument(BaseModel):
    """The canonical, already-sanitised description of one document.

    Immutable for the duration of a render. Empty ``title`` / ``subtitle``
    are replaced by the chrome's defaults when drawn.
    """
    model_config = ConfigDict(frozen=True)

    title: str = ""
    subtitle: str = ""
    customer_name: str = ""
    customer_email: str = ""
    operator_name: str = ""
    operator_country: str = ""
    website: str = ""
    generated_at: str = ""
    sections: tuple[Section, ...] = ()

    @field_validator(
        "title",
        "subtitle",
        "customer_name",
        "customer_email",
        "operator_name",
        "operator_country",
        "website",
        "generated_at",
        mode="before",
    )
    @classmethod
    def _single_line(cls, v: object) -> str:
        return safe_text(v, multiline=False)


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------

class StructuredItinerary(BaseModel):
    """The ``itinerary`` object of the structured payload."""
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    summary: str = ""
    destination: str = ""
    days_count: Optional[float] = Field(default=None, alias="daysCount")
    travel_date: Optional[str] = Field(default=None, alias="travelDate")
    budget_range: str = Field(default="", alias="budgetRange")
    style: str = ""
    group_type: str = Field(default="", alias="groupType")
    days: list[str] = Field(default_factory=list)
    includes: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)
    experiences: list[str] = Field(default_factory=list)

    @field_validator(
        "title", "summary", "destination", "budget_range", "style", "group_type", "travel_date",
        mode="before",
    )
    @classmethod
    def _stringify(cls, v: object) -> str:
        return "" if v is None else str(v)

    @field_validator("days", "includes", "excludes", "experiences", mode="before")
    @classmethod
    def _string_list(cls, v: object) -> list[str]:
        if not isinstance(v, list):
            return []
        return [str(x).strip() for x in v if x is not None and str(x).strip()]

    @field_validator("days_count", mode="before")
    @classmethod
    def _number(cls, v: object) -> Optional[float]:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        return v


class StructuredPayload(BaseModel):
    """``{ itinerary: {...}, travellerName?, email?, operatorName?, ... }``."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    itinerary: StructuredItinerary
    traveller_name: str = Field(default="", alias="travellerName")
    email: str = ""
    subtitle: str = ""
    operator_name: str = Field(default="", alias="operatorName")
    operator_country: str = Field(default="", alias="operatorCountry")
    contact_phone: str = Field(default="", alias="contactPhone")
    contact_email: str = Field(default="", alias="contactEmail")

    @field_validator("*", mode="before")
    @classmethod
    def _stringify(cls, v: object, info: ValidationInfo) -> object:
        if info.field_name == "itinerary":
            return v
        return "" if v is None else str(v)


class LegacyDay(BaseModel):
    """One day record of the legacy payload."""
    model_config = ConfigDict(extra="ignore")

    day: Optional[int] = None
    title: str = ""
    date: str = ""
    locations: list[str] = Field(default_factory=list)
    bullets: list[str] = Field(default_factory=list)
    lodge: str = ""
    meals: str = ""

    @field_validator("day", mode="before")
    @classmethod
    def _day(cls, v: object) -> Optional[int]:
        try:
            return int(v) if v is not None and not isinstance(v, bool) else None
        except (TypeError, ValueError):
            return None

    @field_validator("title", "date", "lodge", "meals", mode="before")
    @classmethod
    def _stringify(cls, v: object) -> str:
        if isinstance(v, list):
            return ", ".join(str(x) for x in v if x)
        return "" if v is None else str(v)

    @field_validator("locations", "bullets", mode="before")
    @classmethod
    def _string_list(cls, v: object) -> list[str]:
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            return []
        return [str(x).strip() for x in v if x is not None and str(x).strip()]


class LegacyPayload(BaseModel):
    """``{ days: [{ day, title, ... }], customerName? | itineraryFor?, ... }``."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    days: list[LegacyDay]
    customer_name: str = Field(default="", alias="customerName")
    itinerary_for: str = Field(default="", alias="itineraryFor")
    customer_email: str = Field(default="", alias="customerEmail")
    title: str = ""
    subtitle: str = ""
    operator_name: str = Field(default="", alias="operatorName")
    operator_country: str = Field(default="", alias="operatorCountry")
    contact_phone: str = Field(default="", alias="contactPhone")
    contact_email: str = Field(default="", alias="contactEmail")

    @field_validator("*", mode="before")
    @classmethod
    def _stringify(cls, v: object, info: ValidationInfo) -> object:
        if info.field_name == "days":
            return v
        return "" if v is None else str(v)

    @property
    def traveller(self) -> str:
        return self.customer_name or self.itinerary_for


# ---------------------------------------------------------------------------
# Generator result
# ---------------------------------------------------------------------------

class GenerationResult(BaseModel):
    """Result of a single generator run."""
    output_path: Path
    page_count: int = 0
    success: bool = True
    error: Optional[str] = None
