"""Shared fixtures for the itinerarydocs test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from itinerarydocs.core.models import ItineraryDocument, Section
from itinerarydocs.generators.renderer import ReportLabRenderer
from itinerarydocs.generators.resources import RenderResources
from itinerarydocs.generators.themes import DEFAULT_THEME

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@pytest.fixture
def resources():
    return RenderResources.standard()


@pytest.fixture
def theme():
    return DEFAULT_THEME


@pytest.fixture
def structured_body():
    return json.loads((EXAMPLES_DIR / "serengeti_structured.json").read_text(encoding="utf-8"))


@pytest.fixture
def legacy_body():
    return json.loads((EXAMPLES_DIR / "maasai_mara_legacy.json").read_text(encoding="utf-8"))


class ExplodingRenderer(ReportLabRenderer):
    """Renderer whose backend always fails."""

    def render(self, pages, *, title="", author="", subject=""):
        raise RuntimeError("disk on fire")


def tall_section(heading: str, lines: int) -> Section:
    """A section whose body is *lines* short hard-broken lines."""
    return Section(heading=heading, body="\n".join(f"Line {i}" for i in range(lines)))


def make_document(*sections: Section, **fields) -> ItineraryDocument:
    fields.setdefault("title", "Test Safari")
    fields.setdefault("customer_name", "Amina")
    return ItineraryDocument(sections=sections, **fields)
