"""Tests for request body sanitisation and payload conversion."""

from __future__ import annotations

import json

import pytest

from itinerarydocs.core.errors import InvalidPayloadError
from itinerarydocs.core.models import PayloadShape, Section
from itinerarydocs.core.payload import (
    DEFAULT_TITLE,
    MAX_FOCUS_AREAS,
    clamp_days,
    format_travel_date,
    legacy_day_body,
    parse_payload,
    payload_shape,
    read_payload,
)
from itinerarydocs.core.sanitize import normalize_punctuation, safe_text


# ---------------------------------------------------------------------------
# Sanitisation
# ---------------------------------------------------------------------------

class TestSanitize:
    def test_typographic_punctuation_folds_to_ascii(self):
        assert normalize_punctuation("“Big five” — day’s end…") == '"Big five" - day\'s end...'

    def test_none_is_empty(self):
        assert safe_text(None) == ""

    def test_single_line_collapses_whitespace(self):
        assert safe_text("  Game\n drive\t\tat dawn ") == "Game drive at dawn"

    def test_multiline_keeps_line_breaks(self):
        assert safe_text("Breakfast \n  Game   drive", multiline=True) == "Breakfast\nGame drive"

    def test_multiline_collapses_blank_runs(self):
        assert safe_text("Morning\n\n\n\n\nEvening", multiline=True) == "Morning\n\nEvening"

    def test_control_characters_removed(self):
        assert safe_text("Arusha\x00\x07Town") == "Arusha Town"

    def test_zero_width_removed(self):
        assert safe_text("Sere\u200bngeti\ufeff") == "Serengeti"

    def test_non_strings_are_stringified(self):
        assert safe_text(42) == "42"

    def test_section_model_sanitises(self):
        section = Section(heading="  ", body="Day one\r\n\r\n\r\nDay two", bullets=["  ", "Fees – included", None])
        assert section.heading == "Section"
        assert section.body == "Day one\n\nDay two"
        assert section.bullets == ("Fees - included",)


# ---------------------------------------------------------------------------
# Structured shape
# ---------------------------------------------------------------------------

class TestStructuredPayload:
    def test_section_order(self, structured_body):
        doc = parse_payload(structured_body)
        headings = [s.heading for s in doc.sections]
        assert headings == [
            "Overview", "Day 1", "Day 2", "Day 3", "Day 4", "Day 5", "Day 6",
            "Included", "Not included", "Contact",
        ]

    def test_overview_facts(self, structured_body):
        overview = parse_payload(structured_body).sections[0]
        assert overview.body.startswith("Six days following")
        assert overview.bullets == (
            "Destination: Tanzania",
            "Days: 6",
            "When: Sat Jun 14 2025",
            "Budget: USD 3,500 - 4,200 pp",
        )

    def test_document_fields(self, structured_body):
        doc = parse_payload(structured_body, generated_at="2025-05-01", website="safariconnector.com")
        assert doc.title == "Serengeti & Ngorongoro Explorer"
        assert doc.customer_name == "Amina Odhiambo"
        assert doc.customer_email == "amina@example.com"
        assert doc.operator_name == "Kopje Trails"
        assert doc.generated_at == "2025-05-01"
        assert doc.website == "safariconnector.com"

    def test_contact_bullets(self, structured_body):
        contact = parse_payload(structured_body).sections[-1]
        assert contact.bullets == ("Phone: +255 700 000 000", "Email: hello@kopjetrails.example")

    def test_paragraph_break_survives(self, structured_body):
        day3 = parse_payload(structured_body).sections[3]
        assert "\n\n" in day3.body

    def test_minimal_itinerary(self):
        doc = parse_payload({"itinerary": {"days": ["Arrive", "Depart"]}})
        assert doc.title == DEFAULT_TITLE
        assert [s.heading for s in doc.sections] == ["Day 1", "Day 2"]

    def test_itinerary_as_json_string(self):
        body = {"itineraryResult": json.dumps({"title": "Mara", "days": ["Fly in"]}), "name": "Jonas"}
        doc = parse_payload(body)
        assert doc.title == "Mara"
        assert doc.customer_name == "Jonas"

    def test_data_key_and_customer_aliases(self):
        body = {"data": {"days": ["Arrive"]}, "customerName": "Jonas", "customerEmail": "j@example.com"}
        doc = parse_payload(body)
        assert doc.customer_name == "Jonas"
        assert doc.customer_email == "j@example.com"

    def test_traveller_name_wins_over_aliases(self):
        body = {"itinerary": {"days": ["Arrive"]}, "travellerName": "Amina", "name": "Other"}
        assert parse_payload(body).customer_name == "Amina"

    def test_numbers_are_stringified(self):
        body = {"itinerary": {"days": ["Arrive", 2]}, "contactPhone": 255700000000}
        doc = parse_payload(body)
        assert doc.sections[1].body == "2"
        assert doc.sections[-1].bullets == ("Phone: 255700000000",)

    def test_body_as_json_text(self, structured_body):
        doc = parse_payload(json.dumps(structured_body).encode("utf-8"))
        assert len(doc.sections) == 10

    def test_shape_detection(self, structured_body, legacy_body):
        assert payload_shape(read_payload(structured_body)) is PayloadShape.STRUCTURED
        assert payload_shape(read_payload(legacy_body)) is PayloadShape.LEGACY


class TestOverviewHelpers:
    @pytest.mark.parametrize(
        "value,fallback,expected",
        [(None, 0, 1), (None, 5, 5), (40, 3, 21), (0, 4, 4), (3.7, 9, 3)],
    )
    def test_clamp_days(self, value, fallback, expected):
        assert clamp_days(value, fallback) == expected

    def test_days_count_must_be_numeric(self):
        body = {"itinerary": {"destination": "Kenya", "daysCount": "ten", "days": ["a", "b"]}}
        assert "Days: 2" in parse_payload(body).sections[0].bullets

    def test_format_travel_date(self):
        assert format_travel_date("2025-06-14") == "Sat Jun 14 2025"
        assert format_travel_date("2025-06-14T08:00:00Z") == "Sat Jun 14 2025"
        assert format_travel_date("mid June") == "mid June"
        assert format_travel_date(None) == ""

    def test_facts_survive_without_summary(self):
        body = {
            "itinerary": {
                "destination": "Serengeti",
                "daysCount": 3,
                "budgetRange": "$2000",
                "style": "Luxury",
                "groupType": "Family",
                "experiences": ["Big five", "Balloon safari"],
                "days": ["a", "b", "c"],
            }
        }
        doc = parse_payload(body)
        assert [s.heading for s in doc.sections] == ["Overview", "Focus areas", "Day 1", "Day 2", "Day 3"]
        overview, focus = doc.sections[:2]
        assert overview.body == ""
        assert overview.bullets == (
            "Destination: Serengeti",
            "Days: 3",
            "Budget: $2000",
            "Style: Luxury",
            "Group: Family",
        )
        assert focus.bullets == ("Big five", "Balloon safari")

    def test_days_alone_is_not_an_overview(self):
        doc = parse_payload({"itinerary": {"daysCount": 4, "days": ["a"]}})
        assert doc.sections[0].heading == "Day 1"

    def test_focus_areas_capped(self):
        experiences = [f"Experience {i}" for i in range(20)]
        doc = parse_payload({"itinerary": {"experiences": experiences, "days": ["a"]}})
        focus = doc.sections[0]
        assert focus.heading == "Focus areas"
        assert focus.bullets == tuple(experiences[:MAX_FOCUS_AREAS])


# ---------------------------------------------------------------------------
# Legacy shape
# ---------------------------------------------------------------------------

class TestLegacyPayload:
    def test_headings(self, legacy_body):
        doc = parse_payload(legacy_body)
        assert [s.heading for s in doc.sections] == [
            "Day 1 - Nairobi to the Mara",
            "Day 2 - River crossings",
            "Day 3 - Departure",
            "Contact",
        ]

    def test_day_body(self, legacy_body):
        first = parse_payload(legacy_body).sections[0]
        assert first.body == (
            "2025-08-02 | Nairobi, Maasai Mara | Lodge: Mara Plains Camp | Meals: Lunch, Dinner\n"
            "- Light aircraft from Wilson Airport\n"
            "- Evening game drive"
        )

    def test_document_fields(self, legacy_body):
        doc = parse_payload(legacy_body)
        assert doc.title == "Maasai Mara Short Break"
        assert doc.customer_name == "Jonas Berg"
        assert doc.customer_email == "jonas@example.com"

    def test_itinerary_for_alias(self):
        doc = parse_payload({"days": [{"day": 1}], "itineraryFor": "Jonas"})
        assert doc.customer_name == "Jonas"
        assert doc.title == DEFAULT_TITLE

    def test_missing_day_number_uses_position(self):
        doc = parse_payload({"days": [{"title": "Arrive"}, {"day": "x", "title": "Depart"}]})
        assert [s.heading for s in doc.sections] == ["Day 1 - Arrive", "Day 2 - Depart"]

    def test_empty_day_body(self):
        doc = read_payload({"days": [{"day": 4}]})
        assert legacy_day_body(doc.days[0]) == ""

    def test_same_days_same_section_count(self):
        structured = parse_payload({"itinerary": {"days": ["a", "b", "c"]}})
        legacy = parse_payload({"days": [{"day": 1}, {"day": 2}, {"day": 3}]})
        assert len(structured.sections) == len(legacy.sections) == 3

    def test_same_days_same_body_text(self):
        texts = ["Fly to the Mara.", "Full day game drive.", "Depart after breakfast."]
        structured = parse_payload({"itinerary": {"days": texts}})
        legacy = parse_payload({
            "days": [
                {"day": i, "date": f"2025-08-0{i}", "locations": ["Maasai Mara"], "bullets": [text]}
                for i, text in enumerate(texts, start=1)
            ]
        })
        assert len(structured.sections) == len(legacy.sections)
        for s, l in zip(structured.sections, legacy.sections):
            meta, bullet = l.body.split("\n")
            assert meta.startswith("2025-08-0")
            assert bullet == f"- {s.body}"


# ---------------------------------------------------------------------------
# Rejection
# ---------------------------------------------------------------------------

class TestInvalidPayload:
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"itinerary": {}},
            {"itinerary": {"days": []}},
            {"itinerary": {"days": ["", "  "]}},
            {"days": []},
            {"itinerary": "not json"},
            {"title": "No days at all"},
        ],
    )
    def test_missing_days(self, body):
        with pytest.raises(InvalidPayloadError, match="Missing itinerary days"):
            read_payload(body)

    def test_not_json(self):
        with pytest.raises(InvalidPayloadError, match="not valid JSON"):
            read_payload("{nope")

    def test_not_an_object(self):
        with pytest.raises(InvalidPayloadError, match="JSON object"):
            read_payload([1, 2, 3])

    def test_legacy_days_without_records(self):
        with pytest.raises(InvalidPayloadError, match="day records"):
            read_payload({"days": [1, 2]})

    def test_is_a_value_error_with_400(self):
        with pytest.raises(ValueError) as info:
            read_payload({})
        assert info.value.status_code == 400
