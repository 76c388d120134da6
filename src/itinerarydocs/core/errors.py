"""Error taxonomy shared by the payload boundary and the PDF builder."""

from __future__ import annotations


class ItineraryDocsError(Exception):
    """Base class for every error raised by itinerarydocs."""

    status_code: int = 500


class InvalidPayloadError(ItineraryDocsError, ValueError):
    """The request body does not resolve to any itinerary sections."""

    status_code = 400


class DocumentSerializationError(ItineraryDocsError):
    """The PDF backend failed while assembling the byte stream."""

    status_code = 500
