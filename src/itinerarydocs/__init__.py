"""itinerarydocs — branded, paginated itinerary PDFs."""

__version__ = "0.1.0"
