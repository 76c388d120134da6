"""Layout engine: measurement, wrapping, page recording and pagination.

Nothing in this package touches the PDF backend directly. Pages are
recorded as draw commands and replayed by
:mod:`itinerarydocs.generators.renderer`.
"""
