"""Greedy line wrapping against measured glyph widths.

All functions here are pure: the same arguments always produce the same
lines, and empty or whitespace-only input yields an empty list rather
than an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .metrics import TextMetrics

BULLET_GLYPH = "•"
ELLIPSIS = "..."

# A blank line (optionally holding spaces) separates paragraphs
_PARAGRAPH_RE = re.compile(r"\n[ \t]*\n")


@dataclass(frozen=True)
class TextLine:
    """One laid-out line of a section body.

    ``indent`` is the horizontal offset of ``text`` from the column's text
    edge. ``marker`` (a bullet glyph) is drawn at offset 0 when set. A line
    with empty ``text`` and no marker is a paragraph spacer.
    """

    text: str
    indent: float = 0.0
    marker: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.text and not self.marker


def split_token(metrics: TextMetrics, size: float, token: str, max_width: float) -> list[str]:
    """Hard-split *token* into the longest character runs that fit.

    Every chunk holds at least one character, so a glyph wider than
    *max_width* still ends up alone on its own line.
    """
    chunks: list[str] = []
    current = ""
    for ch in token:
        if current and not metrics.fits(current + ch, size, max_width):
            chunks.append(current)
            current = ch
        else:
            current += ch
    if current:
        chunks.append(current)
    return chunks


def _wrap_run(metrics: TextMetrics, size: float, text: str, max_width: float) -> list[str]:
    lines: list[str] = []
    line = ""
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if metrics.fits(candidate, size, max_width):
            line = candidate
            continue
        if line:
            lines.append(line)
            line = ""
        if metrics.fits(word, size, max_width):
            line = word
        else:
            chunks = split_token(metrics, size, word, max_width)
            lines.extend(chunks[:-1])
            line = chunks[-1]
    if line:
        lines.append(line)
    return lines


def wrap(metrics: TextMetrics, size: float, text: str, max_width: float) -> list[str]:
    """Break *text* into lines no wider than *max_width*.

    Paragraphs (separated by a blank line) are wrapped independently and
    joined with a single ``""`` spacer line. A lone newline inside a
    paragraph forces a line break without a spacer.
    """
    if not text or not text.strip():
        return []

    lines: list[str] = []
    for paragraph in _PARAGRAPH_RE.split(text):
        para_lines: list[str] = []
        for run in paragraph.split("\n"):
            para_lines.extend(_wrap_run(metrics, size, run, max_width))
        if not para_lines:
            continue
        if lines:
            lines.append("")
        lines.extend(para_lines)
    return lines


def wrap_bullet(
    metrics: TextMetrics,
    size: float,
    text: str,
    max_width: float,
    *,
    glyph: str = BULLET_GLYPH,
    min_indent: float = 0.0,
) -> list[TextLine]:
    """Wrap one bullet item with a hanging indent.

    The text is wrapped against ``max_width - indent``; the glyph sits on
    the first line and every line's text starts at ``indent``, so
    continuation lines align under the bullet text.
    """
    indent = max(metrics.width(f"{glyph} ", size), min_indent)
    body = wrap(metrics, size, text, max_width - indent)
    lines = [TextLine(text=ln, indent=indent) for ln in body if ln]
    if not lines:
        return []
    lines[0] = TextLine(text=lines[0].text, indent=indent, marker=glyph)
    return lines


def first_line(metrics: TextMetrics, size: float, text: str, max_width: float) -> str:
    """The first wrapped line of *text*, or ``""``."""
    lines = wrap(metrics, size, text, max_width)
    return lines[0] if lines else ""


def truncate(
    metrics: TextMetrics,
    size: float,
    text: str,
    max_width: float,
    ellipsis: str = ELLIPSIS,
) -> str:
    """Shorten *text* to fit on one line, appending *ellipsis* if cut."""
    text = " ".join(text.split())
    if metrics.fits(text, size, max_width):
        return text
    for end in range(len(text) - 1, 0, -1):
        candidate = text[:end].rstrip() + ellipsis
        if metrics.fits(candidate, size, max_width):
            return candidate
    return ellipsis if metrics.fits(ellipsis, size, max_width) else ""
