"""Normalise free text before it reaches the layout engine.

The standard PDF fonts only cover a Latin-1-like repertoire, so typographic
punctuation is folded to plain ASCII before any measurement happens. This
keeps measured widths and drawn glyphs in agreement.
"""

from __future__ import annotations

import re

_TYPOGRAPHIC = str.maketrans({
    "\u2018": "'",  # left single quote
    "\u2019": "'",
    "\u201a": "'",
    "\u201b": "'",
    "\u2032": "'",  # prime
    "\u201c": '"',  # left double quote
    "\u201d": '"',
    "\u201e": '"',
    "\u201f": '"',
    "\u2033": '"',
    "\u2010": "-",  # hyphen
    "\u2011": "-",
    "\u2012": "-",
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
    "\u2015": "-",
    "\u2212": "-",  # minus
    "\u2022": "-",  # bullet
    "\u2023": "-",
    "\u2043": "-",
    "\u25aa": "-",
    "\u25e6": "-",
    "\u00b7": "-",  # middle dot
    "\u2026": "...",
    "\u00a0": " ",  # no-break space
    "\u2007": " ",
    "\u202f": " ",
    "\u200b": "",  # zero-width space
    "\u200c": "",
    "\u200d": "",
    "\ufeff": "",
})

# C0/C1 control characters other than newline
_CONTROL_RE = re.compile(r"[\x00-\x09\x0b-\x1f\x7f-\x9f]")
# Horizontal whitespace runs
_SPACES_RE = re.compile(r"[ \t\f\v]+")
# Three or more newlines (possibly with blanks between) collapse to one blank line
_BLANK_RUN_RE = re.compile(r"\n\s*\n(\s*\n)+")


def normalize_punctuation(text: str) -> str:
    """Fold typographic quotes, dashes, bullets and ellipses to ASCII."""
    return text.translate(_TYPOGRAPHIC)


def safe_text(value: object, multiline: bool = False) -> str:
    """Return *value* as clean text suitable for measurement.

    ``None`` becomes ``""``. With ``multiline=False`` every whitespace run
    (newlines included) collapses to a single space. With ``multiline=True``
    line structure is kept: each line is collapsed and stripped, and runs
    of blank lines shrink to a single blank line, which the wrapper treats
    as a paragraph break.
    """
    if value is None:
        return ""
    text = normalize_punctuation(str(value))
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _CONTROL_RE.sub(" ", text)

    if not multiline:
        return " ".join(text.split())

    lines = [_SPACES_RE.sub(" ", ln).strip() for ln in text.split("\n")]
    joined = "\n".join(lines).strip("\n")
    return _BLANK_RUN_RE.sub("\n\n", joined)
