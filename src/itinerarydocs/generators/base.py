"""Shared plumbing for generators that write itinerary files to disk."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path

from ..core.models import GenerationResult, ItineraryDocument
from .resources import RenderResources
from .themes import DEFAULT_THEME, Theme

# Anything outside word characters, dots and hyphens becomes an underscore
_UNSAFE_RE = re.compile(r"[^\w.-]+", re.ASCII)


class BaseGenerator(ABC):
    """A generator turns one ``ItineraryDocument`` into one output file.

    The theme decides brand colours and page geometry; the resources carry
    fonts and the logo. Neither is mutated, so one pair can back any number
    of generators.
    """

    extension: str

    def __init__(
        self,
        theme: Theme | None = None,
        resources: RenderResources | None = None,
    ) -> None:
        self.theme = theme or DEFAULT_THEME
        self.resources = resources or RenderResources.standard()

    @abstractmethod
    def generate(self, doc: ItineraryDocument, output_dir: Path) -> GenerationResult:
        """Write *doc* below *output_dir*; failures go into the result."""

    # -- Helpers ---------------------------------------------------------

    @staticmethod
    def _safe_filename(name: str, ext: str, fallback: str = "itinerary") -> str:
        """``"Serengeti - Amina"`` -> ``"Serengeti_-_Amina.pdf"``."""
        stem = _UNSAFE_RE.sub("_", name).strip("._")[:80] or fallback
        return f"{stem}.{ext}"

    @staticmethod
    def _ensure_dir(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        return path
