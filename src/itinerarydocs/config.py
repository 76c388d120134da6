"""Engine configuration: asset locations, theme and site name."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .generators.resources import RenderResources
from .generators.themes import Theme, get_theme

ENV_FONT_DIR = "ITINERARYDOCS_FONT_DIR"
ENV_LOGO = "ITINERARYDOCS_LOGO"
ENV_THEME = "ITINERARYDOCS_THEME"
ENV_SITE = "ITINERARYDOCS_SITE"


@dataclass(frozen=True)
class EngineConfig:
    """Where to find fonts and the logo, and how to brand the output."""

    font_dir: Optional[Path] = None
    logo_path: Optional[Path] = None
    theme_name: str = "safari"
    site_name: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        font_dir = env.get(ENV_FONT_DIR)
        logo = env.get(ENV_LOGO)
        return cls(
            font_dir=Path(font_dir) if font_dir else None,
            logo_path=Path(logo) if logo else None,
            theme_name=env.get(ENV_THEME) or "safari",
            site_name=env.get(ENV_SITE, ""),
        )

    def theme(self) -> Theme:
        """The configured theme, with the site name override applied."""
        theme = get_theme(self.theme_name)
        if self.site_name:
            theme = replace(theme, site_name=self.site_name)
        return theme

    def load_resources(self) -> RenderResources:
        return RenderResources.load(self.font_dir, self.logo_path)
