"""Tests for themes, geometry and engine configuration."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from itinerarydocs.config import EngineConfig
from itinerarydocs.generators.themes import (
    DEFAULT_THEME,
    OCEAN_THEME,
    SAFARI_THEME,
    BrandColors,
    PageGeometry,
    Theme,
    get_theme,
    list_themes,
    register_theme,
)


# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------

class TestThemeRegistry:
    def test_list_themes_returns_builtin(self):
        names = [t.name for t in list_themes()]
        for name in ("safari", "savanna", "ocean", "minimal"):
            assert name in names

    def test_get_theme_case_insensitive(self):
        assert get_theme(" OCEAN ") is OCEAN_THEME

    def test_get_theme_unknown_raises(self):
        with pytest.raises(KeyError, match="Available"):
            get_theme("nonexistent")

    def test_default_is_safari(self):
        assert DEFAULT_THEME is SAFARI_THEME

    def test_register_custom_theme(self):
        custom = Theme(name="Test_Sunset", colors=BrandColors(primary=(200, 80, 20)))
        register_theme(custom)
        assert get_theme("test_sunset") is custom

    def test_themes_are_frozen(self):
        with pytest.raises(FrozenInstanceError):
            SAFARI_THEME.site_name = "other.example"

    def test_themes_share_geometry(self):
        assert {t.geometry for t in list_themes() if t.name in ("safari", "ocean")} == {PageGeometry()}


class TestPageGeometry:
    def test_a4_portrait(self):
        g = PageGeometry()
        assert (g.page_width, g.page_height) == (595.28, 841.89)

    def test_two_columns_fill_content_width(self):
        g = PageGeometry()
        assert g.content_width == pytest.approx(g.page_width - 2 * g.margin)
        assert 2 * g.column_width + g.column_gap == pytest.approx(g.content_width)

    def test_usable_column_exceeds_minimum_box(self):
        g = PageGeometry()
        top = g.page_height - g.header_height - g.meta_strip_height - g.content_gap
        assert top - (g.content_bottom + g.safety_margin) > g.min_box_height


# ---------------------------------------------------------------------------
# Engine config
# ---------------------------------------------------------------------------

class TestEngineConfig:
    def test_defaults_from_empty_env(self):
        config = EngineConfig.from_env({})
        assert config.font_dir is None
        assert config.logo_path is None
        assert config.theme_name == "safari"
        assert config.site_name == ""

    def test_values_from_env(self, tmp_path):
        config = EngineConfig.from_env({
            "ITINERARYDOCS_FONT_DIR": str(tmp_path),
            "ITINERARYDOCS_LOGO": str(tmp_path / "logo.png"),
            "ITINERARYDOCS_THEME": "ocean",
            "ITINERARYDOCS_SITE": "kopjetrails.example",
        })
        assert config.font_dir == tmp_path
        assert config.logo_path == tmp_path / "logo.png"
        assert config.theme().colors == OCEAN_THEME.colors

    def test_site_override(self):
        theme = EngineConfig(site_name="kopjetrails.example").theme()
        assert theme.site_name == "kopjetrails.example"
        assert SAFARI_THEME.site_name == "safariconnector.com"

    def test_no_override_returns_registered_theme(self):
        assert EngineConfig(theme_name="ocean").theme() is OCEAN_THEME

    def test_unknown_theme(self):
        with pytest.raises(KeyError):
            EngineConfig(theme_name="neon").theme()

    def test_load_resources_without_assets(self):
        res = EngineConfig().load_resources()
        assert res.regular_font == "Helvetica"
        assert res.logo is None
