"""Tests for color shading and label contrast."""

import pytest

from ferrydeck.engine.colors import (
    DARK_TEXT,
    LIGHT_TEXT,
    contrast_color,
    darken,
    lighten,
    luminance,
    parse_hex,
    to_rgb,
)


class TestParse:
    def test_with_and_without_hash(self):
        assert parse_hex("#3498db") == 0x3498DB
        assert parse_hex("3498db") == 0x3498DB

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_hex("#zzzzzz")

    def test_to_rgb(self):
        assert to_rgb("#3498db") == (0x34, 0x98, 0xDB)


class TestShade:
    def test_lighten(self):
        # 15% of 255 rounds to 38.
        assert lighten("#3498db", 15) == "#5abeff"

    def test_darken(self):
        assert darken("#3498db", 15) == "#0e72b5"

    def test_clamps(self):
        assert lighten("#ffffff", 30) == "#ffffff"
        assert darken("#000000", 30) == "#000000"
        assert darken("#101010", 30) == "#000000"

    def test_zero_percent_is_identity(self):
        for c in ("#3498DB", "#ffffff", "#000000"):
            assert lighten(c, 0) == c
            assert darken(c, 0) == c


class TestContrast:
    def test_light_base_gets_dark_text(self):
        assert contrast_color("#ffff00") == DARK_TEXT

    def test_dark_base_gets_light_text(self):
        assert contrast_color("#000080") == LIGHT_TEXT

    def test_default_item_color(self):
        # Luminance of #3498db is about 129.7.
        assert luminance("#3498db") == pytest.approx(129.738)
        assert contrast_color("#3498db") == DARK_TEXT

    def test_threshold_is_inclusive(self):
        assert luminance("#808080") == 128
        assert contrast_color("#808080") == DARK_TEXT
        assert contrast_color("#7f7f7f") == LIGHT_TEXT

    def test_missing_or_malformed(self):
        assert contrast_color(None) == LIGHT_TEXT
        assert contrast_color("") == LIGHT_TEXT
        assert contrast_color("red") == LIGHT_TEXT
        assert contrast_color("#nothex") == LIGHT_TEXT
