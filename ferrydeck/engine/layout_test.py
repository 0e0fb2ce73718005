"""Tests for the meters <-> pixels transform."""

import pytest

from ferrydeck.engine.layout import AXIS_X, AXIS_Z, LayoutTransform
from ferrydeck.engine.types import Deck, Item, Viewport


class TestAxisMapping:
    def test_x_uses_left_margin(self):
        t = LayoutTransform()
        assert t.to_surface(0, AXIS_X) == 50
        assert t.to_surface(2.5, AXIS_X) == 100

    def test_z_uses_top_margin(self):
        t = LayoutTransform()
        assert t.to_surface(0, AXIS_Z) == 30
        assert t.to_surface(1, AXIS_Z) == 50

    def test_from_surface_inverts(self):
        t = LayoutTransform()
        for meters in (0.0, 1.25, 7.5):
            for axis in (AXIS_X, AXIS_Z):
                px = t.to_surface(meters, axis)
                assert t.from_surface(px, axis) == pytest.approx(meters)

    def test_from_surface_display_ratio(self):
        """Pixels measured on a half-size image are doubled first."""
        t = LayoutTransform()
        px = t.from_surface(45, AXIS_X, display_ratio=2.0)
        assert px == pytest.approx(2.0)

    def test_unknown_axis(self):
        with pytest.raises(ValueError):
            LayoutTransform().to_surface(1.0, "y")


class TestSurfaceGeometry:
    def test_surface_size(self):
        assert LayoutTransform().surface_size(Deck(width=10, length=6)) == (
            270,
            170,
        )

    def test_surface_size_rounds_up(self):
        w, h = LayoutTransform().surface_size(Deck(width=10.01, length=6.01))
        assert w == 201 + 70
        assert h == 121 + 50

    def test_deck_rect(self):
        assert LayoutTransform().deck_rect(Deck(width=10, length=6)) == (
            50.0,
            30.0,
            200.0,
            120.0,
        )

    def test_item_rect(self):
        item = Item(id=1, width=2, length=3, position_x=0, position_z=0)
        assert LayoutTransform().item_rect(item) == (50, 30, 40, 60)

    def test_custom_scale(self):
        t = LayoutTransform(scale=10.0)
        item = Item(id=1, width=2, length=3, position_x=1, position_z=2)
        assert t.item_rect(item) == (60, 50, 20, 30)


class TestDeviceToSurface:
    def test_identity_viewport(self):
        vp = Viewport(left=0, top=0, width=270, height=170)
        assert LayoutTransform.device_to_surface(75, 45, vp, (270, 170)) == (
            75,
            45,
        )

    def test_offset_and_scaled(self):
        """Surface shown at half size, 10 px from the canvas corner."""
        vp = Viewport(left=10, top=10, width=135, height=85)
        sx, sy = LayoutTransform.device_to_surface(47.5, 32.5, vp, (270, 170))
        assert sx == pytest.approx(75)
        assert sy == pytest.approx(45)
