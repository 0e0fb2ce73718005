"""Meters <-> surface pixel mapping for the deck view.

``LayoutTransform`` is the only place that knows the scale factor and the
margins reserved for axis labels, so the renderer and the hit-testing code
can never disagree about where an item is.

Coordinate conventions:

  * Deck space is in meters with the origin at the deck's top-left corner.
    X runs across the deck width, Z along its length.
  * Surface space is in logical pixels of the drawing surface, origin at the
    surface's top-left corner. The deck rectangle starts at
    ``(margin_left, margin_top)``.
  * Device space is where pointer events arrive: the window/canvas pixel
    grid on which the surface image may be shown shrunk or enlarged.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .types import Deck, Item, Viewport

SCALE = 20.0  # pixels per meter
MARGIN_LEFT = 50
MARGIN_TOP = 30
MARGIN_RIGHT = 20
MARGIN_BOTTOM = 20

AXIS_X = "x"
AXIS_Z = "z"


@dataclass(frozen=True)
class LayoutTransform:
    scale: float = SCALE
    margin_left: int = MARGIN_LEFT
    margin_top: int = MARGIN_TOP
    margin_right: int = MARGIN_RIGHT
    margin_bottom: int = MARGIN_BOTTOM

    def _margin(self, axis: str) -> int:
        if axis == AXIS_X:
            return self.margin_left
        if axis == AXIS_Z:
            return self.margin_top
        raise ValueError(f"Unknown axis: {axis!r}")

    def to_surface(self, meters: float, axis: str) -> float:
        return meters * self.scale + self._margin(axis)

    def from_surface(
        self, pixels: float, axis: str, display_ratio: float = 1.0
    ) -> float:
        """Inverse of ``to_surface``.

        ``display_ratio`` is logical surface size divided by displayed size;
        pass it when ``pixels`` was measured on a rescaled image.
        """
        return (pixels * display_ratio - self._margin(axis)) / self.scale

    def surface_size(self, deck: Deck) -> tuple[int, int]:
        """Full surface size for a deck, margins included.

        Uses ceil so the last grid cell is never clipped.
        """
        w = math.ceil(deck.width * self.scale)
        h = math.ceil(deck.length * self.scale)
        return (
            w + self.margin_left + self.margin_right,
            h + self.margin_top + self.margin_bottom,
        )

    def deck_rect(self, deck: Deck) -> tuple[float, float, float, float]:
        """(x, y, width, height) of the deck area in surface pixels."""
        return (
            float(self.margin_left),
            float(self.margin_top),
            deck.width * self.scale,
            deck.length * self.scale,
        )

    def item_rect(self, item: Item) -> tuple[float, float, float, float]:
        """(x, y, width, height) of an item in surface pixels."""
        return (
            self.to_surface(item.position_x, AXIS_X),
            self.to_surface(item.position_z, AXIS_Z),
            item.width * self.scale,
            item.length * self.scale,
        )

    @staticmethod
    def device_to_surface(
        device_x: float,
        device_y: float,
        viewport: Viewport,
        logical_size: tuple[int, int],
    ) -> tuple[float, float]:
        """Map a pointer position to logical surface pixels.

        The surface image of ``logical_size`` is shown at ``viewport``; when
        the two sizes differ the offset is scaled by their ratio.
        """
        sx = logical_size[0] / viewport.width if viewport.width else 1.0
        sy = logical_size[1] / viewport.height if viewport.height else 1.0
        return (
            (device_x - viewport.left) * sx,
            (device_y - viewport.top) * sy,
        )
