"""Draws a load snapshot onto a ``Surface``.

Rendering order, back to front:

  1. Grid lines at 1 m and 0.5 m, confined to the deck rectangle.
  2. Axis tick labels (meters) and axis titles in the margins.
  3. The deck area as a translucent fill.
  4. Items, in snapshot order, clipped to the deck rectangle: soft shadow,
     gradient body, darker border, id/weight label and the round delete
     button in the top-right corner.

Every item drawn yields one ``RenderedItemBounds``. The delete button
geometry stored there is the one used for drawing, so hit-testing in
``interaction.py`` never recomputes it.

Snapshots without a deck descriptor, and load failures, are shown as a
centered red message instead.
"""

from __future__ import annotations

import math

from ..engine.colors import contrast_color, darken, lighten
from ..engine.layout import AXIS_X, AXIS_Z, LayoutTransform
from ..engine.types import Deck, Item, LoadSnapshot, RenderedItemBounds
from .surface import Surface

# -- Visual constants --

GRID_MAJOR = "#e0e0e0"
GRID_MINOR = "#f0f0f0"
GRID_LINE_WIDTH = 1
LABEL_COLOR = "#666666"
TITLE_COLOR = "#333333"
DECK_FILL = (240, 240, 240, 128)
ERROR_COLOR = "#D32F2F"
ITEM_SHADOW = (0, 0, 0, 51)
ITEM_SHADOW_OFFSET = 3
ITEM_SHADOW_BLUR = 10

MIN_LABEL_SPACING = 40
LABEL_DIVISIONS = 5

GRADIENT_PERCENT = 15
BORDER_DARKEN_PERCENT = 30
BORDER_WIDTH = 2
MIN_FONT_SIZE = 10
MAX_FONT_SIZE = 16
LINE_HEIGHT_FACTOR = 1.2

DELETE_INSET = 15  # from the item's right and top edges
DELETE_RADIUS = 10
DELETE_FILL = (255, 255, 255, 230)
DELETE_COLOR = ERROR_COLOR
DELETE_GLYPH = "×"

MESSAGE_FONT_SIZE = 16
MESSAGE_LINE_SPACING = 20
ERROR_SURFACE_SIZE = (400, 200)

INVALID_DATA_MESSAGE = "Data received from the API is invalid or incomplete."
EMPTY_DECK_MESSAGE = "Empty deck"


def label_font_size(width_px: float, height_px: float) -> int:
    size = math.floor(min(width_px, height_px) / 4)
    return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, size))


def tick_spacing(deck_width_px: float, deck_height_px: float) -> float:
    return max(
        MIN_LABEL_SPACING,
        min(deck_width_px, deck_height_px) / LABEL_DIVISIONS,
    )


def delete_button_geometry(
    x: float, y: float, width: float
) -> tuple[tuple[float, float], float]:
    return (x + width - DELETE_INSET, y + DELETE_INSET), DELETE_RADIUS


class DeckRenderer:
    """Renders load snapshots with a fixed layout transform."""

    def __init__(self, surface: Surface, transform=None):
        self.surface = surface
        self.transform = transform or LayoutTransform()

    def render(
        self, snapshot: LoadSnapshot | None
    ) -> list[RenderedItemBounds]:
        if snapshot is None or snapshot.deck is None:
            self.render_message(INVALID_DATA_MESSAGE)
            return []

        deck = snapshot.deck
        self.surface.resize(*self.transform.surface_size(deck))
        self.surface.clear()
        self._draw_grid(deck)
        self._draw_grid_labels(deck)
        self._draw_deck_area(deck)

        if not snapshot.items:
            w, h = self.surface.size
            self.surface.text(
                w / 2,
                h / 2,
                EMPTY_DECK_MESSAGE,
                MESSAGE_FONT_SIZE,
                LABEL_COLOR,
                bold=True,
            )
            return []

        bounds = []
        with self.surface.clip(*self.transform.deck_rect(deck)):
            for item in snapshot.items:
                bounds.append(self._draw_item(item))
        return bounds

    def render_message(self, message: str, color=ERROR_COLOR) -> None:
        """Clear the surface and center a (multi-line) message on it."""
        w, h = self.surface.size
        if w < ERROR_SURFACE_SIZE[0] or h < ERROR_SURFACE_SIZE[1]:
            w = max(w, ERROR_SURFACE_SIZE[0])
            h = max(h, ERROR_SURFACE_SIZE[1])
            self.surface.resize(w, h)
        self.surface.clear()
        for index, line in enumerate(message.split("\n")):
            self.surface.text(
                w / 2,
                h / 2 + index * MESSAGE_LINE_SPACING,
                line,
                MESSAGE_FONT_SIZE,
                color,
                bold=True,
            )

    # -- deck --

    def _draw_grid(self, deck: Deck) -> None:
        left, top, gw, gh = self.transform.deck_rect(deck)
        scale = self.transform.scale
        for step, color in ((scale, GRID_MAJOR), (scale / 2, GRID_MINOR)):
            for i in range(int(gw // step) + 1):
                x = left + i * step
                self.surface.line(
                    x, top, x, top + gh, color, GRID_LINE_WIDTH
                )
            for i in range(int(gh // step) + 1):
                y = top + i * step
                self.surface.line(
                    left, y, left + gw, y, color, GRID_LINE_WIDTH
                )

    def _draw_grid_labels(self, deck: Deck) -> None:
        left, top, gw, gh = self.transform.deck_rect(deck)
        scale = self.transform.scale
        spacing = tick_spacing(gw, gh)

        for i in range(int(gw // spacing) + 1):
            offset = i * spacing
            meters = round(offset / scale, 1)
            if meters <= deck.width:
                self.surface.text(
                    left + offset, top - 15, f"{meters:.1f}m", 10, LABEL_COLOR
                )
        for i in range(int(gh // spacing) + 1):
            offset = i * spacing
            meters = round(offset / scale, 1)
            if meters <= deck.length:
                self.surface.text(
                    left - 25, top + offset, f"{meters:.1f}m", 10, LABEL_COLOR
                )

        self.surface.text(
            left + gw / 2,
            top - 25,
            f"Width: {deck.width:.1f}m",
            12,
            TITLE_COLOR,
            bold=True,
        )
        self.surface.text(
            left - 40,
            top + gh / 2,
            f"Length: {deck.length:.1f}m",
            12,
            TITLE_COLOR,
            bold=True,
            angle=90,
        )

    def _draw_deck_area(self, deck: Deck) -> None:
        self.surface.fill_rect(*self.transform.deck_rect(deck), DECK_FILL)

    # -- items --

    def _draw_item(self, item: Item) -> RenderedItemBounds:
        x, y, w, h = self.transform.item_rect(item)
        center, radius = delete_button_geometry(x, y, w)
        bounds = RenderedItemBounds(
            item_id=item.id,
            x=x,
            y=y,
            width=w,
            height=h,
            delete_center=center,
            delete_radius=radius,
        )

        base = item.base_color
        self.surface.fill_shadow_rect(
            x + ITEM_SHADOW_OFFSET,
            y + ITEM_SHADOW_OFFSET,
            w,
            h,
            ITEM_SHADOW,
            ITEM_SHADOW_BLUR,
        )
        self.surface.fill_gradient_rect(
            x,
            y,
            w,
            h,
            lighten(base, GRADIENT_PERCENT),
            darken(base, GRADIENT_PERCENT),
        )
        self.surface.stroke_rect(
            x, y, w, h, darken(base, BORDER_DARKEN_PERCENT), BORDER_WIDTH
        )
        self._draw_item_text(x, y, w, h, item, base)
        self._draw_delete_button(center, radius)
        return bounds

    def _draw_item_text(self, x, y, w, h, item: Item, base: str) -> None:
        size = label_font_size(w, h)
        color = contrast_color(base)
        lines = [f"#{item.id}", f"{item.weight:.1f}t"]
        line_height = size * LINE_HEIGHT_FACTOR
        cx = x + w / 2
        start_y = y + h / 2 - line_height * (len(lines) - 1) / 2
        for index, text in enumerate(lines):
            self.surface.text(
                cx, start_y + index * line_height, text, size, color, bold=True
            )

    def _draw_delete_button(self, center, radius) -> None:
        cx, cy = center
        self.surface.fill_circle(cx, cy, radius, DELETE_FILL)
        self.surface.stroke_circle(cx, cy, radius, DELETE_COLOR, 2)
        self.surface.text(
            cx, cy + 1, DELETE_GLYPH, 16, DELETE_COLOR, bold=True
        )
