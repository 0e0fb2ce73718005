"""Pointer handling for the deck view: hover tooltips and delete clicks.

``InteractionController`` is a two-state machine, Idle and Hovering(item),
driven by pointer move/leave/click events in device coordinates. It works
only from the ``RenderedItemBounds`` of the most recent render, which the
frontend hands over through ``update_bounds`` after every redraw.

  * Move: the first bounds (in draw order) containing the pointer is the hover
    target. Changing target swaps the cursor and tears down the tooltip; a
    new tooltip is created only when a new item is entered. Moving within the
    same item just repositions the tooltip.
  * Leave: back to Idle, tooltip removed.
  * Click: the first item whose round delete button contains the pointer
    (distance test, not the body rectangle) is deleted after confirmation.

Tooltip side effects go through an injected ``Overlay`` so the controller
can be driven without a window.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Sequence

from ..engine.errors import DeckError
from ..engine.layout import LayoutTransform
from ..engine.types import Item, LoadSnapshot, RenderedItemBounds, Viewport

logger = logging.getLogger(__name__)

TOOLTIP_OFFSET = 15
CURSOR_POINTER = "hand2"
CURSOR_DEFAULT = ""


class Overlay(Protocol):
    def create(self, content: str, position: tuple[float, float]) -> None: ...

    def reposition(self, position: tuple[float, float]) -> None: ...

    def destroy(self) -> None: ...


def tooltip_text(item: Item) -> str:
    return (
        f"Container #{item.id}\n"
        f"Dimensions: {item.width:g}m × {item.length:g}m\n"
        f"Weight: {item.weight:g}t"
    )


def _ignore(*_args) -> None:
    return None


class InteractionController:
    def __init__(
        self,
        overlay: Overlay,
        confirm: Callable[[str], bool],
        on_delete: Callable[[object], None],
        notify: Callable[[str], None] = _ignore,
        set_cursor: Callable[[str], None] = _ignore,
    ):
        self.overlay = overlay
        self.confirm = confirm
        self.on_delete = on_delete
        self.notify = notify
        self.set_cursor = set_cursor

        self.hovered_item_id = None
        self.viewport: Viewport | None = None
        self._snapshot: LoadSnapshot | None = None
        self._bounds: tuple[RenderedItemBounds, ...] = ()
        self._logical_size: tuple[int, int] = (0, 0)
        self._tooltip_live = False

    @property
    def is_hovering(self) -> bool:
        return self.hovered_item_id is not None

    @property
    def bounds(self) -> tuple[RenderedItemBounds, ...]:
        return self._bounds

    def update_bounds(
        self,
        snapshot: LoadSnapshot | None,
        bounds: Sequence[RenderedItemBounds],
        logical_size: tuple[int, int],
    ) -> None:
        """Replace the hit-test data with the output of a new render."""
        self._snapshot = snapshot
        self._bounds = tuple(bounds)
        self._logical_size = logical_size
        if self.hovered_item_id is not None and not any(
            b.item_id == self.hovered_item_id for b in self._bounds
        ):
            self._to_idle()

    # -- coordinate mapping & hit tests --

    def to_surface(self, x: float, y: float) -> tuple[float, float]:
        if self.viewport is None:
            return x, y
        return LayoutTransform.device_to_surface(
            x, y, self.viewport, self._logical_size
        )

    def item_at(self, sx: float, sy: float) -> Optional[RenderedItemBounds]:
        for b in self._bounds:
            if b.contains(sx, sy):
                return b
        return None

    def delete_target_at(
        self, sx: float, sy: float
    ) -> Optional[RenderedItemBounds]:
        for b in self._bounds:
            if b.delete_hit(sx, sy):
                return b
        return None

    # -- events --

    def on_pointer_move(self, x: float, y: float) -> None:
        if self._snapshot is None:
            return
        hit = self.item_at(*self.to_surface(x, y))
        hit_id = hit.item_id if hit is not None else None
        position = (x + TOOLTIP_OFFSET, y + TOOLTIP_OFFSET)

        if hit_id != self.hovered_item_id:
            self.hovered_item_id = hit_id
            self.set_cursor(
                CURSOR_POINTER if hit_id is not None else CURSOR_DEFAULT
            )
            self._hide_tooltip()
            if hit_id is not None:
                item = self._snapshot.find_item(hit_id)
                if item is not None:
                    self.overlay.create(tooltip_text(item), position)
                    self._tooltip_live = True
        elif hit_id is not None and self._tooltip_live:
            self.overlay.reposition(position)

    def on_pointer_leave(self) -> None:
        self._to_idle()

    def on_click(self, x: float, y: float):
        """Handle a click; returns the id of the deleted item, if any."""
        target = self.delete_target_at(*self.to_surface(x, y))
        if target is None:
            return None
        item_id = target.item_id
        if not self.confirm(f"Delete container #{item_id}?"):
            return None
        self._to_idle()
        try:
            self.on_delete(item_id)
        except DeckError as exc:
            logger.error("Deleting item %s failed: %s", item_id, exc)
            self.notify(f"Delete failed: {exc}")
            return None
        return item_id

    # -- helpers --

    def _to_idle(self) -> None:
        self.hovered_item_id = None
        self._hide_tooltip()
        self.set_cursor(CURSOR_DEFAULT)

    def _hide_tooltip(self) -> None:
        if self._tooltip_live:
            self.overlay.destroy()
            self._tooltip_live = False
