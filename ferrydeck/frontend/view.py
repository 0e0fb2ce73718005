"""Keeps the rendered surface and the pointer hit-test data in step.

Every redraw, including a load-error message, goes through ``DeckView`` so
the ``InteractionController`` always works from the bounds of what is on
screen. An error message has no items, so after a failed load no stale item
can be hovered or deleted.
"""

from __future__ import annotations

from ..engine.types import LoadSnapshot
from .interaction import InteractionController
from .renderer import DeckRenderer

LOAD_ERROR_TITLE = "Error loading data."


class DeckView:
    def __init__(
        self, renderer: DeckRenderer, controller: InteractionController
    ):
        self.renderer = renderer
        self.controller = controller

    def show(self, snapshot: LoadSnapshot | None) -> None:
        bounds = self.renderer.render(snapshot)
        self.controller.update_bounds(
            snapshot, bounds, self.renderer.surface.size
        )

    def show_load_error(self, message: str) -> None:
        self.renderer.render_message(f"{LOAD_ERROR_TITLE}\n{message}")
        self.controller.update_bounds(None, [], self.renderer.surface.size)
