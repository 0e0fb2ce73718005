"""Headless deck engine: data types, layout math, placement and the API."""

from .api import ApiConfig, DeckApiClient
from .errors import (
    CapacityError,
    DeckError,
    InvalidSnapshotError,
    TransportError,
)
from .layout import LayoutTransform
from .placement import propose
from .session import DeckSession
from .types import (
    Deck,
    Item,
    LoadSnapshot,
    NewItem,
    PlacementProposal,
    RenderedItemBounds,
    Viewport,
)

__all__ = [
    "ApiConfig",
    "CapacityError",
    "Deck",
    "DeckApiClient",
    "DeckError",
    "DeckSession",
    "InvalidSnapshotError",
    "Item",
    "LayoutTransform",
    "LoadSnapshot",
    "NewItem",
    "PlacementProposal",
    "RenderedItemBounds",
    "TransportError",
    "Viewport",
    "propose",
]
