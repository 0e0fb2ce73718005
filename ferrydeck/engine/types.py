"""Data types matching the ferry optimizer JSON schema."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ITEM_COLOR = "#3498db"
DEFAULT_ITEM_TYPE = "Container"


@dataclass(frozen=True)
class Deck:
    width: float
    length: float
    height: float = 0.0
    max_weight: float = 0.0
    usable_space_fraction: float = 1.0

    @staticmethod
    def from_dict(d: dict) -> Deck:
        return Deck(
            width=float(d["width"]),
            length=float(d["length"]),
            height=float(d.get("height", 0.0)),
            max_weight=float(d.get("max_weight", 0.0)),
            usable_space_fraction=float(
                d.get("usable_space_percentage", 1.0)
            ),
        )

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "length": self.length,
            "max_weight": self.max_weight,
            "usable_space_percentage": self.usable_space_fraction,
        }


@dataclass(frozen=True)
class Item:
    id: int
    width: float
    length: float
    height: float = 0.0
    weight: float = 0.0
    color: str | None = None
    position_x: float = 0.0
    position_y: float = 0.0
    position_z: float = 0.0
    type: str = DEFAULT_ITEM_TYPE

    @property
    def base_color(self) -> str:
        return self.color or DEFAULT_ITEM_COLOR

    @staticmethod
    def from_dict(d: dict) -> Item:
        return Item(
            id=d["id"],
            width=float(d["width"]),
            length=float(d["length"]),
            height=float(d.get("height", 0.0)),
            weight=float(d.get("weight", 0.0)),
            color=d.get("color") or None,
            position_x=float(d.get("position_x") or 0.0),
            position_y=float(d.get("position_y") or 0.0),
            position_z=float(d.get("position_z") or 0.0),
            type=d.get("type") or DEFAULT_ITEM_TYPE,
        )

    def to_dict(self) -> dict:
        d: dict = {
            "id": self.id,
            "type": self.type,
            "width": self.width,
            "height": self.height,
            "length": self.length,
            "weight": self.weight,
            "position_x": self.position_x,
            "position_y": self.position_y,
            "position_z": self.position_z,
        }
        if self.color:
            d["color"] = self.color
        return d


@dataclass(frozen=True)
class NewItem:
    """An item the operator wants to add; the server assigns id and color."""

    width: float
    height: float
    length: float
    weight: float
    type: str = DEFAULT_ITEM_TYPE

    def to_payload(self, position: PlacementProposal | None = None) -> dict:
        d: dict = {
            "type": self.type,
            "width": self.width,
            "height": self.height,
            "length": self.length,
            "weight": self.weight,
        }
        if position is not None:
            d["position_x"] = position.x
            d["position_y"] = 0.0
            d["position_z"] = position.z
        return d


@dataclass(frozen=True)
class LoadSnapshot:
    """Everything the deck view renders from.

    ``deck`` is None when the server response had no ferry descriptor; the
    renderer shows an error message for such snapshots.
    """

    deck: Deck | None
    items: tuple[Item, ...] = ()
    total_weight: float = 0.0
    total_volume_occupied: float = 0.0
    unplaced_items: tuple[Item, ...] = ()
    deck_usable_volume: float | None = None
    utilization_percentage: float | None = None

    @staticmethod
    def from_dict(d: dict) -> LoadSnapshot:
        ferry = d.get("ferry_info")
        usable = d.get("ferry_total_volume")
        utilization = d.get("utilization_percentage")
        return LoadSnapshot(
            deck=Deck.from_dict(ferry) if ferry else None,
            items=tuple(
                Item.from_dict(i) for i in d.get("placed_items") or []
            ),
            total_weight=float(d.get("total_weight") or 0.0),
            total_volume_occupied=float(
                d.get("total_volume_occupied") or 0.0
            ),
            unplaced_items=tuple(
                Item.from_dict(i) for i in d.get("unplaced_items") or []
            ),
            deck_usable_volume=(
                float(usable) if usable is not None else None
            ),
            utilization_percentage=(
                float(utilization) if utilization is not None else None
            ),
        )

    def to_dict(self) -> dict:
        d: dict = {
            "ferry_info": self.deck.to_dict() if self.deck else None,
            "placed_items": [i.to_dict() for i in self.items],
            "unplaced_items": [i.to_dict() for i in self.unplaced_items],
            "total_weight": self.total_weight,
            "total_volume_occupied": self.total_volume_occupied,
        }
        if self.deck_usable_volume is not None:
            d["ferry_total_volume"] = self.deck_usable_volume
        if self.utilization_percentage is not None:
            d["utilization_percentage"] = self.utilization_percentage
        return d

    def find_item(self, item_id) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


@dataclass(frozen=True)
class PlacementProposal:
    x: float
    z: float
    has_space: bool


@dataclass(frozen=True)
class RenderedItemBounds:
    """Pixel-space footprint of one drawn item, valid until the next render."""

    item_id: int
    x: float
    y: float
    width: float
    height: float
    delete_center: tuple[float, float]
    delete_radius: float

    def contains(self, px: float, py: float) -> bool:
        return (
            self.x <= px <= self.x + self.width
            and self.y <= py <= self.y + self.height
        )

    def delete_hit(self, px: float, py: float) -> bool:
        dx = px - self.delete_center[0]
        dy = py - self.delete_center[1]
        return dx * dx + dy * dy <= self.delete_radius * self.delete_radius


@dataclass(frozen=True)
class Viewport:
    """Where the surface image is shown on screen, in device pixels."""

    left: float
    top: float
    width: float
    height: float
