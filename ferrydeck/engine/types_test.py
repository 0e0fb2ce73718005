"""Tests for the optimizer JSON types."""

from ferrydeck.engine.types import (
    DEFAULT_ITEM_COLOR,
    Deck,
    Item,
    LoadSnapshot,
    NewItem,
    PlacementProposal,
    RenderedItemBounds,
)

SAMPLE_RESPONSE = {
    "ferry_info": {
        "width": 10,
        "height": 5,
        "length": 6,
        "max_weight": 200,
        "usable_space_percentage": 0.9,
    },
    "placed_items": [
        {
            "id": 1,
            "type": "Container",
            "width": 2,
            "height": 2.6,
            "length": 3,
            "weight": 12.5,
            "position_x": 0,
            "position_y": 0,
            "position_z": 0,
            "color": "#ff0000",
        },
        {
            "id": 2,
            "width": 2,
            "length": 3,
            "weight": 8,
            "position_x": 2,
            "position_z": 0,
        },
    ],
    "unplaced_items": [{"id": 3, "width": 20, "length": 3, "weight": 1}],
    "total_weight": 20.5,
    "total_volume_occupied": 31.2,
    "ferry_total_volume": 270,
    "utilization_percentage": 11.56,
}


class TestDeck:
    def test_from_dict(self):
        deck = Deck.from_dict(SAMPLE_RESPONSE["ferry_info"])
        assert deck.width == 10.0
        assert deck.length == 6.0
        assert deck.height == 5.0
        assert deck.max_weight == 200.0
        assert deck.usable_space_fraction == 0.9

    def test_optional_fields_default(self):
        deck = Deck.from_dict({"width": 4, "length": 8})
        assert deck.max_weight == 0.0
        assert deck.usable_space_fraction == 1.0


class TestItem:
    def test_missing_color_uses_default(self):
        item = Item.from_dict(SAMPLE_RESPONSE["placed_items"][1])
        assert item.color is None
        assert item.base_color == DEFAULT_ITEM_COLOR

    def test_empty_color_treated_as_missing(self):
        item = Item.from_dict({"id": 5, "width": 1, "length": 1, "color": ""})
        assert item.base_color == DEFAULT_ITEM_COLOR

    def test_explicit_color(self):
        item = Item.from_dict(SAMPLE_RESPONSE["placed_items"][0])
        assert item.base_color == "#ff0000"

    def test_null_positions_read_as_zero(self):
        item = Item.from_dict(
            {"id": 7, "width": 1, "length": 1, "position_x": None}
        )
        assert item.position_x == 0.0
        assert item.position_z == 0.0

    def test_to_dict_omits_missing_color(self):
        item = Item(id=1, width=1.0, length=2.0)
        assert "color" not in item.to_dict()


class TestNewItem:
    def test_payload_without_position(self):
        new_item = NewItem(width=2, height=2.6, length=6, weight=10)
        payload = new_item.to_payload()
        assert payload == {
            "type": "Container",
            "width": 2,
            "height": 2.6,
            "length": 6,
            "weight": 10,
        }

    def test_payload_with_position(self):
        payload = NewItem(width=2, height=2.6, length=6, weight=10).to_payload(
            PlacementProposal(x=4.0, z=3.0, has_space=True)
        )
        assert payload["position_x"] == 4.0
        assert payload["position_y"] == 0.0
        assert payload["position_z"] == 3.0


class TestLoadSnapshot:
    def test_from_dict(self):
        snap = LoadSnapshot.from_dict(SAMPLE_RESPONSE)
        assert snap.deck is not None
        assert snap.deck.width == 10.0
        assert [i.id for i in snap.items] == [1, 2]
        assert [i.id for i in snap.unplaced_items] == [3]
        assert snap.total_weight == 20.5
        assert snap.total_volume_occupied == 31.2
        assert snap.deck_usable_volume == 270.0
        assert snap.utilization_percentage == 11.56

    def test_missing_ferry_info(self):
        snap = LoadSnapshot.from_dict({"placed_items": []})
        assert snap.deck is None
        assert snap.items == ()

    def test_null_item_lists(self):
        snap = LoadSnapshot.from_dict(
            {
                "ferry_info": SAMPLE_RESPONSE["ferry_info"],
                "placed_items": None,
                "unplaced_items": None,
            }
        )
        assert snap.items == ()
        assert snap.unplaced_items == ()

    def test_dict_roundtrip(self):
        snap = LoadSnapshot.from_dict(SAMPLE_RESPONSE)
        assert LoadSnapshot.from_dict(snap.to_dict()) == snap

    def test_find_item(self):
        snap = LoadSnapshot.from_dict(SAMPLE_RESPONSE)
        assert snap.find_item(2).weight == 8.0
        assert snap.find_item(99) is None


class TestRenderedItemBounds:
    def _bounds(self):
        return RenderedItemBounds(
            item_id=1,
            x=50,
            y=30,
            width=40,
            height=60,
            delete_center=(75, 45),
            delete_radius=10,
        )

    def test_contains_is_inclusive(self):
        b = self._bounds()
        assert b.contains(50, 30)
        assert b.contains(90, 90)
        assert not b.contains(90.5, 60)
        assert not b.contains(49, 60)

    def test_delete_hit_uses_distance(self):
        b = self._bounds()
        assert b.delete_hit(75, 45)
        assert b.delete_hit(85, 45)
        # Inside the bounding square but outside the circle.
        assert not b.delete_hit(84, 54)
