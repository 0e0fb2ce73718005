"""Tests for the greedy shelf placement heuristic."""

from ferrydeck.engine.placement import propose
from ferrydeck.engine.types import Deck, Item, NewItem

DECK = Deck(width=10, length=6)


def _item(item_id, x, z, width=2.0, length=3.0):
    return Item(
        id=item_id, width=width, length=length, position_x=x, position_z=z
    )


class TestPropose:
    def test_empty_deck(self):
        p = propose(DECK, [])
        assert (p.x, p.z, p.has_space) == (0.0, 0.0, True)

    def test_next_to_frontier(self):
        p = propose(DECK, [_item(1, 0, 0)])
        assert (p.x, p.z, p.has_space) == (2.0, 0.0, True)

    def test_frontier_is_last_in_row_major_order(self):
        """Input order does not matter; (z, x) order does."""
        items = [_item(3, 4, 0), _item(1, 0, 0), _item(2, 2, 0)]
        p = propose(DECK, items)
        assert (p.x, p.z) == (6.0, 0.0)

    def test_wraps_to_next_row(self):
        items = [_item(i, 2.0 * i, 0) for i in range(5)]
        p = propose(DECK, items)
        assert (p.x, p.z, p.has_space) == (0.0, 3.0, True)

    def test_exact_fit_does_not_wrap(self):
        items = [_item(i, 2.0 * i, 0) for i in range(4)]
        p = propose(DECK, items)
        assert (p.x, p.z) == (8.0, 0.0)

    def test_full_deck(self):
        items = [_item(i, 2.0 * (i % 5), 3.0 * (i // 5)) for i in range(10)]
        p = propose(DECK, items)
        assert p.z == 6.0
        assert not p.has_space

    def test_new_item_footprint_drives_wrap(self):
        items = [_item(1, 0, 0), _item(2, 2, 0)]
        p = propose(
            DECK, items, NewItem(width=7, height=1, length=3, weight=1)
        )
        assert (p.x, p.z, p.has_space) == (0.0, 3.0, True)

    def test_new_item_too_long(self):
        items = [_item(1, 0, 0)]
        p = propose(
            DECK, items, NewItem(width=2, height=1, length=7, weight=1)
        )
        assert not p.has_space

    def test_new_item_wider_than_deck(self):
        items = [_item(1, 0, 0)]
        p = propose(
            DECK, items, NewItem(width=11, height=1, length=1, weight=1)
        )
        assert not p.has_space

    def test_gaps_are_not_backfilled(self):
        """An early gap is ignored; only the frontier counts."""
        items = [_item(1, 0, 0), _item(2, 6, 0)]
        p = propose(DECK, items)
        assert (p.x, p.z) == (8.0, 0.0)
