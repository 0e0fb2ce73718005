"""Advisory placement for a newly added item.

The real packing happens on the server when the deck is optimized. Before an
add request is sent, ``propose`` guesses a plausible spot with a greedy shelf
rule so obviously full decks can be refused without a round trip:

  * Items are read in row-major order (by Z, then X). The last one is the
    frontier.
  * The proposal sits right after the frontier on the same row, or wraps to
    the start of the next row when it would run past the deck width.
  * If the proposed row runs past the deck length, there is no space.

Gaps left earlier on the deck are never back-filled. The proposal is only a
starting point; the optimizer may move everything on the next run.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .types import Deck, Item, NewItem, PlacementProposal

logger = logging.getLogger(__name__)


def propose(
    deck: Deck,
    existing_items: Iterable[Item],
    new_item: NewItem | None = None,
) -> PlacementProposal:
    """Propose a position for the next item.

    The wrap and capacity tests use ``new_item``'s footprint when given,
    otherwise the frontier item's.
    """
    items = sorted(
        existing_items, key=lambda i: (i.position_z, i.position_x)
    )
    if not items:
        return PlacementProposal(x=0.0, z=0.0, has_space=True)

    frontier = items[-1]
    width = new_item.width if new_item is not None else frontier.width
    length = new_item.length if new_item is not None else frontier.length

    next_x = frontier.position_x + frontier.width
    next_z = frontier.position_z
    if next_x + width > deck.width:
        next_x = 0.0
        next_z = frontier.position_z + frontier.length

    # An item wider than the deck cannot fit even at the start of a row.
    has_space = next_z + length <= deck.length and width <= deck.width
    logger.debug(
        "Proposed (%.2f, %.2f) after item %s, has_space=%s",
        next_x,
        next_z,
        frontier.id,
        has_space,
    )
    return PlacementProposal(x=next_x, z=next_z, has_space=has_space)
