"""The deck session: current load snapshot plus the actions that replace it.

A ``DeckSession`` owns the one piece of shared state the view reads, the
current ``LoadSnapshot``. It is only ever replaced wholesale, by a reload.
Adding or deleting an item always ends in a full reload.

The add/delete request and the reload that follows it fail separately. A
failed request raises to the caller; a failed reload after a successful
request is handed to ``on_load_error``, the same path as any other load
failure, so the caller never reports a change the server already made as
failed.

Loads are tagged with a sequence number when issued. A response is applied
only if it is newer than the last applied one, so a slow reload that
finishes after a later one cannot put an outdated deck back on screen.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .api import DeckApiClient
from .errors import CapacityError, DeckError, InvalidSnapshotError
from .placement import propose
from .types import Item, LoadSnapshot, NewItem, PlacementProposal

logger = logging.getLogger(__name__)


class DeckSession:
    def __init__(
        self,
        client: DeckApiClient,
        on_snapshot: Optional[Callable[[LoadSnapshot], None]] = None,
        on_load_error: Optional[Callable[[DeckError], None]] = None,
    ):
        self.client = client
        self.on_snapshot = on_snapshot
        self.on_load_error = on_load_error
        self.snapshot: LoadSnapshot | None = None
        self._issued_seq = 0
        self._applied_seq = 0

    # -- loading --

    def begin_load(self) -> int:
        """Reserve a sequence number for a load about to be issued."""
        self._issued_seq += 1
        return self._issued_seq

    def apply_load(self, seq: int, snapshot: LoadSnapshot) -> bool:
        """Install ``snapshot`` unless a newer load was already applied."""
        if seq <= self._applied_seq:
            logger.warning(
                "Discarding stale load #%d (already showing #%d)",
                seq,
                self._applied_seq,
            )
            return False
        self._applied_seq = seq
        self.snapshot = snapshot
        if self.on_snapshot is not None:
            self.on_snapshot(snapshot)
        return True

    def reload(self) -> LoadSnapshot | None:
        """Fetch a fresh optimized load.

        Returns the snapshot that is current afterwards. Transport errors
        propagate; the previous snapshot stays in place.
        """
        seq = self.begin_load()
        snapshot = self.client.optimize()
        self.apply_load(seq, snapshot)
        return self.snapshot

    def refresh(self) -> bool:
        """Reload, reporting a failure to ``on_load_error``.

        Returns True when a snapshot was loaded. Without an
        ``on_load_error`` handler the error propagates as from ``reload``.
        """
        try:
            self.reload()
        except DeckError as exc:
            if self.on_load_error is None:
                raise
            logger.error("Loading data failed: %s", exc)
            self.on_load_error(exc)
            return False
        return True

    # -- actions --

    def propose_placement(self, new_item: NewItem) -> PlacementProposal:
        if self.snapshot is None:
            self.reload()
        snapshot = self.snapshot
        if snapshot is None or snapshot.deck is None:
            raise InvalidSnapshotError(
                "No deck information available; reload and try again."
            )
        return propose(snapshot.deck, snapshot.items, new_item)

    def add_item(self, new_item: NewItem) -> Item:
        """Create an item at the proposed position, then refresh.

        Raises ``CapacityError`` without contacting the server when the
        heuristic finds no room. Only a failed create request raises; the
        follow-up reload reports through ``on_load_error``.
        """
        proposal = self.propose_placement(new_item)
        if not proposal.has_space:
            logger.info(
                "Refusing %.1fx%.1f item: no space left on deck",
                new_item.width,
                new_item.length,
            )
            raise CapacityError(
                "There is no more space on the deck for this item."
            )
        created = self.client.add_item(new_item, proposal)
        self.refresh()
        return created

    def delete_item(self, item_id) -> None:
        """Delete an item, then refresh.

        Only a failed delete request raises.
        """
        self.client.delete_item(item_id)
        self.refresh()
