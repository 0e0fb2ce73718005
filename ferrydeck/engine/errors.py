"""Exceptions raised by the deck engine.

Every failure is local to the action that triggered it; callers (the Tk
frontend) catch ``DeckError`` subclasses and show them to the operator.
"""

from __future__ import annotations


class DeckError(Exception):
    """Base class for all ferrydeck errors."""


class TransportError(DeckError):
    """The API could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidSnapshotError(DeckError):
    """The API response is not JSON or lacks required fields."""


class CapacityError(DeckError):
    """The placement heuristic found no room for a new item."""
