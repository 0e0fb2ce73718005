"""Tests for the statistics panel text."""

from ..engine.types import Deck, Item, LoadSnapshot
from .stats import stats_sections, stats_text

DECK = Deck(width=10, length=6, max_weight=200, usable_space_fraction=0.85)


def test_no_snapshot():
    assert stats_sections(None) == []
    assert stats_text(None) == ""


def test_cargo_and_deck_sections():
    snap = LoadSnapshot(
        deck=DECK,
        items=(Item(id=1, width=2, length=3),),
        total_weight=12.5,
        total_volume_occupied=15.6,
    )
    sections = dict(stats_sections(snap))
    assert sections["Cargo"] == [
        "Total weight: 12.5t",
        "Occupied volume: 15.60m³",
        "Items loaded: 1",
    ]
    assert sections["Deck"] == [
        "Width: 10m",
        "Length: 6m",
        "Max weight: 200t",
        "Usable space: 85.0%",
    ]


def test_optional_cargo_lines():
    snap = LoadSnapshot(
        deck=DECK,
        unplaced_items=(Item(id=4, width=30, length=1),),
        utilization_percentage=42.04,
    )
    cargo = dict(stats_sections(snap))["Cargo"]
    assert "Items not placed: 1" in cargo
    assert "Utilization: 42.0%" in cargo


def test_missing_deck_has_only_cargo():
    sections = stats_sections(LoadSnapshot(deck=None))
    assert [heading for heading, _ in sections] == ["Cargo"]


def test_text_joins_sections():
    text = stats_text(LoadSnapshot(deck=DECK))
    assert text.startswith("Cargo\nTotal weight: 0t")
    assert "\n\nDeck\nWidth: 10m" in text
