"""Text for the load statistics panel. No tkinter here."""

from __future__ import annotations

from ..engine.types import LoadSnapshot

LOADING_TEXT = "Loading..."


def stats_sections(
    snapshot: LoadSnapshot | None,
) -> list[tuple[str, list[str]]]:
    """Return ``[(heading, lines), ...]`` describing the load and the deck."""
    if snapshot is None:
        return []

    cargo = [
        f"Total weight: {snapshot.total_weight:g}t",
        f"Occupied volume: {snapshot.total_volume_occupied:.2f}m³",
        f"Items loaded: {len(snapshot.items)}",
    ]
    if snapshot.unplaced_items:
        cargo.append(f"Items not placed: {len(snapshot.unplaced_items)}")
    if snapshot.utilization_percentage is not None:
        cargo.append(f"Utilization: {snapshot.utilization_percentage:.1f}%")
    sections = [("Cargo", cargo)]

    deck = snapshot.deck
    if deck is not None:
        sections.append(
            (
                "Deck",
                [
                    f"Width: {deck.width:g}m",
                    f"Length: {deck.length:g}m",
                    f"Max weight: {deck.max_weight:g}t",
                    f"Usable space: {deck.usable_space_fraction * 100:.1f}%",
                ],
            )
        )
    return sections


def stats_text(snapshot: LoadSnapshot | None) -> str:
    blocks = []
    for heading, lines in stats_sections(snapshot):
        blocks.append("\n".join([heading, *lines]))
    return "\n\n".join(blocks)
