"""
Deck text formatter.

Serializes a GeneratedDeck into the same "<qty> <name>" text the response
parser reads, grouped under card-type headers. Parsing the output again
yields the same mainboard, sideboard and commander.
"""

from manaforge.models.deck import GeneratedDeck, ResolvedEntry

# (card_type bucket, header) in output order
TYPE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("creature", "Creatures"),
    ("planeswalker", "Planeswalkers"),
    ("instant", "Instants"),
    ("sorcery", "Sorceries"),
    ("enchantment", "Enchantments"),
    ("artifact", "Artifacts"),
    ("land", "Lands"),
    ("other", "Other"),
)


def _card_type(entry: ResolvedEntry) -> str:
    if entry.card is None:
        return "other"
    return entry.card.card_type


def format_deck_text(deck: GeneratedDeck) -> str:
    """Render a deck as grouped plain text."""
    groups: dict[str, list[ResolvedEntry]] = {bucket: [] for bucket, _ in TYPE_SECTIONS}
    for entry in deck.mainboard:
        groups[_card_type(entry)].append(entry)

    blocks: list[str] = []
    for bucket, header in TYPE_SECTIONS:
        entries = groups[bucket]
        if not entries:
            continue
        count = sum(entry.quantity for entry in entries)
        lines = [f"{header} ({count})"]
        lines.extend(f"{entry.quantity} {entry.name}" for entry in entries)
        blocks.append("\n".join(lines))

    if deck.commander is not None:
        blocks.append(f"Commander\n1 {deck.commander.name}")

    if deck.sideboard:
        lines = ["Sideboard"]
        lines.extend(f"{entry.quantity} {entry.name}" for entry in deck.sideboard)
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks) + "\n"
