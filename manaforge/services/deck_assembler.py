"""
Result Assembler.

Freezes a normalized DeckDraft into a GeneratedDeck. Per-card problems
never raise here; they already live in the warnings list.
"""

from manaforge.models.deck import DeckDraft, GeneratedDeck, ResolvedEntry
from manaforge.models.failure import DeckSizeError
from manaforge.models.format_rules import FormatRule
from manaforge.models.warnings import DeckWarning


def assemble_deck(
    draft: DeckDraft,
    rule: FormatRule,
    format_key: str,
    warnings: list[DeckWarning],
) -> GeneratedDeck:
    """
    Build the immutable result for one pipeline run.

    Raises:
        DeckSizeError: If the draft does not hold exactly the target size
    """
    commander = draft.commander if rule.has_commander else None

    deck = GeneratedDeck(
        format=format_key,
        mainboard=tuple(_copy(entry) for entry in draft.mainboard.values() if entry.quantity > 0),
        commander=_copy(commander) if commander is not None else None,
        sideboard=tuple(_copy(entry) for entry in draft.sideboard if entry.quantity > 0),
        warnings=tuple(warnings),
    )

    if deck.total_cards != rule.target_size:
        raise DeckSizeError(
            requested_size=rule.target_size,
            actual_size=deck.total_cards,
            detail="Assembled deck does not match the format size",
        )

    return deck


def _copy(entry: ResolvedEntry) -> ResolvedEntry:
    # Detach from the draft so later mutation cannot leak into the result
    return ResolvedEntry(name=entry.name, quantity=entry.quantity, card=entry.card)
