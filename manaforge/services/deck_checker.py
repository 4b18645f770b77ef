"""
Deck checker and interactive card adds.

check_deck reports every rule a finished deck breaks without changing it.
add_card is the interactive counterpart of the batch pipeline: where the
validator clamps an over-limit quantity, add_card refuses the add and
leaves the draft as it was.
"""

import logging
from dataclasses import dataclass, field

from manaforge.models.card import CardRef
from manaforge.models.deck import DeckDraft, GeneratedDeck, ResolvedEntry
from manaforge.models.format_rules import FormatRule
from manaforge.services.deck_validator import copy_limit

logger = logging.getLogger(__name__)

# Land count this far from the recommendation earns a warning
LAND_COUNT_TOLERANCE = 5

ILLEGAL_STATUSES = frozenset({"not_legal", "banned"})


@dataclass
class DeckCheckResult:
    """Outcome of checking a deck against its format."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def check_deck(deck: GeneratedDeck, rule: FormatRule, format_key: str) -> DeckCheckResult:
    """
    Check a deck against size, copy, legality and identity rules.

    Cards without a legality entry for the format are not reported, so
    synthetic basic lands pass.

    Args:
        deck: Deck to check
        rule: Construction rules for the format
        format_key: Lowercase key used to read card legalities

    Returns:
        DeckCheckResult; errors make the deck invalid, warnings do not
    """
    result = DeckCheckResult()
    total = deck.total_cards

    if total < rule.min_deck_size:
        result.errors.append(f"Deck has {total} cards, minimum is {rule.min_deck_size}")
    if rule.max_deck_size is not None and total > rule.max_deck_size:
        result.errors.append(f"Deck has {total} cards, maximum is {rule.max_deck_size}")

    for entry in deck.mainboard:
        if not entry.is_basic_land and entry.quantity > rule.max_copies:
            result.errors.append(
                f"{entry.name} has {entry.quantity} copies, maximum is {rule.max_copies}"
            )

    for entry in deck.mainboard:
        if entry.card is None:
            continue
        status = entry.card.legalities.get(format_key)
        if status in ILLEGAL_STATUSES:
            result.errors.append(f"{entry.name} is not legal in {rule.name}")
        elif status == "restricted" and entry.quantity > 1:
            result.errors.append(f"{entry.name} is restricted in {rule.name} (max 1 copy)")

    if deck.commander is not None and rule.has_commander:
        allowed = deck.commander.color_identity
        for entry in deck.mainboard:
            outside = sorted(entry.color_identity - allowed)
            if outside:
                result.errors.append(
                    f"{entry.name} has {outside[0]} in color identity, "
                    "not in commander's identity"
                )

    lands = deck.land_count
    if lands < rule.recommended_lands - LAND_COUNT_TOLERANCE:
        result.warnings.append(f"Only {lands} lands, recommended {rule.recommended_lands}")
    if lands > rule.recommended_lands + LAND_COUNT_TOLERANCE:
        result.warnings.append(f"{lands} lands is high, recommended {rule.recommended_lands}")

    return result


def add_card(
    draft: DeckDraft,
    card: CardRef,
    rule: FormatRule,
    quantity: int = 1,
    format_key: str | None = None,
) -> bool:
    """
    Add copies of a card to a draft's mainboard if the format allows it.

    Args:
        draft: Working deck (mutated only on success)
        card: Card to add
        rule: Construction rules for the format
        quantity: Copies to add
        format_key: When given, restricted cards are limited to one copy

    Returns:
        True if the card was added, False if the add was rejected
    """
    if quantity < 1:
        return False

    existing = draft.mainboard.get(card.name)
    current = existing.quantity if existing is not None else 0
    candidate = ResolvedEntry(name=card.name, quantity=current + quantity, card=card)

    limit = copy_limit(candidate, rule, format_key or "")
    if limit is not None and candidate.quantity > limit:
        logger.debug(
            "card_add_rejected",
            extra={"card_name": card.name, "requested": candidate.quantity, "limit": limit},
        )
        return False

    draft.add(ResolvedEntry(name=card.name, quantity=quantity, card=card))
    return True
