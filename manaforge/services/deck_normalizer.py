"""
Deck Size Normalizer.

Brings a validated DeckDraft to the exact target size of its format.

Step A fills a shortage with basic lands in the deck's colors.
Step B trims a surplus in three passes: excess non-basic lands, then
non-land cards, then anything. While trimming, non-land cards are also cut
far enough to make room for the format's recommended land count, so a
spell-heavy proposal ends with a playable mana base.

INVARIANT: on return, mainboard quantity + commander slot == target size.
Any run that cannot reach it raises DeckSizeError. A draft that is already
exactly sized is left untouched.
"""

import logging
from collections.abc import Callable, Mapping

from manaforge.models.card import CardRef
from manaforge.models.deck import DeckDraft, ResolvedEntry
from manaforge.models.failure import DeckSizeError
from manaforge.models.format_rules import FormatRule
from manaforge.models.warnings import DeckWarning

logger = logging.getLogger(__name__)

# WUBRG order; fill order follows it
COLOR_TO_BASIC_LAND = {
    "W": "Plains",
    "U": "Island",
    "B": "Swamp",
    "R": "Mountain",
    "G": "Forest",
}

# Used when no mainboard card has a color
FALLBACK_BASIC_LANDS = ("Mountain", "Forest")

# Only basic land allowed under a colorless commander
COLORLESS_BASIC_LAND = "Wastes"

# Orders candidate entries so the first one is trimmed first
TrimRanking = Callable[[list[ResolvedEntry]], list[ResolvedEntry]]


def reverse_insertion_order(entries: list[ResolvedEntry]) -> list[ResolvedEntry]:
    """
    Trim the latest proposals first.

    Generation sources tend to list signature cards first, so the tail of
    the list holds the lowest-priority suggestions.
    """
    return list(reversed(entries))


def by_price_ascending(entries: list[ResolvedEntry]) -> list[ResolvedEntry]:
    """Trim the cheapest cards first; ties fall back to reverse insertion order."""

    def price(entry: ResolvedEntry) -> float:
        if entry.card is None or entry.card.price_usd is None:
            return 0.0
        return entry.card.price_usd

    return sorted(reversed(entries), key=price)


def by_cmc_descending(entries: list[ResolvedEntry]) -> list[ResolvedEntry]:
    """Trim the most expensive mana costs first, flattening the curve."""

    def cmc(entry: ResolvedEntry) -> float:
        return entry.card.cmc if entry.card is not None else 0.0

    return sorted(reversed(entries), key=cmc, reverse=True)


TRIM_RANKINGS: dict[str, TrimRanking] = {
    "insertion": reverse_insertion_order,
    "price": by_price_ascending,
    "cmc": by_cmc_descending,
}


def commander_reserved(draft: DeckDraft, rule: FormatRule) -> int:
    """Slots taken by a commander outside the mainboard."""
    return 1 if rule.has_commander and draft.commander is not None else 0


def basic_lands_for(draft: DeckDraft) -> list[str]:
    """
    Basic land names matching the colors of the mainboard's cards.

    Colors come from each card's colors field, not its identity. Under a
    commander the lands never leave the commander's identity.
    """
    colors: set[str] = set()
    for entry in draft.mainboard.values():
        if entry.card is not None:
            colors.update(entry.card.colors)

    allowed = draft.commander.color_identity if draft.commander is not None else None
    if allowed is not None:
        colors &= allowed

    lands = [land for color, land in COLOR_TO_BASIC_LAND.items() if color in colors]
    if lands:
        return lands

    if allowed is None:
        return list(FALLBACK_BASIC_LANDS)
    identity_lands = [land for color, land in COLOR_TO_BASIC_LAND.items() if color in allowed]
    return identity_lands or [COLORLESS_BASIC_LAND]


def normalize_draft(
    draft: DeckDraft,
    rule: FormatRule,
    basic_lands: Mapping[str, CardRef | None] | None = None,
    rank: TrimRanking = reverse_insertion_order,
) -> list[DeckWarning]:
    """
    Resize a draft to exactly the format's target size.

    Args:
        draft: Validated working deck (mutated)
        rule: Construction rules for the target format
        basic_lands: Pre-resolved basic land cards by name; missing lands
            get a synthetic basic-land record
        rank: Trim ordering, first entry trimmed first

    Returns:
        LandsAdded / CardsTrimmed warnings for the adjustments made

    Raises:
        DeckSizeError: If no mainboard cards survived resolution and
            validation, or the size invariant does not hold afterwards
    """
    target_total = rule.target_size
    reserved = commander_reserved(draft, rule)
    target_mainboard = target_total - reserved

    if not draft.mainboard:
        raise DeckSizeError(
            requested_size=target_total,
            actual_size=reserved,
            detail="No proposed cards could be resolved",
        )

    warnings: list[DeckWarning] = []

    # Step A: shortage fill
    shortage = target_mainboard - draft.mainboard_count
    if shortage > 0:
        _add_basic_lands(draft, shortage, basic_lands)
        warnings.append(DeckWarning.lands_added(shortage))

    # Step B: excess trim
    excess = draft.mainboard_count + reserved - target_total
    if excess > 0:
        trimmed = _trim_excess(draft, rule, excess, target_mainboard, rank)
        warnings.append(DeckWarning.cards_trimmed(trimmed))

        # Room cut from spells for the recommended land count
        refill = target_mainboard - draft.mainboard_count
        if refill > 0:
            _add_basic_lands(draft, refill, basic_lands)
            warnings.append(DeckWarning.lands_added(refill))

    final_total = draft.mainboard_count + reserved
    if final_total != target_total:
        raise DeckSizeError(
            requested_size=target_total,
            actual_size=final_total,
            detail="Deck size invariant violated after normalization",
        )

    if warnings:
        logger.info(
            "deck_normalized",
            extra={
                "target_size": target_total,
                "lands": draft.land_count,
                "adjustments": [w.kind.value for w in warnings],
            },
        )

    return warnings


def _add_basic_lands(
    draft: DeckDraft,
    count: int,
    basic_lands: Mapping[str, CardRef | None] | None,
) -> None:
    """Spread count basic lands over the deck's colors, remainder to the first ones."""
    lands = basic_lands_for(draft)
    per_land, remainder = divmod(count, len(lands))

    for index, land in enumerate(lands):
        quantity = per_land + (1 if index < remainder else 0)
        if quantity == 0:
            continue

        existing = draft.mainboard.get(land)
        if existing is not None:
            existing.quantity += quantity
            continue

        card = (basic_lands or {}).get(land) or CardRef.basic_land(land)
        draft.add(ResolvedEntry(name=card.name, quantity=quantity, card=card))


def _trim_excess(
    draft: DeckDraft,
    rule: FormatRule,
    excess: int,
    target_mainboard: int,
    rank: TrimRanking,
) -> int:
    """Run the three trim passes. Returns the number of cards removed."""
    excess_lands = max(0, draft.land_count - rule.recommended_lands)
    lands_to_trim = min(excess_lands, excess)

    # Pass 1: non-basic lands above the recommended count
    trimmed = _trim_pass(
        draft,
        rank,
        lambda e: e.is_land and not e.is_basic_land,
        lands_to_trim,
    )

    # Pass 2: non-land cards, plus room for missing lands
    land_deficit = max(0, min(rule.recommended_lands, target_mainboard) - draft.land_count)
    trimmed += _trim_pass(
        draft,
        rank,
        lambda e: not e.is_land,
        excess - trimmed + land_deficit,
    )

    # Pass 3: anything left, for near-all-land proposals
    if trimmed < excess:
        trimmed += _trim_pass(draft, rank, lambda e: True, excess - trimmed)

    return trimmed


def _trim_pass(
    draft: DeckDraft,
    rank: TrimRanking,
    predicate: Callable[[ResolvedEntry], bool],
    budget: int,
) -> int:
    """Trim up to budget cards from matching entries in rank order."""
    if budget <= 0:
        return 0

    trimmed = 0
    candidates = [entry for entry in draft.mainboard.values() if predicate(entry)]
    for entry in rank(candidates):
        if trimmed >= budget:
            break
        take = min(entry.quantity, budget - trimmed)
        entry.quantity -= take
        trimmed += take
        if entry.quantity == 0:
            draft.remove(entry.name)

    return trimmed
