"""
Legality & Identity Validator.

Applies format construction rules to a resolved DeckDraft, in place:

1. Settle the commander slot (illegal commanders are downgraded)
2. Drop banned cards
3. Drop cards outside the commander's color identity
4. Clamp copy counts to the format limit

Every removal is recorded as a DeckWarning. Nothing here raises.
"""

import logging

from manaforge.models.deck import DeckDraft, ResolvedEntry
from manaforge.models.format_rules import FormatRule
from manaforge.models.warnings import DeckWarning

logger = logging.getLogger(__name__)


def validate_draft(draft: DeckDraft, rule: FormatRule, format_key: str) -> list[DeckWarning]:
    """
    Enforce legality, identity and copy limits on a draft.

    Args:
        draft: Resolved working deck (mutated)
        rule: Construction rules for the target format
        format_key: Lowercase key used to read card legalities

    Returns:
        Warnings for every card removed or moved
    """
    warnings: list[DeckWarning] = []

    settle_commander(draft, rule, warnings)
    drop_banned(draft, format_key, warnings)
    enforce_color_identity(draft, warnings)
    clamp_quantities(draft, rule, format_key)

    if not rule.has_sideboard:
        draft.sideboard = []

    return warnings


def settle_commander(draft: DeckDraft, rule: FormatRule, warnings: list[DeckWarning]) -> None:
    """
    Keep the proposed commander only if the format and the card allow it.

    A card that cannot lead the deck is moved to the mainboard as an
    ordinary single copy, so the rest of validation treats it like any
    other card.
    """
    commander = draft.commander
    if commander is None:
        return

    if not rule.has_commander:
        draft.commander = None
        draft.add(ResolvedEntry(name=commander.name, quantity=1, card=commander.card))
        return

    if commander.card is not None and commander.card.can_be_commander:
        if draft.remove(commander.name) is not None:
            logger.info("commander_duplicate_removed", extra={"card_name": commander.name})
            warnings.append(DeckWarning.commander_duplicate(commander.name))
        return

    logger.info("commander_downgraded", extra={"card_name": commander.name})
    draft.commander = None
    draft.add(ResolvedEntry(name=commander.name, quantity=1, card=commander.card))
    warnings.append(DeckWarning.commander_downgraded(commander.name))


def drop_banned(draft: DeckDraft, format_key: str, warnings: list[DeckWarning]) -> None:
    """Remove every card whose legality for the format is "banned"."""
    if (
        draft.commander is not None
        and draft.commander.card is not None
        and draft.commander.card.is_banned_in(format_key)
    ):
        warnings.append(DeckWarning.banned(draft.commander.name))
        draft.commander = None

    for name, entry in list(draft.mainboard.items()):
        if entry.card is not None and entry.card.is_banned_in(format_key):
            draft.remove(name)
            warnings.append(DeckWarning.banned(name))

    kept: list[ResolvedEntry] = []
    for entry in draft.sideboard:
        if entry.card is not None and entry.card.is_banned_in(format_key):
            warnings.append(DeckWarning.banned(entry.name))
        else:
            kept.append(entry)
    draft.sideboard = kept


def enforce_color_identity(draft: DeckDraft, warnings: list[DeckWarning]) -> None:
    """With a commander in place, drop mainboard cards outside its identity."""
    if draft.commander is None:
        return

    allowed = draft.commander.color_identity
    for name, entry in list(draft.mainboard.items()):
        if not entry.color_identity <= allowed:
            draft.remove(name)
            warnings.append(DeckWarning.color_identity(name))


def copy_limit(entry: ResolvedEntry, rule: FormatRule, format_key: str) -> int | None:
    """
    Maximum copies allowed for an entry, or None for unlimited.

    Basic lands are unlimited. Restricted cards are limited to one.
    """
    if entry.is_basic_land:
        return None
    if entry.card is not None and entry.card.legality(format_key) == "restricted":
        return 1
    return rule.max_copies


def clamp_quantities(draft: DeckDraft, rule: FormatRule, format_key: str) -> None:
    """Clamp entries above their copy limit down to the limit."""
    for entry in [*draft.mainboard.values(), *draft.sideboard]:
        limit = copy_limit(entry, rule, format_key)
        if limit is not None and entry.quantity > limit:
            logger.debug(
                "quantity_clamped",
                extra={"card_name": entry.name, "requested": entry.quantity, "limit": limit},
            )
            entry.quantity = limit
