"""
Tests for deck size normalization.

INVARIANT: a normalized deck holds exactly the format's target size.
Shortages are filled with basic lands, surpluses are trimmed, and a draft
that is already exactly sized is left alone.
"""

import pytest

from manaforge.models.card import CardRef
from manaforge.models.deck import DeckDraft, ResolvedEntry
from manaforge.models.failure import DeckSizeError, FailureKind
from manaforge.models.format_rules import get_format_rule
from manaforge.models.warnings import DeckWarning
from manaforge.services.deck_normalizer import (
    basic_lands_for,
    by_cmc_descending,
    by_price_ascending,
    normalize_draft,
    reverse_insertion_order,
)

STANDARD = get_format_rule("standard")
COMMANDER = get_format_rule("commander")


def _draft(card, *entries: tuple[str, int]) -> DeckDraft:
    draft = DeckDraft()
    for name, quantity in entries:
        draft.add(ResolvedEntry(name=name, quantity=quantity, card=card(name)))
    return draft


def _fillers(count: int, copies: int = 4) -> list[tuple[str, int]]:
    return [(f"Filler Spell {i}", copies) for i in range(1, count + 1)]


def _quantities(draft: DeckDraft) -> dict[str, int]:
    return {name: entry.quantity for name, entry in draft.mainboard.items()}


class TestShortageFill:
    """Step A: adding basic lands."""

    def test_lands_follow_card_colors(self, card) -> None:
        """Basics split evenly over the deck's colors in WUBRG order, remainder first."""
        draft = _draft(
            card,
            ("Goblin Guide", 4),
            ("Counterspell", 4),
            ("Llanowar Elves", 4),
            *_fillers(7),
        )

        warnings = normalize_draft(draft, STANDARD)

        assert warnings == [DeckWarning.lands_added(20)]
        assert draft.mainboard["Island"].quantity == 7
        assert draft.mainboard["Mountain"].quantity == 7
        assert draft.mainboard["Forest"].quantity == 6
        assert draft.mainboard_count == 60

    def test_colorless_deck_uses_fallback_lands(self, card) -> None:
        draft = _draft(card, ("Sol Ring", 4), ("Commander's Sphere", 4))

        normalize_draft(draft, STANDARD)

        assert draft.mainboard["Mountain"].quantity == 26
        assert draft.mainboard["Forest"].quantity == 26

    def test_existing_basic_incremented(self, card) -> None:
        draft = _draft(card, ("Mountain", 10), *_fillers(10))

        normalize_draft(draft, STANDARD)

        assert list(draft.mainboard).count("Mountain") == 1
        assert draft.mainboard["Mountain"].quantity == 20

    def test_pre_resolved_lands_used(self, card) -> None:
        """Supplied land cards are inserted instead of synthetic ones."""
        mountain = card("Mountain")
        draft = _draft(card, *_fillers(10))

        normalize_draft(draft, STANDARD, {"Mountain": mountain})

        assert draft.mainboard["Mountain"].card is mountain

    def test_synthetic_land_when_unresolved(self, card) -> None:
        draft = _draft(card, *_fillers(10))

        normalize_draft(draft, STANDARD, {"Mountain": None})

        land = draft.mainboard["Mountain"].card
        assert land is not None
        assert land.is_basic_land
        assert land.color_identity == ("R",)


class TestExcessTrim:
    """Step B: trimming surplus cards."""

    def test_seventy_spells_no_lands(self, card) -> None:
        """70 spells and no lands end as 36 spells and 24 basics."""
        draft = _draft(card, *_fillers(17), ("Lightning Bolt", 2))
        assert draft.mainboard_count == 70

        warnings = normalize_draft(draft, STANDARD)

        assert draft.mainboard_count == 60
        assert draft.land_count == 24
        assert draft.mainboard_count - draft.land_count == 36
        assert draft.mainboard["Mountain"].quantity == 24
        assert warnings == [DeckWarning.cards_trimmed(34), DeckWarning.lands_added(24)]

    def test_latest_proposals_trimmed_first(self, card) -> None:
        draft = _draft(card, *_fillers(17), ("Lightning Bolt", 2))

        normalize_draft(draft, STANDARD)

        kept = [name for name in draft.mainboard if name != "Mountain"]
        assert kept == [f"Filler Spell {i}" for i in range(1, 10)]

    def test_excess_nonbasic_lands_trimmed_first(self, card) -> None:
        """Lands above the recommended count go before any spell."""
        draft = _draft(card, *_fillers(6), ("Steam Vents", 20), ("Mountain", 20))

        warnings = normalize_draft(draft, STANDARD)

        assert warnings == [DeckWarning.cards_trimmed(4)]
        assert _quantities(draft) == {
            **{f"Filler Spell {i}": 4 for i in range(1, 7)},
            "Steam Vents": 16,
            "Mountain": 20,
        }

    def test_near_all_land_deck_trims_basics(self, card) -> None:
        draft = _draft(card, ("Mountain", 70), ("Lightning Bolt", 4))

        warnings = normalize_draft(draft, STANDARD)

        assert _quantities(draft) == {"Mountain": 60}
        assert warnings == [DeckWarning.cards_trimmed(14)]

    def test_alternate_ranking(self, card) -> None:
        """Ranking by mana value trims the top of the curve instead."""
        draft = _draft(
            card,
            ("Lightning Bolt", 4),
            ("Counterspell", 4),
            *_fillers(5),
            ("Mountain", 36),
        )
        # 28 spells + 36 lands; Filler Spell 4 has the highest mana value
        normalize_draft(draft, STANDARD, rank=by_cmc_descending)

        assert "Filler Spell 4" not in draft.mainboard
        assert draft.mainboard["Lightning Bolt"].quantity == 4
        assert draft.mainboard_count == 60


class TestCommanderDecks:
    def test_commander_slot_counts_toward_size(self, card) -> None:
        draft = _draft(card, ("Goblin Guide", 1), ("Sol Ring", 1))
        draft.commander = ResolvedEntry("Krenko, Mob Boss", 1, card("Krenko, Mob Boss"))

        normalize_draft(draft, COMMANDER)

        assert draft.mainboard_count == 99
        assert draft.mainboard["Mountain"].quantity == 97

    def test_colorless_mainboard_uses_commander_identity(self, card) -> None:
        draft = _draft(card, ("Sol Ring", 1))
        draft.commander = ResolvedEntry("Krenko, Mob Boss", 1, card("Krenko, Mob Boss"))

        assert basic_lands_for(draft) == ["Mountain"]

    def test_colorless_commander_uses_wastes(self, card, make_card) -> None:
        golos = make_card(
            "Golos, Tireless Pilgrim",
            type_line="Legendary Artifact Creature — Scout",
            colors=(),
        )
        draft = _draft(card, ("Sol Ring", 1))
        draft.commander = ResolvedEntry(golos.name, 1, golos)

        normalize_draft(draft, COMMANDER)

        assert draft.mainboard["Wastes"].quantity == 98
        assert draft.mainboard["Wastes"].color_identity == frozenset()


class TestInvariant:
    def test_idempotent(self, card) -> None:
        """A second run changes nothing and reports nothing."""
        draft = _draft(card, *_fillers(17), ("Lightning Bolt", 2))
        normalize_draft(draft, STANDARD)
        before = _quantities(draft)

        assert normalize_draft(draft, STANDARD) == []
        assert _quantities(draft) == before

    def test_exact_size_untouched(self, card) -> None:
        draft = _draft(card, *_fillers(9), ("Mountain", 24))

        assert normalize_draft(draft, STANDARD) == []

    def test_empty_draft_is_fatal(self) -> None:
        """Nothing resolved: never an all-land deck presented as success."""
        with pytest.raises(DeckSizeError) as exc_info:
            normalize_draft(DeckDraft(), STANDARD)

        assert exc_info.value.kind == FailureKind.DECK_SIZE_VIOLATION
        assert exc_info.value.requested_size == 60
        assert exc_info.value.actual_size == 0


class TestRankings:
    def _entries(self, make_card) -> list[ResolvedEntry]:
        specs = [("Alpha", 3.0, "5.00"), ("Beta", 1.0, "0.10"), ("Gamma", 3.0, None)]
        entries = []
        for name, cmc, price in specs:
            ref: CardRef = make_card(name, cmc=cmc, price=price)
            entries.append(ResolvedEntry(name, 1, ref))
        return entries

    def test_reverse_insertion(self, make_card) -> None:
        names = [e.name for e in reverse_insertion_order(self._entries(make_card))]

        assert names == ["Gamma", "Beta", "Alpha"]

    def test_price_ascending(self, make_card) -> None:
        """Unpriced cards count as free; ties keep reverse insertion order."""
        names = [e.name for e in by_price_ascending(self._entries(make_card))]

        assert names == ["Gamma", "Beta", "Alpha"]

    def test_cmc_descending(self, make_card) -> None:
        names = [e.name for e in by_cmc_descending(self._entries(make_card))]

        assert names == ["Gamma", "Alpha", "Beta"]
