"""Tests for soft pipeline warnings."""

from manaforge.models.warnings import DeckWarning, WarningKind


class TestDeckWarning:
    def test_named_warnings_carry_card(self) -> None:
        warning = DeckWarning.banned("Oko, Thief of Crowns")

        assert warning.kind is WarningKind.BANNED
        assert warning.card_name == "Oko, Thief of Crowns"
        assert warning.count is None
        assert warning.message == "Oko, Thief of Crowns is banned in this format and was removed"

    def test_count_warnings(self) -> None:
        assert DeckWarning.lands_added(24).message == "Added 24 basic lands to reach the deck size"
        assert DeckWarning.cards_trimmed(3).count == 3

    def test_value_equality(self) -> None:
        assert DeckWarning.unresolved("Foo") == DeckWarning.unresolved("Foo")
        assert DeckWarning.unresolved("Foo") != DeckWarning.banned("Foo")
