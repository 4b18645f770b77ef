"""Tests for the deck text parser."""

from manaforge.models.deck import COMMANDER_QUANTITY, QuantityEntry
from manaforge.services.response_parser import (
    ParseState,
    ResponseParser,
    is_type_header,
    parse_card_line,
    parse_response,
    section_marker,
    state_after_card,
)


class TestParseCardLine:
    """Tests for single card lines."""

    def test_plain_quantity(self) -> None:
        assert parse_card_line("4 Lightning Bolt") == QuantityEntry(4, "Lightning Bolt")

    def test_x_suffix_any_case(self) -> None:
        assert parse_card_line("4x Lightning Bolt") == QuantityEntry(4, "Lightning Bolt")
        assert parse_card_line("1X Sol Ring") == QuantityEntry(1, "Sol Ring")

    def test_bullet_decoration_stripped(self) -> None:
        assert parse_card_line("- 2 Counterspell") == QuantityEntry(2, "Counterspell")
        assert parse_card_line("• 1 Sol Ring") == QuantityEntry(1, "Sol Ring")

    def test_non_card_lines(self) -> None:
        assert parse_card_line("Lightning Bolt") is None
        assert parse_card_line("Creatures (12):") is None


class TestTransitions:
    """Tests for the state machine's transition helpers."""

    def test_section_markers(self) -> None:
        assert section_marker("Sideboard") is ParseState.SIDEBOARD
        assert section_marker("## SIDEBOARD (15)") is ParseState.SIDEBOARD
        assert section_marker("Commander:") is ParseState.COMMANDER
        assert section_marker("Creatures") is None

    def test_sideboard_checked_before_commander(self) -> None:
        """A line naming both switches to the sideboard."""
        assert section_marker("Commander game sideboard") is ParseState.SIDEBOARD

    def test_commander_state_holds_one_card(self) -> None:
        assert state_after_card(ParseState.COMMANDER) is ParseState.MAIN
        assert state_after_card(ParseState.SIDEBOARD) is ParseState.SIDEBOARD
        assert state_after_card(ParseState.MAIN) is ParseState.MAIN

    def test_type_headers(self) -> None:
        assert is_type_header("Creatures (12):")
        assert is_type_header("## Lands")
        assert is_type_header("Sorceries")
        assert not is_type_header("Here is your deck")


class TestResponseParser:
    """Tests for whole-text parsing."""

    def test_sections(self) -> None:
        """Mainboard and sideboard are split on the marker line."""
        text = """Creatures (8)
4 Goblin Guide
4x Monastery Swiftspear

Instants
4 Lightning Bolt

Lands (20)
20 Mountain

Sideboard:
2 Abrade
"""
        parsed = parse_response(text)

        assert [e.name for e in parsed.mainboard] == [
            "Goblin Guide",
            "Monastery Swiftspear",
            "Lightning Bolt",
            "Mountain",
        ]
        assert parsed.mainboard_count == 32
        assert parsed.sideboard == [QuantityEntry(2, "Abrade")]
        assert parsed.commander is None

    def test_commander_section(self) -> None:
        """The commander card fills the slot, then parsing returns to the mainboard."""
        parsed = parse_response("Commander\n1 Krenko, Mob Boss\n1 Goblin Guide\n")

        assert parsed.commander == QuantityEntry(COMMANDER_QUANTITY, "Krenko, Mob Boss")
        assert parsed.commander.is_commander
        assert parsed.mainboard == [QuantityEntry(1, "Goblin Guide")]

    def test_later_commander_overwrites(self) -> None:
        text = "Commander\n1 Krenko, Mob Boss\nCommander\n1 Teferi, Hero of Dominaria\n"

        parsed = parse_response(text)

        assert parsed.commander is not None
        assert parsed.commander.name == "Teferi, Hero of Dominaria"
        assert parsed.mainboard == []

    def test_card_named_like_marker_is_a_card(self) -> None:
        """'1 Commander's Sphere' is a card line, not a section switch."""
        parsed = parse_response("1 Commander's Sphere\n1 Sol Ring\n")

        assert [e.name for e in parsed.mainboard] == ["Commander's Sphere", "Sol Ring"]
        assert parsed.commander is None

    def test_malformed_lines_skipped(self) -> None:
        """Chatter around the list is recorded but never fatal."""
        text = "Here is your deck!\n4 Lightning Bolt\nGood luck.\n"

        parsed = ResponseParser().parse(text)

        assert parsed.mainboard == [QuantityEntry(4, "Lightning Bolt")]
        assert parsed.unparsed_lines == [(1, "Here is your deck!"), (3, "Good luck.")]

    def test_zero_quantity_skipped(self) -> None:
        parsed = parse_response("0 Lightning Bolt\n2 Shock\n")

        assert parsed.mainboard == [QuantityEntry(2, "Shock")]

    def test_empty_text(self) -> None:
        parsed = parse_response("")

        assert parsed.mainboard == []
        assert parsed.sideboard == []
        assert parsed.commander is None

    def test_all_names_deduplicated(self) -> None:
        """Names repeat case-insensitively across sections; first mention wins."""
        text = "4 Lightning Bolt\n2 lightning bolt\nSideboard\n2 Abrade\n1 LIGHTNING BOLT\n"

        parsed = parse_response(text)

        assert parsed.all_names() == ["Lightning Bolt", "Abrade"]
