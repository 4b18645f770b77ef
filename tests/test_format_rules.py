"""Tests for per-format construction rules."""

import pytest

from manaforge.models.format_rules import (
    DEFAULT_FORMAT,
    FORMAT_RULES,
    get_format_rule,
    normalize_format_key,
)


class TestFormatRules:
    """Tests for the static rule table."""

    def test_constructed_formats_are_sixty_cards(self) -> None:
        """Every non-commander format targets 60 cards with a 4-copy limit."""
        for key, rule in FORMAT_RULES.items():
            if key == "commander":
                continue
            assert rule.target_size == 60
            assert rule.max_copies == 4
            assert rule.has_sideboard
            assert rule.sideboard_size == 15

    def test_commander_is_hundred_card_singleton(self) -> None:
        """Commander is exactly 100 cards, one copy each, no sideboard."""
        rule = FORMAT_RULES["commander"]

        assert rule.target_size == 100
        assert rule.max_deck_size == 100
        assert rule.singleton
        assert rule.has_commander
        assert not rule.has_sideboard
        assert rule.recommended_lands == 37

    @pytest.mark.parametrize(
        ("key", "lands"),
        [("standard", 24), ("modern", 22), ("legacy", 20), ("vintage", 18), ("pauper", 22)],
    )
    def test_recommended_lands(self, key: str, lands: int) -> None:
        assert FORMAT_RULES[key].recommended_lands == lands


class TestFormatLookup:
    """Tests for format key normalization."""

    def test_known_key_case_insensitive(self) -> None:
        assert normalize_format_key("  Modern ") == "modern"
        assert get_format_rule("COMMANDER").name == "Commander"

    def test_unknown_key_falls_back_to_standard(self) -> None:
        """Unknown formats are treated as Standard."""
        assert normalize_format_key("brawl") == DEFAULT_FORMAT
        assert get_format_rule("brawl") is FORMAT_RULES["standard"]

    def test_missing_key_falls_back_to_standard(self) -> None:
        assert normalize_format_key(None) == "standard"
        assert normalize_format_key("") == "standard"
