"""
Response Parser.

THIS MODULE HANDLES SYNTAX ONLY.

Turns arbitrary multi-line text (model output or a pasted list) into
(quantity, name) entries split into mainboard, sideboard and commander.

The scanner is a three-state machine over MAIN, SIDEBOARD and COMMANDER.
Malformed lines are skipped, never fatal: partial output from the
generation source degrades to a partial deck.

The output is UNRESOLVED. Names are not checked against any database.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from manaforge.models.deck import COMMANDER_QUANTITY, ParsedDeck, QuantityEntry

logger = logging.getLogger(__name__)


class ParseState(str, Enum):
    """Section the scanner is currently filling."""

    MAIN = "main"
    SIDEBOARD = "sideboard"
    COMMANDER = "commander"


# "4 Lightning Bolt", "4x Lightning Bolt", "1X Sol Ring"
_CARD_LINE_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

# Leading list decoration the model sometimes adds ("- ", "* ", "• ")
_BULLET_PATTERN = re.compile(r"^[-*•]\s+")

# Cosmetic type dividers: "Creatures", "Lands (24):", "## Instants"
_TYPE_HEADER_PATTERN = re.compile(
    r"^[#*\s]*(creature|instant|sorcer|enchantment|artifact|planeswalker|land)[a-z]*\b",
    re.IGNORECASE,
)


def section_marker(line: str) -> ParseState | None:
    """
    Return the section a header line switches to, or None.

    Only called for lines that are not card entries, so card names such
    as "Commander's Sphere" never switch sections.
    """
    lower = line.lower()
    if "sideboard" in lower:
        return ParseState.SIDEBOARD
    if "commander" in lower:
        return ParseState.COMMANDER
    return None


def is_type_header(line: str) -> bool:
    """True for cosmetic card-type dividers."""
    return _TYPE_HEADER_PATTERN.match(line) is not None


def state_after_card(state: ParseState) -> ParseState:
    """A commander section holds exactly one card, then reverts to MAIN."""
    if state is ParseState.COMMANDER:
        return ParseState.MAIN
    return state


def parse_card_line(line: str) -> QuantityEntry | None:
    """
    Parse "<qty>[x] <name>".

    Returns None if the line is not a card entry.
    """
    match = _CARD_LINE_PATTERN.match(_BULLET_PATTERN.sub("", line))
    if match is None:
        return None
    quantity = int(match.group(1))
    name = match.group(2).strip()
    if not name:
        return None
    return QuantityEntry(quantity=quantity, name=name)


class ResponseParser:
    """
    Line scanner for deck text.

    Usage:
        parser = ResponseParser()
        parsed = parser.parse(text)
        # parsed names are UNRESOLVED
    """

    def parse(self, text: str) -> ParsedDeck:
        """
        Parse deck text into sections.

        Args:
            text: Arbitrary text, typically a model response

        Returns:
            ParsedDeck with mainboard, sideboard and optional commander
        """
        deck = ParsedDeck()
        state = ParseState.MAIN

        for line_num, line in enumerate(text.splitlines(), 1):
            stripped = line.strip()
            if not stripped:
                continue

            entry = parse_card_line(stripped)
            if entry is not None:
                self._route(deck, state, entry, line_num)
                state = state_after_card(state)
                continue

            marker = section_marker(stripped)
            if marker is not None:
                state = marker
                continue

            if is_type_header(stripped):
                continue

            deck.unparsed_lines.append((line_num, stripped))

        if deck.unparsed_lines:
            logger.debug(
                "response_lines_skipped",
                extra={"skipped": len(deck.unparsed_lines)},
            )

        return deck

    def _route(
        self,
        deck: ParsedDeck,
        state: ParseState,
        entry: QuantityEntry,
        line_num: int,
    ) -> None:
        if state is ParseState.COMMANDER:
            if deck.commander is not None:
                logger.debug(
                    "commander_overwritten",
                    extra={"previous": deck.commander.name, "line": line_num},
                )
            deck.commander = QuantityEntry(quantity=COMMANDER_QUANTITY, name=entry.name)
            return

        if entry.quantity <= 0:
            deck.unparsed_lines.append((line_num, f"{entry.quantity} {entry.name}"))
            return

        if state is ParseState.SIDEBOARD:
            deck.sideboard.append(entry)
        else:
            deck.mainboard.append(entry)


def parse_response(text: str) -> ParsedDeck:
    """
    Parse deck text.

    Convenience wrapper that creates a parser and parses.
    """
    return ResponseParser().parse(text)
