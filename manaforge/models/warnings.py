"""
Deck Warnings — Soft, Recoverable Pipeline Problems.

A warning never aborts a run. Each carries either a card name or a count,
depending on its kind.
"""

from dataclasses import dataclass
from enum import Enum


class WarningKind(str, Enum):
    """Classification of soft problems."""

    UNRESOLVED = "unresolved"
    BANNED = "banned"
    LANDS_ADDED = "lands_added"
    CARDS_TRIMMED = "cards_trimmed"
    COMMANDER_DOWNGRADED = "commander_downgraded"
    COLOR_IDENTITY = "color_identity"
    COMMANDER_DUPLICATE = "commander_duplicate"


_MESSAGES: dict[WarningKind, str] = {
    WarningKind.UNRESOLVED: "Could not find card: {name}",
    WarningKind.BANNED: "{name} is banned in this format and was removed",
    WarningKind.LANDS_ADDED: "Added {count} basic lands to reach the deck size",
    WarningKind.CARDS_TRIMMED: "Trimmed {count} cards to reach the deck size",
    WarningKind.COMMANDER_DOWNGRADED: (
        "{name} cannot be a commander and was moved to the main deck"
    ),
    WarningKind.COLOR_IDENTITY: "{name} is outside the commander's color identity and was removed",
    WarningKind.COMMANDER_DUPLICATE: "{name} is already the commander and was removed from the main deck",
}


@dataclass(frozen=True, slots=True)
class DeckWarning:
    """
    A single soft problem.

    Build with the named constructors rather than directly.
    """

    kind: WarningKind
    card_name: str | None = None
    count: int | None = None

    @classmethod
    def unresolved(cls, name: str) -> "DeckWarning":
        return cls(kind=WarningKind.UNRESOLVED, card_name=name)

    @classmethod
    def banned(cls, name: str) -> "DeckWarning":
        return cls(kind=WarningKind.BANNED, card_name=name)

    @classmethod
    def lands_added(cls, count: int) -> "DeckWarning":
        return cls(kind=WarningKind.LANDS_ADDED, count=count)

    @classmethod
    def cards_trimmed(cls, count: int) -> "DeckWarning":
        return cls(kind=WarningKind.CARDS_TRIMMED, count=count)

    @classmethod
    def commander_downgraded(cls, name: str) -> "DeckWarning":
        return cls(kind=WarningKind.COMMANDER_DOWNGRADED, card_name=name)

    @classmethod
    def color_identity(cls, name: str) -> "DeckWarning":
        return cls(kind=WarningKind.COLOR_IDENTITY, card_name=name)

    @classmethod
    def commander_duplicate(cls, name: str) -> "DeckWarning":
        return cls(kind=WarningKind.COMMANDER_DUPLICATE, card_name=name)

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind].format(name=self.card_name, count=self.count)
