"""
Deck Models.

ParsedDeck is the UNTRUSTED output of the response parser.
DeckDraft is the mutable working structure, private to one pipeline run.
GeneratedDeck is the frozen result handed back to the caller.
"""

from dataclasses import dataclass, field

from manaforge.models.card import CardRef
from manaforge.models.warnings import DeckWarning

# Quantity sentinel: the entry is the commander and is excluded from size counts
COMMANDER_QUANTITY = -1


@dataclass(frozen=True, slots=True)
class QuantityEntry:
    """A (quantity, name) pair as produced by the parser."""

    quantity: int
    name: str

    @property
    def is_commander(self) -> bool:
        return self.quantity == COMMANDER_QUANTITY


@dataclass
class ParsedDeck:
    """
    Parsed card lists. NOT YET RESOLVED.

    Names are as written by the generation source or the user.
    """

    mainboard: list[QuantityEntry] = field(default_factory=list)
    sideboard: list[QuantityEntry] = field(default_factory=list)
    commander: QuantityEntry | None = None
    unparsed_lines: list[tuple[int, str]] = field(default_factory=list)  # (line_number, text)

    @property
    def mainboard_count(self) -> int:
        return sum(entry.quantity for entry in self.mainboard)

    def all_names(self) -> list[str]:
        """Every distinct name across sections, first mention wins."""
        seen: dict[str, str] = {}
        entries = [*self.mainboard, *self.sideboard]
        if self.commander is not None:
            entries.append(self.commander)
        for entry in entries:
            seen.setdefault(entry.name.casefold(), entry.name)
        return list(seen.values())


@dataclass
class ResolvedEntry:
    """
    A quantity entry merged with its card data.

    card is None when the lookup failed.
    """

    name: str
    quantity: int
    card: CardRef | None = None

    @property
    def is_land(self) -> bool:
        return self.card is not None and self.card.is_land

    @property
    def is_basic_land(self) -> bool:
        return self.card is not None and self.card.is_basic_land

    @property
    def color_identity(self) -> frozenset[str]:
        if self.card is None:
            return frozenset()
        return frozenset(self.card.color_identity)


@dataclass
class DeckDraft:
    """
    Mutable working deck.

    mainboard is keyed by canonical card name; dict order is the order the
    cards were first proposed.
    """

    mainboard: dict[str, ResolvedEntry] = field(default_factory=dict)
    commander: ResolvedEntry | None = None
    sideboard: list[ResolvedEntry] = field(default_factory=list)

    def add(self, entry: ResolvedEntry) -> None:
        """Insert an entry, merging quantity into an existing one of the same name."""
        existing = self.mainboard.get(entry.name)
        if existing is not None:
            existing.quantity += entry.quantity
            if existing.card is None:
                existing.card = entry.card
        else:
            self.mainboard[entry.name] = entry

    def remove(self, name: str) -> ResolvedEntry | None:
        return self.mainboard.pop(name, None)

    @property
    def mainboard_count(self) -> int:
        return sum(entry.quantity for entry in self.mainboard.values())

    @property
    def land_count(self) -> int:
        return sum(entry.quantity for entry in self.mainboard.values() if entry.is_land)


@dataclass(frozen=True)
class GeneratedDeck:
    """
    A normalized, exactly-sized deck.

    Attributes:
        format: Format key the deck was normalized for
        mainboard: Mainboard entries in proposal order
        commander: Commander entry, if a commander slot is filled
        sideboard: Sideboard entries
        warnings: Soft problems encountered along the way
    """

    format: str
    mainboard: tuple[ResolvedEntry, ...] = ()
    commander: ResolvedEntry | None = None
    sideboard: tuple[ResolvedEntry, ...] = ()
    warnings: tuple[DeckWarning, ...] = ()

    @property
    def total_cards(self) -> int:
        """Mainboard quantity plus one for a filled commander slot."""
        main = sum(entry.quantity for entry in self.mainboard)
        return main + (1 if self.commander is not None else 0)

    @property
    def land_count(self) -> int:
        return sum(entry.quantity for entry in self.mainboard if entry.is_land)

    def mainboard_dict(self) -> dict[str, int]:
        return {entry.name: entry.quantity for entry in self.mainboard}

    def sideboard_dict(self) -> dict[str, int]:
        return {entry.name: entry.quantity for entry in self.sideboard}
