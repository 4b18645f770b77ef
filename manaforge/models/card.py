"""
Card Reference Model.

CardRef is the canonical record returned by the card database collaborator.
It is built from a Scryfall card object and is opaque beyond the fields
the pipeline consumes.
"""

from dataclasses import dataclass, field
from typing import Any

BASIC_LAND_TYPES: dict[str, str] = {
    "Plains": "W",
    "Island": "U",
    "Swamp": "B",
    "Mountain": "R",
    "Forest": "G",
}

# Priority order for classifying a type line into one bucket
CARD_TYPE_PRIORITY = (
    "creature",
    "land",
    "instant",
    "sorcery",
    "enchantment",
    "artifact",
    "planeswalker",
)


def _parse_price(raw: Any) -> float | None:
    if raw in (None, ""):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class CardRef:
    """
    Canonical card data.

    Attributes:
        id: Scryfall card ID
        name: Canonical card name
        mana_cost: Mana cost string (e.g., "{1}{R}")
        cmc: Converted mana cost / mana value
        colors: Color letters from the mana cost (W, U, B, R, G)
        color_identity: Color identity letters
        type_line: Full type line (e.g., "Legendary Creature — Elf Druid")
        oracle_text: Rules text, used for commander eligibility
        legalities: Format key -> "legal" | "not_legal" | "restricted" | "banned"
        price_usd: Non-foil USD price, if known
    """

    id: str
    name: str
    mana_cost: str = ""
    cmc: float = 0.0
    colors: tuple[str, ...] = ()
    color_identity: tuple[str, ...] = ()
    type_line: str = ""
    oracle_text: str = ""
    legalities: dict[str, str] = field(default_factory=dict)
    price_usd: float | None = None

    @classmethod
    def from_scryfall(cls, data: dict[str, Any]) -> "CardRef":
        """
        Build a CardRef from a Scryfall card object.

        Double-faced cards keep their top-level type line, falling back to
        the front face when the top level has none.
        """
        faces = data.get("card_faces") or []
        front = faces[0] if faces else {}

        type_line = data.get("type_line") or front.get("type_line", "")
        oracle_text = data.get("oracle_text") or front.get("oracle_text", "")
        mana_cost = data.get("mana_cost") or front.get("mana_cost", "")
        colors = data.get("colors")
        if colors is None:
            colors = front.get("colors", [])

        prices = data.get("prices") or {}

        return cls(
            id=str(data.get("id", "")),
            name=str(data["name"]),
            mana_cost=str(mana_cost),
            cmc=float(data.get("cmc", 0) or 0),
            colors=tuple(colors),
            color_identity=tuple(data.get("color_identity", [])),
            type_line=str(type_line),
            oracle_text=str(oracle_text),
            legalities=dict(data.get("legalities", {})),
            price_usd=_parse_price(prices.get("usd")),
        )

    @classmethod
    def basic_land(cls, name: str) -> "CardRef":
        """Synthetic record for a basic land, used when lookup is unavailable."""
        color = BASIC_LAND_TYPES.get(name)
        return cls(
            id=f"basic-{name.lower()}",
            name=name,
            type_line=f"Basic Land — {name}",
            color_identity=(color,) if color else (),
        )

    @property
    def is_land(self) -> bool:
        return "land" in self.type_line.lower()

    @property
    def is_basic_land(self) -> bool:
        type_line = self.type_line.lower()
        return "basic" in type_line and "land" in type_line

    @property
    def is_legendary_creature(self) -> bool:
        type_line = self.type_line.lower()
        return "legendary" in type_line and "creature" in type_line

    @property
    def can_be_commander(self) -> bool:
        """Legendary creatures, plus cards whose text allows it explicitly."""
        if self.is_legendary_creature:
            return True
        return "can be your commander" in self.oracle_text.lower()

    @property
    def card_type(self) -> str:
        """Primary type bucket: creature, land, instant, ... or "other"."""
        type_line = self.type_line.lower()
        for card_type in CARD_TYPE_PRIORITY:
            if card_type in type_line:
                return card_type
        return "other"

    def legality(self, format_key: str) -> str:
        """Legality status for a format; unknown formats read as not_legal."""
        return self.legalities.get(format_key, "not_legal")

    def is_banned_in(self, format_key: str) -> bool:
        return self.legality(format_key) == "banned"
