from collections.abc import Callable
from typing import Any

import pytest

from manaforge.models.card import CardRef
from manaforge.services.card_database import LocalCardLookup
from manaforge.services.card_lookup import RateLimiter

ALL_FORMATS = ("standard", "modern", "legacy", "vintage", "commander", "pioneer", "pauper")


def card_data(
    name: str,
    type_line: str = "Instant",
    colors: tuple[str, ...] = ("R",),
    color_identity: tuple[str, ...] | None = None,
    cmc: float = 1.0,
    legalities: dict[str, str] | None = None,
    oracle_text: str = "",
    price: str | None = None,
) -> dict[str, Any]:
    """Scryfall-shaped card object, legal everywhere unless overridden."""
    legal = {fmt: "legal" for fmt in ALL_FORMATS}
    legal.update(legalities or {})
    return {
        "id": f"id-{name.lower().replace(' ', '-')}",
        "name": name,
        "mana_cost": "",
        "cmc": cmc,
        "colors": list(colors),
        "color_identity": list(color_identity if color_identity is not None else colors),
        "type_line": type_line,
        "oracle_text": oracle_text,
        "legalities": legal,
        "prices": {"usd": price},
    }


def basic_land_data(name: str, color: str | None) -> dict[str, Any]:
    return card_data(
        name,
        type_line=f"Basic Land — {name}",
        colors=(),
        color_identity=(color,) if color else (),
        cmc=0.0,
    )


FILLER_SPELL_COUNT = 20


def _card_pool() -> list[dict[str, Any]]:
    cards = [
        card_data("Lightning Bolt", price="1.00"),
        card_data("Counterspell", colors=("U",), cmc=2.0, price="0.50"),
        card_data("Llanowar Elves", type_line="Creature — Elf Druid", colors=("G",)),
        card_data("Goblin Guide", type_line="Creature — Goblin Scout", price="2.00"),
        card_data("Grizzly Bears", type_line="Creature — Bear", colors=("G",), cmc=2.0),
        card_data(
            "Krenko, Mob Boss",
            type_line="Legendary Creature — Goblin Warrior",
            cmc=4.0,
        ),
        card_data(
            "Teferi, Hero of Dominaria",
            type_line="Legendary Planeswalker — Teferi",
            colors=("W", "U"),
            cmc=5.0,
        ),
        card_data(
            "Oko, Thief of Crowns",
            type_line="Legendary Planeswalker — Oko",
            colors=("G", "U"),
            cmc=3.0,
            legalities={"standard": "banned", "modern": "banned"},
        ),
        card_data(
            "Black Lotus",
            type_line="Artifact",
            colors=(),
            cmc=0.0,
            legalities={"vintage": "restricted", "legacy": "banned", "standard": "not_legal"},
        ),
        card_data("Sol Ring", type_line="Artifact", colors=(), cmc=1.0),
        card_data("Commander's Sphere", type_line="Artifact", colors=(), cmc=3.0),
        card_data(
            "Steam Vents",
            type_line="Land — Island Mountain",
            colors=(),
            color_identity=("U", "R"),
            cmc=0.0,
        ),
        basic_land_data("Plains", "W"),
        basic_land_data("Island", "U"),
        basic_land_data("Swamp", "B"),
        basic_land_data("Mountain", "R"),
        basic_land_data("Forest", "G"),
        basic_land_data("Wastes", None),
    ]
    cards.extend(
        card_data(f"Filler Spell {i}", type_line="Sorcery", cmc=float(i % 5 + 1))
        for i in range(1, FILLER_SPELL_COUNT + 1)
    )
    return cards


@pytest.fixture
def card_db() -> dict[str, dict[str, Any]]:
    """Small in-memory card database keyed by name."""
    return {card["name"]: card for card in _card_pool()}


@pytest.fixture
def local_lookup(card_db: dict[str, dict[str, Any]]) -> LocalCardLookup:
    return LocalCardLookup(card_db)


@pytest.fixture
def fast_limiter() -> RateLimiter:
    """Limiter with no spacing, so tests never sleep."""
    return RateLimiter(max_concurrency=4, min_interval=0)


@pytest.fixture
def make_card_data() -> Callable[..., dict[str, Any]]:
    return card_data


@pytest.fixture
def make_card() -> Callable[..., CardRef]:
    def _make(name: str, **kwargs: Any) -> CardRef:
        return CardRef.from_scryfall(card_data(name, **kwargs))

    return _make


@pytest.fixture
def card(card_db: dict[str, dict[str, Any]]) -> Callable[[str], CardRef]:
    """Look up a CardRef from the in-memory database by exact name."""

    def _card(name: str) -> CardRef:
        return CardRef.from_scryfall(card_db[name])

    return _card
