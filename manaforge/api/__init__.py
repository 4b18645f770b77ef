from manaforge.api.decks import router as decks_router
from manaforge.api.formats import router as formats_router
from manaforge.api.health import router as health_router

__all__ = [
    "decks_router",
    "formats_router",
    "health_router",
]
