"""
Format API endpoints.

Exposes the static construction rules so clients can build requests.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from manaforge.models.format_rules import FORMAT_RULES

router = APIRouter(prefix="/formats", tags=["formats"])


class FormatResponse(BaseModel):
    """Construction rules for one format."""

    key: str
    name: str
    min_deck_size: int
    max_deck_size: int | None
    max_copies: int
    singleton: bool
    has_commander: bool
    has_sideboard: bool
    sideboard_size: int
    recommended_lands: int
    description: str


@router.get("", response_model=list[FormatResponse])
async def list_formats() -> list[FormatResponse]:
    """List every supported format."""
    return [
        FormatResponse(
            key=key,
            name=rule.name,
            min_deck_size=rule.min_deck_size,
            max_deck_size=rule.max_deck_size,
            max_copies=rule.max_copies,
            singleton=rule.singleton,
            has_commander=rule.has_commander,
            has_sideboard=rule.has_sideboard,
            sideboard_size=rule.sideboard_size,
            recommended_lands=rule.recommended_lands,
            description=rule.description,
        )
        for key, rule in FORMAT_RULES.items()
    ]
