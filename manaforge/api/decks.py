"""
Deck API endpoints.

Prompt compilation, normalization of a pasted list, and end-to-end
generation. Normalize and generate answer with the ApiResponse envelope:
known failures keep their own HTTP status, anything else becomes an
unknown failure instead of a raw 500.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from manaforge.config import settings
from manaforge.models.deck import GeneratedDeck, ResolvedEntry
from manaforge.models.failure import (
    ApiResponse,
    KnownError,
    create_failure_from_error,
    create_success,
    create_unknown_failure,
)
from manaforge.models.format_rules import get_format_rule, normalize_format_key
from manaforge.services.card_database import LocalCardLookup, get_card_database
from manaforge.services.card_lookup import CardLookup, ScryfallCardLookup, limiter_from_settings
from manaforge.services.deck_formatter import format_deck_text
from manaforge.services.pipeline import generate_deck, resolve_and_normalize
from manaforge.services.prompt_compiler import DeckGenerationRequest, compile_prompt
from manaforge.services.response_parser import parse_response
from manaforge.services.text_generation import AnthropicTextGenerator, TextGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


# =============================================================================
# DEPENDENCIES
# =============================================================================


async def get_card_lookup() -> AsyncGenerator[CardLookup, None]:
    """Local bulk file when configured, otherwise live Scryfall."""
    if settings.card_database_path:
        yield LocalCardLookup(get_card_database())
        return

    async with ScryfallCardLookup() as lookup:
        yield lookup


def get_text_generator() -> TextGenerator:
    return AnthropicTextGenerator()


# =============================================================================
# REQUEST / RESPONSE MODELS
# =============================================================================


class GenerateRequest(BaseModel):
    """Parameters for a generated deck."""

    format: str = "standard"
    archetype: str = "Midrange"
    colors: list[Literal["W", "U", "B", "R", "G"]] = Field(default_factory=list)
    commander: str | None = None
    strategy_notes: str | None = None
    budget: Literal["budget", "moderate", "competitive"] | None = None

    def to_generation_request(self) -> DeckGenerationRequest:
        return DeckGenerationRequest(
            format=self.format,
            archetype=self.archetype,
            colors=list(self.colors),
            commander=self.commander,
            strategy_notes=self.strategy_notes,
            budget=self.budget,
        )


class NormalizeRequest(BaseModel):
    """A pasted deck list to normalize."""

    format: str = "standard"
    deck_text: str = Field(min_length=1)


class PromptResponse(BaseModel):
    """Compiled generation prompt."""

    format: str
    prompt: str


class CardEntryResponse(BaseModel):
    """One deck entry."""

    name: str
    quantity: int
    type: str


class DeckWarningResponse(BaseModel):
    """One soft problem encountered while building the deck."""

    kind: str
    card_name: str | None = None
    count: int | None = None
    message: str


class DeckPayload(BaseModel):
    """A normalized deck."""

    format: str
    total_cards: int
    land_count: int
    commander: CardEntryResponse | None = None
    mainboard: list[CardEntryResponse]
    sideboard: list[CardEntryResponse]
    warnings: list[DeckWarningResponse]
    deck_text: str


def _entry_response(entry: ResolvedEntry) -> CardEntryResponse:
    card_type = entry.card.card_type if entry.card is not None else "other"
    return CardEntryResponse(name=entry.name, quantity=entry.quantity, type=card_type)


def deck_to_payload(deck: GeneratedDeck) -> DeckPayload:
    """Convert a GeneratedDeck to its API shape."""
    return DeckPayload(
        format=deck.format,
        total_cards=deck.total_cards,
        land_count=deck.land_count,
        commander=_entry_response(deck.commander) if deck.commander is not None else None,
        mainboard=[_entry_response(entry) for entry in deck.mainboard],
        sideboard=[_entry_response(entry) for entry in deck.sideboard],
        warnings=[
            DeckWarningResponse(
                kind=warning.kind.value,
                card_name=warning.card_name,
                count=warning.count,
                message=warning.message,
            )
            for warning in deck.warnings
        ],
        deck_text=format_deck_text(deck),
    )


def _failure(response: Response, error: Exception) -> ApiResponse[Any]:
    if isinstance(error, KnownError):
        response.status_code = error.status_code
        return create_failure_from_error(error)

    logger.exception("deck_request_failed")
    response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return create_unknown_failure(error)


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.post("/prompt", response_model=PromptResponse)
async def build_prompt(request: GenerateRequest) -> PromptResponse:
    """Compile the generation prompt without calling the model."""
    return PromptResponse(
        format=normalize_format_key(request.format),
        prompt=compile_prompt(request.to_generation_request()),
    )


@router.post("/normalize", response_model=ApiResponse[DeckPayload])
async def normalize_deck(
    request: NormalizeRequest,
    response: Response,
    lookup: Annotated[CardLookup, Depends(get_card_lookup)],
) -> ApiResponse[Any]:
    """
    Normalize a user-supplied deck list.

    The text goes through the same parser, resolver, validator and
    normalizer as generated output.
    """
    format_key = normalize_format_key(request.format)
    rule = get_format_rule(format_key)

    try:
        deck = await resolve_and_normalize(
            parse_response(request.deck_text),
            rule,
            lookup,
            format_key=format_key,
            limiter=limiter_from_settings(),
        )
    except Exception as e:
        return _failure(response, e)

    return create_success(deck_to_payload(deck))


@router.post("/generate", response_model=ApiResponse[DeckPayload])
async def generate(
    request: GenerateRequest,
    response: Response,
    generator: Annotated[TextGenerator, Depends(get_text_generator)],
    lookup: Annotated[CardLookup, Depends(get_card_lookup)],
) -> ApiResponse[Any]:
    """
    Generate a deck with the text-generation model and normalize it.

    Generation failures come back as known failures classified by cause.
    """
    try:
        deck = await generate_deck(
            request.to_generation_request(),
            generator,
            lookup,
            limiter=limiter_from_settings(),
        )
    except Exception as e:
        return _failure(response, e)

    return create_success(deck_to_payload(deck))
