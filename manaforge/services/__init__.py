"""
ManaForge services.

Deck generation and normalization business logic.
"""

from manaforge.services.card_database import LocalCardLookup, get_card_database
from manaforge.services.card_lookup import (
    CardLookup,
    CardLookupError,
    RateLimiter,
    ScryfallCardLookup,
    limiter_from_settings,
)
from manaforge.services.card_resolver import CardResolver, ResolutionResult
from manaforge.services.deck_assembler import assemble_deck
from manaforge.services.deck_checker import DeckCheckResult, add_card, check_deck
from manaforge.services.deck_formatter import format_deck_text
from manaforge.services.deck_normalizer import (
    TRIM_RANKINGS,
    TrimRanking,
    basic_lands_for,
    by_cmc_descending,
    by_price_ascending,
    normalize_draft,
    reverse_insertion_order,
)
from manaforge.services.deck_validator import validate_draft
from manaforge.services.pipeline import generate_deck, resolve_and_normalize
from manaforge.services.prompt_compiler import DeckGenerationRequest, compile_prompt
from manaforge.services.response_parser import ParseState, ResponseParser, parse_response
from manaforge.services.text_generation import AnthropicTextGenerator, TextGenerator

__all__ = [
    # Card data
    "CardLookup",
    "CardLookupError",
    "LocalCardLookup",
    "RateLimiter",
    "ScryfallCardLookup",
    "get_card_database",
    "limiter_from_settings",
    # Pipeline stages
    "CardResolver",
    "DeckGenerationRequest",
    "ParseState",
    "ResolutionResult",
    "ResponseParser",
    "TRIM_RANKINGS",
    "TrimRanking",
    "assemble_deck",
    "basic_lands_for",
    "by_cmc_descending",
    "by_price_ascending",
    "compile_prompt",
    "normalize_draft",
    "parse_response",
    "reverse_insertion_order",
    "validate_draft",
    # Public surface
    "generate_deck",
    "resolve_and_normalize",
    # Generation
    "AnthropicTextGenerator",
    "TextGenerator",
    # Checking and output
    "DeckCheckResult",
    "add_card",
    "check_deck",
    "format_deck_text",
]
