"""
Deck Pipeline.

The public surface of deck normalization:

    compile_prompt -> TextGenerator -> parse_response -> resolve_and_normalize

Each call owns its DeckDraft. The only suspension points are the
text-generation call and the card lookups.

INVARIANTS:
1. A returned GeneratedDeck always holds exactly the format's target size
2. Per-card problems surface as warnings, never exceptions
3. Only DeckSizeError and GenerationError escape
"""

import logging

from manaforge.models.deck import GeneratedDeck, ParsedDeck
from manaforge.models.failure import GenerationError, GenerationFailureCause
from manaforge.models.format_rules import FormatRule, get_format_rule, normalize_format_key
from manaforge.services.card_lookup import CardLookup, RateLimiter
from manaforge.services.card_resolver import CardResolver
from manaforge.services.deck_assembler import assemble_deck
from manaforge.services.deck_normalizer import (
    TrimRanking,
    basic_lands_for,
    normalize_draft,
    reverse_insertion_order,
)
from manaforge.services.deck_validator import validate_draft
from manaforge.services.prompt_compiler import DeckGenerationRequest, compile_prompt
from manaforge.services.response_parser import parse_response
from manaforge.services.text_generation import TextGenerator

logger = logging.getLogger(__name__)

__all__ = [
    "compile_prompt",
    "generate_deck",
    "parse_response",
    "resolve_and_normalize",
]


async def resolve_and_normalize(
    parsed: ParsedDeck,
    rule: FormatRule,
    lookup: CardLookup,
    *,
    format_key: str,
    limiter: RateLimiter | None = None,
    rank: TrimRanking | None = None,
) -> GeneratedDeck:
    """
    Resolve, validate and normalize a parsed deck.

    Args:
        parsed: Parser output
        rule: Construction rules for the target format
        lookup: Card database collaborator
        format_key: Lowercase key used to read card legalities
        limiter: Lookup throttle; a default RateLimiter when omitted
        rank: Trim ordering; reverse insertion order when omitted

    Returns:
        Exactly-sized GeneratedDeck with accumulated warnings

    Raises:
        DeckSizeError: If no cards resolved or the size cannot be reached
    """
    resolver = CardResolver(lookup, limiter)

    resolution = await resolver.resolve(parsed)
    draft = resolution.draft
    warnings = list(resolution.warnings)

    warnings.extend(validate_draft(draft, rule, format_key))

    # Only lookups the normalizer may need; failures fall back to synthetic lands
    basic_lands = await resolver.lookup_many(basic_lands_for(draft))
    by_name = {ref.name: ref for ref in basic_lands.values() if ref is not None}

    warnings.extend(normalize_draft(draft, rule, by_name, rank or reverse_insertion_order))

    deck = assemble_deck(draft, rule, format_key, warnings)

    logger.info(
        "deck_assembled",
        extra={
            "format": format_key,
            "total_cards": deck.total_cards,
            "warnings": len(deck.warnings),
        },
    )
    return deck


async def generate_deck(
    request: DeckGenerationRequest,
    generator: TextGenerator,
    lookup: CardLookup,
    *,
    limiter: RateLimiter | None = None,
    rank: TrimRanking | None = None,
) -> GeneratedDeck:
    """
    Generate a deck end to end from a request.

    Raises:
        GenerationError: If the generator fails or returns no text
        DeckSizeError: If the generated list cannot be normalized
    """
    format_key = normalize_format_key(request.format)
    rule = get_format_rule(format_key)

    prompt = compile_prompt(request)
    text = await generator.generate(prompt)
    if not text or not text.strip():
        raise GenerationError(GenerationFailureCause.EMPTY_RESPONSE)

    parsed = parse_response(text)
    logger.info(
        "response_parsed",
        extra={
            "mainboard_entries": len(parsed.mainboard),
            "sideboard_entries": len(parsed.sideboard),
            "has_commander": parsed.commander is not None,
        },
    )

    return await resolve_and_normalize(
        parsed,
        rule,
        lookup,
        format_key=format_key,
        limiter=limiter,
        rank=rank,
    )
