"""
Card Resolution Service.

Resolves parsed names to canonical card data through a CardLookup
collaborator and builds the working DeckDraft.

INVARIANTS:
1. Each distinct name (case-insensitive) is looked up once per run
2. Lookup failures are NEVER fatal: they become Unresolved warnings
3. Mainboard entries are keyed by canonical name, quantities merged
4. Throttling policy lives in the injected RateLimiter, not here
"""

import asyncio
import logging
from dataclasses import dataclass, field

from manaforge.models.card import CardRef
from manaforge.models.deck import DeckDraft, ParsedDeck, QuantityEntry, ResolvedEntry
from manaforge.models.warnings import DeckWarning
from manaforge.services.card_lookup import CardLookup, CardLookupError, RateLimiter

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Result of resolving a parsed deck."""

    draft: DeckDraft
    """Working deck containing only resolved cards."""

    warnings: list[DeckWarning] = field(default_factory=list)
    """One Unresolved warning per name that failed lookup."""

    unresolved: list[str] = field(default_factory=list)
    """Names that failed lookup, in first-mention order."""

    @property
    def all_resolved(self) -> bool:
        return not self.unresolved


class CardResolver:
    """
    Resolves ParsedDeck -> DeckDraft using a CardLookup.

    Lookups are mutually independent and run concurrently behind the
    limiter's gate.
    """

    def __init__(self, lookup: CardLookup, limiter: RateLimiter | None = None) -> None:
        self._lookup = lookup
        self._limiter = limiter or RateLimiter()

    async def resolve(self, parsed: ParsedDeck) -> ResolutionResult:
        """
        Resolve every name in a parsed deck.

        Args:
            parsed: Parser output

        Returns:
            ResolutionResult with the draft and any Unresolved warnings
        """
        names = parsed.all_names()
        refs = await self.lookup_many(names)

        unresolved = [name for name in names if refs[name.casefold()] is None]
        warnings = [DeckWarning.unresolved(name) for name in unresolved]

        draft = DeckDraft()
        for entry in parsed.mainboard:
            resolved = self._resolve_entry(entry, refs)
            if resolved is not None:
                draft.add(resolved)

        sideboard: dict[str, ResolvedEntry] = {}
        for entry in parsed.sideboard:
            resolved = self._resolve_entry(entry, refs)
            if resolved is None:
                continue
            if resolved.name in sideboard:
                sideboard[resolved.name].quantity += resolved.quantity
            else:
                sideboard[resolved.name] = resolved
        draft.sideboard = list(sideboard.values())

        if parsed.commander is not None:
            ref = refs.get(parsed.commander.name.casefold())
            if ref is not None:
                # The commander slot always holds exactly one card
                draft.commander = ResolvedEntry(name=ref.name, quantity=1, card=ref)

        logger.info(
            "cards_resolved",
            extra={"requested": len(names), "unresolved": len(unresolved)},
        )

        return ResolutionResult(draft=draft, warnings=warnings, unresolved=unresolved)

    async def lookup_many(self, names: list[str]) -> dict[str, CardRef | None]:
        """
        Look up several names concurrently.

        Returns:
            Dict keyed by casefolded query name
        """
        distinct: dict[str, str] = {}
        for name in names:
            distinct.setdefault(name.casefold(), name)

        results = await asyncio.gather(*(self._lookup_one(name) for name in distinct.values()))
        return dict(zip(distinct.keys(), results, strict=True))

    async def _lookup_one(self, name: str) -> CardRef | None:
        async with self._limiter:
            try:
                card = await self._lookup.lookup(name)
            except CardLookupError as e:
                logger.warning("Card lookup failed for %s: %s", name, e)
                return None

        if card is None:
            logger.debug("card_unresolved", extra={"card_name": name})
        return card

    @staticmethod
    def _resolve_entry(
        entry: QuantityEntry,
        refs: dict[str, CardRef | None],
    ) -> ResolvedEntry | None:
        ref = refs.get(entry.name.casefold())
        if ref is None:
            return None
        return ResolvedEntry(name=ref.name, quantity=entry.quantity, card=ref)
