"""
Card lookup collaborators.

Maps a card name to canonical CardRef data. "Not found" is an ordinary
outcome (None), not an exception. Transport failures raise CardLookupError
so the resolver can tell them apart and log them.

Respects Scryfall rate limits via an injectable RateLimiter.
"""

import asyncio
import logging
from types import TracebackType
from typing import Protocol

import httpx

from manaforge.config import DEFAULT_LOOKUP_CONCURRENCY, DEFAULT_LOOKUP_MIN_INTERVAL, settings
from manaforge.models.card import CardRef

logger = logging.getLogger(__name__)

USER_AGENT = "ManaForge/1.0"


class CardLookupError(Exception):
    """Raised when a lookup fails for reasons other than "not found"."""

    pass


class CardLookup(Protocol):
    """Fuzzy name -> CardRef lookup."""

    async def lookup(self, name: str) -> CardRef | None: ...


class RateLimiter:
    """
    Concurrency gate with a minimum spacing between call starts.

    Usage:
        limiter = RateLimiter(max_concurrency=8, min_interval=0.1)
        async with limiter:
            await lookup.lookup(name)
    """

    def __init__(
        self,
        max_concurrency: int = DEFAULT_LOOKUP_CONCURRENCY,
        min_interval: float = DEFAULT_LOOKUP_MIN_INTERVAL,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self.max_concurrency = max_concurrency
        self.min_interval = min_interval
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._spacing_lock = asyncio.Lock()
        self._last_start: float | None = None

    async def __aenter__(self) -> "RateLimiter":
        await self._semaphore.acquire()
        try:
            await self._wait_for_slot()
        except BaseException:
            self._semaphore.release()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._semaphore.release()

    async def _wait_for_slot(self) -> None:
        if self.min_interval == 0:
            return
        async with self._spacing_lock:
            loop = asyncio.get_running_loop()
            now = loop.time()
            if self._last_start is not None:
                delay = self._last_start + self.min_interval - now
                if delay > 0:
                    await asyncio.sleep(delay)
                    now = loop.time()
            self._last_start = now


def limiter_from_settings() -> RateLimiter:
    """Build a limiter from configured concurrency and spacing."""
    return RateLimiter(
        max_concurrency=settings.lookup_concurrency,
        min_interval=settings.lookup_min_interval,
    )


class ScryfallCardLookup:
    """
    Fuzzy lookup against the Scryfall API (GET /cards/named?fuzzy=).

    Pass an existing httpx.AsyncClient to share a connection pool, or use
    the lookup as an async context manager to own one.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.scryfall_timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ScryfallCardLookup":
        if self._client is None:
            self._client = self._make_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    async def lookup(self, name: str) -> CardRef | None:
        """
        Look up a card by approximate name.

        Must be called inside ``async with`` or with an injected client.

        Returns:
            CardRef, or None when Scryfall finds no match

        Raises:
            CardLookupError: On HTTP errors other than 404, transport errors,
                or a response body that is not a card object
            RuntimeError: When no client is open
        """
        if self._client is None:
            raise RuntimeError("ScryfallCardLookup must be used with 'async with' or a client")

        url = f"{self._base_url}/cards/named"
        try:
            response = await self._client.get(url, params={"fuzzy": name})
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CardLookupError(
                f"Failed to look up {name!r}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise CardLookupError(f"Failed to look up {name!r}: {e}") from e

        try:
            return CardRef.from_scryfall(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise CardLookupError(f"Malformed card data for {name!r}: {e}") from e
