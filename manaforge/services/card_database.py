"""
Card database service.

Loads a Scryfall bulk card file and serves fuzzy name lookups from it,
for offline use and tests. The live Scryfall lookup lives in card_lookup.
"""

import difflib
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx

from manaforge.config import settings
from manaforge.models.card import CardRef

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_DATABASE_PATH = DATA_DIR / "oracle-cards.json"

# difflib similarity floor for fuzzy matches
FUZZY_CUTOFF = 0.85


async def download_card_database(output_path: Path | None = None) -> Path:
    """
    Download latest Scryfall oracle-cards bulk data.

    Args:
        output_path: Where to save the file. Defaults to data/oracle-cards.json

    Returns:
        Path to downloaded file.

    Raises:
        ValueError: If bulk data URL not found
        httpx.HTTPError: If download fails
    """
    if output_path is None:
        output_path = DEFAULT_DATABASE_PATH

    output_path.parent.mkdir(parents=True, exist_ok=True)

    async with httpx.AsyncClient(timeout=settings.scryfall_timeout) as client:
        response = await client.get(f"{settings.scryfall_api_url}/bulk-data")
        response.raise_for_status()
        data = response.json()

        download_url = None
        for item in data["data"]:
            if item["type"] == "oracle_cards":
                download_url = item["download_uri"]
                break

        if not download_url:
            raise ValueError("Could not find oracle_cards bulk data URL")

        # Stream download (file is large)
        async with client.stream("GET", download_url, timeout=300.0) as response:
            response.raise_for_status()
            with open(output_path, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    f.write(chunk)

    return output_path


def load_card_database(path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load card database from file.

    Args:
        path: Path to JSON file. Defaults to data/oracle-cards.json

    Returns:
        Dict mapping card names to card data (first printing wins).

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    if path is None:
        path = DEFAULT_DATABASE_PATH

    if not path.exists():
        raise FileNotFoundError(
            f"Card database not found at {path}. "
            "Run `manaforge-download-cards` first."
        )

    with open(path, encoding="utf-8") as f:
        cards = json.load(f)

    db: dict[str, dict[str, Any]] = {}
    for card in cards:
        name = card.get("name")
        if name and name not in db:
            db[name] = card

    return db


@lru_cache(maxsize=1)
def get_card_database() -> dict[str, dict[str, Any]]:
    """
    Get cached card database from the configured path.

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    path = Path(settings.card_database_path) if settings.card_database_path else None
    return load_card_database(path)


class LocalCardLookup:
    """
    Fuzzy name lookup over an in-memory Scryfall card database.

    Matching order: exact case-insensitive name, front face of a
    double-faced card ("Delver of Secrets" for "Delver of Secrets //
    Insectile Aberration"), then the closest difflib match above
    FUZZY_CUTOFF.
    """

    def __init__(self, card_db: dict[str, dict[str, Any]]) -> None:
        self._card_db = card_db
        self._by_folded: dict[str, str] = {}
        for name in card_db:
            folded = name.casefold()
            self._by_folded.setdefault(folded, name)
            if " // " in name:
                self._by_folded.setdefault(folded.split(" // ")[0], name)

    def find_name(self, name: str) -> str | None:
        """Return the canonical database name for a query, or None."""
        folded = name.strip().casefold()
        if not folded:
            return None

        exact = self._by_folded.get(folded)
        if exact is not None:
            return exact

        close = difflib.get_close_matches(folded, self._by_folded.keys(), n=1, cutoff=FUZZY_CUTOFF)
        if close:
            return self._by_folded[close[0]]
        return None

    async def lookup(self, name: str) -> CardRef | None:
        canonical = self.find_name(name)
        if canonical is None:
            return None
        return CardRef.from_scryfall(self._card_db[canonical])
