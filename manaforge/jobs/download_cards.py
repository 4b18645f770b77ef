"""
Download the Scryfall oracle-cards bulk file.

The file backs LocalCardLookup for offline normalization. Point
CARD_DATABASE_PATH at it to use it from the API.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from manaforge.services.card_database import download_card_database, load_card_database

logger = logging.getLogger(__name__)


async def run_download(output_path: Path | None = None) -> Path:
    """Download the bulk file and report how many cards it holds."""
    logger.info("Downloading Scryfall oracle cards...")

    try:
        path = await download_card_database(output_path)
    except Exception as e:
        logger.error("Failed to download card database: %s", e)
        raise

    card_count = len(load_card_database(path))
    logger.info("Downloaded %d cards to %s", card_count, path)
    return path


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Download the Scryfall card database")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the JSON file (default: manaforge/data/oracle-cards.json)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download(args.output))


if __name__ == "__main__":
    main()
