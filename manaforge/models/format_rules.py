"""
Format Rules — Static Per-Format Construction Constants.

Every stage of the pipeline reads deck size, copy limits and land targets
from a FormatRule. Rules are immutable and looked up by lowercase format key.

Unknown keys fall back to Standard.
"""

from dataclasses import dataclass

DEFAULT_FORMAT = "standard"


@dataclass(frozen=True, slots=True)
class FormatRule:
    """
    Construction rules for one format.

    Attributes:
        name: Display name (e.g., "Standard")
        min_deck_size: Minimum legal deck size (commander included)
        max_deck_size: Maximum deck size, or None when unbounded
        max_copies: Max copies of any non-basic-land card
        has_commander: True if the format has a dedicated commander slot
        has_sideboard: True if a sideboard is allowed
        sideboard_size: Sideboard size when allowed
        recommended_lands: Target land count for the mainboard
        description: Short human description
    """

    name: str
    min_deck_size: int
    max_deck_size: int | None
    max_copies: int
    has_commander: bool
    has_sideboard: bool
    sideboard_size: int
    recommended_lands: int
    description: str = ""

    @property
    def singleton(self) -> bool:
        """True when every non-basic-land card is limited to one copy."""
        return self.max_copies == 1

    @property
    def target_size(self) -> int:
        """Exact size a normalized deck must reach."""
        return self.max_deck_size if self.max_deck_size is not None else self.min_deck_size


FORMAT_RULES: dict[str, FormatRule] = {
    "standard": FormatRule(
        name="Standard",
        min_deck_size=60,
        max_deck_size=None,
        max_copies=4,
        has_commander=False,
        has_sideboard=True,
        sideboard_size=15,
        recommended_lands=24,
        description="Uses cards from recent sets (last 2-3 years)",
    ),
    "modern": FormatRule(
        name="Modern",
        min_deck_size=60,
        max_deck_size=None,
        max_copies=4,
        has_commander=False,
        has_sideboard=True,
        sideboard_size=15,
        recommended_lands=22,
        description="Uses cards from 8th Edition forward",
    ),
    "legacy": FormatRule(
        name="Legacy",
        min_deck_size=60,
        max_deck_size=None,
        max_copies=4,
        has_commander=False,
        has_sideboard=True,
        sideboard_size=15,
        recommended_lands=20,
        description="Almost all cards legal, powerful format",
    ),
    "vintage": FormatRule(
        name="Vintage",
        min_deck_size=60,
        max_deck_size=None,
        max_copies=4,
        has_commander=False,
        has_sideboard=True,
        sideboard_size=15,
        recommended_lands=18,
        description="Most powerful format, includes Power 9",
    ),
    "commander": FormatRule(
        name="Commander",
        min_deck_size=100,
        max_deck_size=100,
        max_copies=1,
        has_commander=True,
        has_sideboard=False,
        sideboard_size=0,
        recommended_lands=37,
        description="100-card singleton with a legendary commander",
    ),
    "pioneer": FormatRule(
        name="Pioneer",
        min_deck_size=60,
        max_deck_size=None,
        max_copies=4,
        has_commander=False,
        has_sideboard=True,
        sideboard_size=15,
        recommended_lands=24,
        description="Uses cards from Return to Ravnica forward",
    ),
    "pauper": FormatRule(
        name="Pauper",
        min_deck_size=60,
        max_deck_size=None,
        max_copies=4,
        has_commander=False,
        has_sideboard=True,
        sideboard_size=15,
        recommended_lands=22,
        description="Commons only format",
    ),
}


def normalize_format_key(format_key: str | None) -> str:
    """
    Map an arbitrary format key to a known one.

    Returns the lowercase key if it is in FORMAT_RULES, else DEFAULT_FORMAT.
    """
    key = (format_key or "").strip().lower()
    return key if key in FORMAT_RULES else DEFAULT_FORMAT


def get_format_rule(format_key: str | None) -> FormatRule:
    """Look up the rule for a format key, falling back to Standard."""
    return FORMAT_RULES[normalize_format_key(format_key)]
