"""
Prompt compiler.

Builds the deck generation request sent to the text model from an
archetype, colors, budget, commander and free-text strategy notes.
"""

from dataclasses import dataclass, field

from manaforge.models.format_rules import FormatRule, get_format_rule

DEFAULT_ARCHETYPE = "Midrange"

COLOR_NAMES = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
}

# Target curve shape by archetype: (strategy description, curve guideline)
MANA_CURVE_GUIDELINES: dict[str, tuple[str, str]] = {
    "Aggro": (
        "Low curve, lots of 1-2 drops",
        "1-drop: 8-12, 2-drop: 12-16, 3-drop: 4-8, 4+ drop: 0-4",
    ),
    "Midrange": (
        "Balanced curve with value creatures",
        "1-drop: 2-4, 2-drop: 8-10, 3-drop: 8-10, 4-drop: 6-8, 5+ drop: 2-4",
    ),
    "Control": (
        "Higher curve with few creatures",
        "2-drop: 4-6, 3-drop: 6-10, 4-drop: 6-8, 5+ drop: 4-8, plus removal and counters",
    ),
    "Combo": (
        "Focused on combo pieces and card draw",
        "Varies based on combo, prioritize consistency and protection",
    ),
    "Tempo": (
        "Efficient creatures with disruption",
        "1-drop: 4-8, 2-drop: 10-14, 3-drop: 4-8, plus instant-speed interaction",
    ),
    "Ramp": (
        "Mana acceleration into big threats",
        "1-2 drop ramp: 8-12, big finishers (6+ CMC): 6-10",
    ),
    "Tribal": (
        "Synergistic creature-based",
        "Varies by tribe, focus on tribal synergies",
    ),
    "Tokens": (
        "Token generators and anthems",
        "Token makers: 8-12, anthems/payoffs: 4-8",
    ),
    "Aristocrats": (
        "Sacrifice synergies",
        "Sacrifice fodder: 8-12, sacrifice outlets: 4-6, payoffs: 4-6",
    ),
    "Reanimator": (
        "Discard big creatures, reanimate them",
        "Big targets: 4-6, reanimation spells: 6-8, enablers: 8-12",
    ),
    "Burn": (
        "Direct damage spells",
        "Burn spells (mostly 1-2 CMC): 24-28, creatures: 8-12",
    ),
    "Mill": (
        "Deck opponent out",
        "Mill cards: 16-20, control elements: 12-16",
    ),
}

DECK_ARCHETYPES = tuple(MANA_CURVE_GUIDELINES)

BUDGET_GUIDANCE: dict[str, str] = {
    "budget": "Under $50 total, use budget alternatives",
    "moderate": "$50-200 range, balance power with cost",
    "competitive": "No budget restrictions, optimize for power",
}


@dataclass
class DeckGenerationRequest:
    """Parameters for a generated deck."""

    format: str = "standard"
    archetype: str = DEFAULT_ARCHETYPE
    colors: list[str] = field(default_factory=list)  # W, U, B, R, G
    commander: str | None = None
    strategy_notes: str | None = None
    budget: str | None = None  # budget, moderate, competitive


def resolve_archetype(archetype: str | None) -> str:
    """Match an archetype case-insensitively, falling back to Midrange."""
    if archetype:
        for known in DECK_ARCHETYPES:
            if known.lower() == archetype.strip().lower():
                return known
    return DEFAULT_ARCHETYPE


def compile_prompt(request: DeckGenerationRequest) -> str:
    """
    Compile a generation request into a single prompt string.

    Args:
        request: Deck generation parameters

    Returns:
        Prompt text encoding format rules, curve shape, colors, budget
        and the exact output layout the parser expects.
    """
    rules = get_format_rule(request.format)
    archetype = resolve_archetype(request.archetype)
    strategy, curve = MANA_CURVE_GUIDELINES[archetype]

    sections = [
        f"Generate a competitive, legal {rules.name} Magic: The Gathering deck.",
        _format_rules_section(rules),
        _requirements_section(request, rules, archetype, strategy, curve),
        _legality_section(rules),
        _balance_section(rules),
        _output_section(rules),
    ]
    return "\n\n".join(sections)


def _format_rules_section(rules: FormatRule) -> str:
    size_note = " (including commander)" if rules.has_commander else ""
    lines = [
        "FORMAT RULES (MUST follow strictly):",
        f"- Deck size: EXACTLY {rules.target_size} cards{size_note}",
        f"- Maximum copies per card: {rules.max_copies} (except basic lands)",
        f"- You MUST include exactly {rules.recommended_lands} lands "
        "(mana-producing lands, not spells)",
    ]
    if rules.has_commander:
        lines.extend(
            [
                "- COMMANDER: You MUST include a legendary creature as commander. "
                'The commander MUST have the type "Legendary Creature".',
                "- Commander format is SINGLETON: every non-basic-land card can only have 1 copy",
                f"- The deck must have exactly {rules.target_size - 1} cards + 1 commander "
                f"= {rules.target_size} total",
            ]
        )
    if rules.has_sideboard:
        lines.append(f"- Include a {rules.sideboard_size}-card sideboard")
    return "\n".join(lines)


def _requirements_section(
    request: DeckGenerationRequest,
    rules: FormatRule,
    archetype: str,
    strategy: str,
    curve: str,
) -> str:
    lines = [
        "DECK REQUIREMENTS:",
        f"- Archetype: {archetype}",
        f"- Mana curve guideline: {curve}",
        f"- Strategy: {strategy}",
    ]

    if request.colors:
        colors = "/".join(COLOR_NAMES.get(c.upper(), c) for c in request.colors)
        lines.append(f"- Colors: {colors}")

    if request.commander:
        lines.append(f"- Commander: {request.commander}")
        lines.append("- All cards must be within the commander's color identity")

    if request.strategy_notes:
        lines.append(f"- User strategy notes: {request.strategy_notes.strip()}")

    budget = BUDGET_GUIDANCE.get((request.budget or "").lower())
    if budget:
        lines.append(f"- Budget: {budget}")

    return "\n".join(lines)


def _legality_section(rules: FormatRule) -> str:
    return "\n".join(
        [
            "IMPORTANT LEGALITY RULES:",
            f"- ALL cards must be currently legal in {rules.name} format",
            "- Do NOT include any banned or restricted cards",
            "- If unsure about a card's legality, choose a safe alternative",
        ]
    )


def _balance_section(rules: FormatRule) -> str:
    commander = rules.has_commander
    ramp = (
        "10-15 sources including mana rocks and land ramp spells" if commander else "0-4 sources"
    )
    return "\n".join(
        [
            "DECK BALANCE GUIDELINES:",
            f"- LANDS ARE MANDATORY: Include {rules.recommended_lands} lands appropriate "
            "for the format and colors.",
            f"- Include enough card draw/filtering ({'8-12' if commander else '3-6'} cards)",
            f"- Include removal spells appropriate to the format "
            f"({'8-12' if commander else '4-8'} cards)",
            f"- Include mana acceleration/ramp ({ramp})",
            "- Ensure deck has a clear win condition",
            "- Cards should synergize with the chosen strategy",
        ]
    )


def _output_section(rules: FormatRule) -> str:
    lines = ["OUTPUT FORMAT:"]
    if rules.has_commander:
        lines.append(
            'Start with a "Commander" section header, then the commander card on its own line.'
        )
        lines.append(f"Then list the remaining {rules.target_size - 1} cards grouped by type.")
    lines.extend(
        [
            "Group cards by type under section headers "
            "(Creatures, Instants, Sorceries, Enchantments, Artifacts, Planeswalkers, Lands).",
            f'The "Lands" section MUST be present with {rules.recommended_lands} land cards.',
        ]
    )
    if rules.has_sideboard:
        lines.append('Include a "Sideboard" section at the end.')
    lines.append('Each card line format: "QUANTITY CARDNAME" (e.g. "4 Lightning Bolt")')
    lines.append(
        f"CRITICAL: The total card count MUST equal exactly {rules.target_size}. "
        "Count your cards before responding."
    )
    return "\n".join(lines)
