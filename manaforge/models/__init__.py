from manaforge.models.card import BASIC_LAND_TYPES, CardRef
from manaforge.models.deck import (
    COMMANDER_QUANTITY,
    DeckDraft,
    GeneratedDeck,
    ParsedDeck,
    QuantityEntry,
    ResolvedEntry,
)
from manaforge.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    DeckSizeError,
    FailureDetail,
    FailureKind,
    GenerationError,
    GenerationFailureCause,
    KnownError,
    OutcomeType,
    create_failure_from_error,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from manaforge.models.format_rules import (
    DEFAULT_FORMAT,
    FORMAT_RULES,
    FormatRule,
    get_format_rule,
    normalize_format_key,
)
from manaforge.models.warnings import DeckWarning, WarningKind

__all__ = [
    "ApiResponse",
    "BASIC_LAND_TYPES",
    "COMMANDER_QUANTITY",
    "CardRef",
    "DEFAULT_FORMAT",
    "DeckDraft",
    "DeckSizeError",
    "DeckWarning",
    "FORMAT_RULES",
    "FailureDetail",
    "FailureKind",
    "FormatRule",
    "GeneratedDeck",
    "GenerationError",
    "GenerationFailureCause",
    "KnownError",
    "OutcomeType",
    "ParsedDeck",
    "QuantityEntry",
    "ResolvedEntry",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "WarningKind",
    "create_failure_from_error",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "get_format_rule",
    "is_finalized",
    "normalize_format_key",
]
