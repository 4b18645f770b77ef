"""
Failure Explanation Envelope — Unified Response Classification.

This module defines the response envelope that ALL API endpoints use to
communicate outcomes, and the exception hierarchy for the pipeline's two
fatal failure classes:

- Text generation failed (classified by cause)
- The normalized deck violates the size invariant

Per-card problems are never exceptions; they are DeckWarnings.

INVARIANT: No raw 500 errors may reach the client.

AUTHORITY BOUNDARY:
All user-visible responses MUST pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, PrivateAttr


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Constraint violations
    DECK_SIZE_VIOLATION = "deck_size_violation"

    # Text generation failures
    GENERATION_RATE_LIMITED = "generation_rate_limited"
    GENERATION_AUTH = "generation_auth"
    GENERATION_NETWORK = "generation_network"
    GENERATION_EMPTY = "generation_empty"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope for all API endpoints.

    Every response is classified into one of three outcome types,
    ensuring no failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    # Set only by finalize_response
    _finalized: bool = PrivateAttr(default=False)

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: generation rate limit, zero cards resolved.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class DeckSizeError(KnownError):
    """
    Raised when normalization cannot reach the target deck size.

    This is the one hard failure of the normalization pipeline. It usually
    means essentially no proposed cards could be resolved.
    """

    def __init__(
        self,
        requested_size: int,
        actual_size: int,
        detail: str | None = None,
    ):
        self.requested_size = requested_size
        self.actual_size = actual_size
        message = (
            f"Unable to construct a {requested_size}-card deck. "
            f"Normalization ended with {actual_size} cards."
        )
        super().__init__(
            kind=FailureKind.DECK_SIZE_VIOLATION,
            message=message,
            detail=detail,
            suggestion="Check that the card names are spelled correctly, then try again.",
            status_code=422,
        )


class GenerationFailureCause(str, Enum):
    """Why the text-generation call failed."""

    RATE_LIMITED = "rate_limited"
    AUTH = "auth"
    NETWORK = "network"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


_GENERATION_FAILURES: dict[GenerationFailureCause, tuple[FailureKind, str, str, int]] = {
    GenerationFailureCause.RATE_LIMITED: (
        FailureKind.GENERATION_RATE_LIMITED,
        "AI rate limit reached.",
        "Please wait a minute and try again.",
        429,
    ),
    GenerationFailureCause.AUTH: (
        FailureKind.GENERATION_AUTH,
        "Invalid or missing API key for the deck generator.",
        "Check the ANTHROPIC_API_KEY configuration.",
        503,
    ),
    GenerationFailureCause.NETWORK: (
        FailureKind.GENERATION_NETWORK,
        "Network error while contacting the deck generator.",
        "Check your internet connection and try again.",
        503,
    ),
    GenerationFailureCause.EMPTY_RESPONSE: (
        FailureKind.GENERATION_EMPTY,
        "The deck generator returned no deck list.",
        "Try again, or simplify the strategy notes.",
        502,
    ),
    GenerationFailureCause.UNKNOWN: (
        FailureKind.EXTERNAL_API_ERROR,
        "The deck generator failed.",
        "If this persists, please report the issue.",
        502,
    ),
}


class GenerationError(KnownError):
    """
    Raised when the text-generation collaborator fails.

    The cause lets callers render a specific message.
    """

    def __init__(self, cause: GenerationFailureCause, detail: str | None = None):
        self.cause = cause
        kind, message, suggestion, status_code = _GENERATION_FAILURES[cause]
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            suggestion=suggestion,
            status_code=status_code,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================
#
# All user-visible responses MUST pass through this boundary.
#
# =============================================================================


# Standard messages: fixed and predictable
STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Every response that passes through this function is guaranteed to
    have a valid outcome classification and failure details when not
    successful.

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    response._finalized = True

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return response._finalized


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=detail,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_failure_from_error(error: KnownError) -> ApiResponse[Any]:
    """Create a finalized known failure carrying the error's own message."""
    return finalize_response(error.to_response())


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
