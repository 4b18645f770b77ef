"""
Text-generation collaborator.

The pipeline only needs prompt -> text. AnthropicTextGenerator is the
production implementation; tests substitute any object with an async
generate() method.

Every SDK failure is re-raised as GenerationError with a cause, so the
API layer can render a specific message without knowing the SDK.
"""

import logging
from typing import Protocol

import anthropic
from anthropic.types import TextBlock

from manaforge.config import settings
from manaforge.models.failure import GenerationError, GenerationFailureCause

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert Magic: The Gathering deck builder. "
    "Reply with the deck list only, one card per line."
)


class TextGenerator(Protocol):
    """Prompt -> model text."""

    async def generate(self, prompt: str) -> str: ...


def classify_api_error(error: anthropic.APIError) -> GenerationFailureCause:
    """Map an Anthropic SDK error to a failure cause."""
    if isinstance(error, anthropic.RateLimitError):
        return GenerationFailureCause.RATE_LIMITED
    if isinstance(error, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        return GenerationFailureCause.AUTH
    # APITimeoutError subclasses APIConnectionError
    if isinstance(error, anthropic.APIConnectionError):
        return GenerationFailureCause.NETWORK
    return GenerationFailureCause.UNKNOWN


class AnthropicTextGenerator:
    """
    TextGenerator backed by the Anthropic Messages API.

    Usage:
        generator = AnthropicTextGenerator()
        text = await generator.generate(prompt)
    """

    def __init__(
        self,
        client: anthropic.AsyncAnthropic | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        self._client = client
        self.model = model or settings.generation_model
        self.max_tokens = max_tokens or settings.generation_max_tokens
        self.temperature = (
            temperature if temperature is not None else settings.generation_temperature
        )

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not settings.anthropic_api_key:
                raise GenerationError(
                    GenerationFailureCause.AUTH,
                    detail="Anthropic API key not configured",
                )
            self._client = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        """
        Send a compiled prompt and return the concatenated text reply.

        Raises:
            GenerationError: On any SDK failure, or when the reply has no text
        """
        client = self._get_client()

        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            cause = classify_api_error(e)
            logger.warning("generation_failed", extra={"cause": cause.value})
            raise GenerationError(cause, detail=type(e).__name__) from e

        if response.usage:
            logger.info(
                "generation_completed",
                extra={
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                },
            )

        text = "".join(block.text for block in response.content if isinstance(block, TextBlock))
        if not text.strip():
            raise GenerationError(GenerationFailureCause.EMPTY_RESPONSE)
        return text
