"""Text-generation providers for advert copy.

The generator only depends on the TextGenerationProvider protocol, so
the Gemini binding below can be swapped or stubbed in tests.
"""

import asyncio
from typing import Any, Protocol

import google.generativeai as genai
import structlog
from google.api_core import exceptions as google_exceptions

from storefront.domain.exceptions import AdvertGenerationError, ProviderUnavailableError
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

# Errors worth another attempt
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    asyncio.TimeoutError,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
    google_exceptions.ResourceExhausted,
    google_exceptions.ServiceUnavailable,
)


class TextGenerationProvider(Protocol):
    """Anything that turns a prompt into text."""

    async def generate(self, prompt: str) -> str:
        """Generate text for a prompt."""
        ...


class GeminiTextProvider:
    """Google Gemini binding with per-attempt timeout and bounded retries.

    Example usage:
        provider = GeminiTextProvider("gemini-2.5-flash", api_key="...")
        text = await provider.generate("Write a slogan for a keyboard")
    """

    name = "gemini"

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        model: Any | None = None,
    ) -> None:
        """Initialize Gemini provider.

        Args:
            model_name: Gemini model name.
            api_key: API key; when None the ambient google configuration is used.
            timeout: Seconds allowed for a single attempt.
            max_retries: Total number of attempts.
            backoff_base: First backoff delay in seconds, doubled on each retry.
            model: Pre-built model object exposing generate_content_async.
        """
        if api_key:
            genai.configure(api_key=api_key)

        self.model_name = model_name
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.backoff_base = backoff_base
        self.model = model or genai.GenerativeModel(model_name=model_name)

    async def generate(self, prompt: str) -> str:
        """Generate text, retrying transient failures.

        Args:
            prompt: Full prompt text.

        Returns:
            Generated text, or "" when the response carries no text.

        Raises:
            ProviderUnavailableError: If every attempt failed transiently.
            AdvertGenerationError: If the provider rejected the request.
        """
        last_error = "no attempt made"

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await asyncio.wait_for(
                    self.model.generate_content_async(prompt),
                    timeout=self.timeout,
                )
                return _response_text(response)
            except asyncio.TimeoutError:
                last_error = f"timed out after {self.timeout}s"
            except TRANSIENT_ERRORS as e:
                last_error = str(e)
            except google_exceptions.GoogleAPIError as e:
                raise AdvertGenerationError(
                    f"Text generation request rejected: {e}",
                    details={"provider": self.name, "model": self.model_name},
                ) from e

            logger.warning(
                "Text generation attempt failed",
                provider=self.name,
                model=self.model_name,
                attempt=attempt,
                max_retries=self.max_retries,
                error=last_error,
            )

            if attempt < self.max_retries:
                await asyncio.sleep(self.backoff_base * 2 ** (attempt - 1))

        raise ProviderUnavailableError(self.name, self.max_retries, last_error)


def _response_text(response: Any) -> str:
    # .text raises ValueError when the candidate has no text part (e.g. blocked)
    try:
        return response.text or ""
    except ValueError:
        return ""


# Global provider instance
_text_provider: TextGenerationProvider | None = None


def get_text_provider() -> TextGenerationProvider:
    """Get the text-generation provider singleton.

    Returns:
        Provider built from settings.
    """
    global _text_provider
    if _text_provider is None:
        _text_provider = GeminiTextProvider(
            model_name=settings.gemini_model,
            api_key=settings.gemini_api_key,
            timeout=settings.advert_timeout_seconds,
            max_retries=settings.advert_max_retries,
        )
    return _text_provider
