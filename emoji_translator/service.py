"""
Translation Routing Service

Chooses providers per direction and applies the retry budget:

- text-to-emoji: emj.is first, Gemini as fallback.
- emoji-to-text: Gemini only (emj.is translates one way).

Only transient failures (HTTP status, transport) are retried. Content
rejections such as safety blocks fail immediately.
"""

# Standard library
import logging
from typing import Awaitable, Callable, Optional

# Local application
from core.providers import (
    ForwardTranslator,
    PrimaryTranslator,
    get_forward_translator,
    get_primary_translator,
)
from core.settings import KeyRotationPolicy, RetrySettings, get_settings
from .exceptions import ProviderError, TranslationFailed, is_transient
from .retry import retry_async
from .schemas import TranslationMode

# Configure logging
logger = logging.getLogger(__name__)


class TranslationRouter:
    """
    Routes a translation request to the right provider chain.

    Args:
        primary: AI translator used for both directions.
        secondary: Text-to-emoji translator tried first for that direction.
        retry: Attempt budget and fixed delay per provider.
        key_rotation: Whether retries of one request rotate credentials
            (`per_attempt`) or reuse the request's credential (`per_request`).
    """

    def __init__(
        self,
        primary: PrimaryTranslator,
        secondary: ForwardTranslator,
        *,
        retry: Optional[RetrySettings] = None,
        key_rotation: KeyRotationPolicy = KeyRotationPolicy.PER_ATTEMPT,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._retry = retry or RetrySettings()
        self._key_rotation = key_rotation

    async def route(self, mode: TranslationMode, text: str) -> str:
        """
        Translates text, falling back between providers where supported.

        Args:
            mode: Translation direction.
            text: Non-empty user input.

        Returns:
            The translated string.

        Raises:
            TranslationFailed: When every provider for the direction failed.
        """
        logger.info("Translation request (mode=%s, chars=%d)", mode.value, len(text))

        if mode is TranslationMode.TEXT_TO_EMOJI:
            try:
                return await self._with_retry(
                    lambda: self._secondary.translate_text_to_emoji(text)
                )
            except ProviderError as exc:
                logger.warning(
                    "%s service failed, falling back to %s: %s",
                    self._secondary.service_name,
                    self._primary.service_name,
                    exc,
                )

        try:
            return await self._translate_with_primary(mode, text)
        except ProviderError as exc:
            raise TranslationFailed(mode, exc) from exc

    async def _translate_with_primary(self, mode: TranslationMode, text: str) -> str:
        if self._key_rotation is KeyRotationPolicy.PER_REQUEST:
            api_key = self._primary.next_api_key()
            return await self._with_retry(
                lambda: self._primary.translate(mode, text, api_key=api_key)
            )
        # Each attempt draws its own credential inside translate().
        return await self._with_retry(lambda: self._primary.translate(mode, text))

    async def _with_retry(self, operation: Callable[[], Awaitable[str]]) -> str:
        return await retry_async(
            operation,
            max_attempts=self._retry.max_attempts,
            delay_seconds=self._retry.delay_seconds,
            should_retry=is_transient,
        )


def get_translation_router() -> TranslationRouter:
    """FastAPI dependency returning a router over the active providers."""
    settings = get_settings()
    return TranslationRouter(
        get_primary_translator(),
        get_forward_translator(),
        retry=settings.retry,
        key_rotation=settings.key_rotation,
    )
