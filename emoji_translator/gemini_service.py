"""
Gemini Translation Service

Sends the in-context-learning prompt to Google Gemini over its REST API and
turns the first candidate into an emoji sequence or plain text.

Credentials are drawn round-robin from the configured key list. Each call to
`translate` draws a new key unless the caller passes one explicitly.
"""

# Standard library
import logging
from typing import Any, Dict, List, Optional

# Third-party
import httpx

# Local application
from core.settings import PLACEHOLDER_API_KEY, GeminiSettings
from .exceptions import (
    MalformedResponse,
    NetworkError,
    ProviderHttpError,
    SafetyBlocked,
    ServiceUnavailable,
    TruncatedOutput,
)
from .key_rotator import KeyRotator
from .prompts import build_prompt
from .schemas import TranslationMode
from .text_processing import clean_text_response, extract_emojis

# Configure logging
logger = logging.getLogger(__name__)

# Finish reasons meaning the provider withheld its answer.
_BLOCKED_FINISH_REASONS = frozenset(
    {"SAFETY", "RECITATION", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"}
)
_LENGTH_FINISH_REASON = "MAX_TOKENS"
_MAX_LOGGED_BODY_CHARS = 500


class GeminiTranslator:
    """
    Primary translation provider backed by the Gemini generateContent API.

    Args:
        settings: Endpoint, credentials and generation parameters.
        transport: Optional httpx transport; tests pass `httpx.MockTransport`.
    """

    service_name = "gemini"

    def __init__(
        self,
        settings: GeminiSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

        keys = [key for key in settings.api_keys if key and key != PLACEHOLDER_API_KEY]
        self._rotator: Optional[KeyRotator] = KeyRotator(keys) if keys else None

        if self._rotator is None:
            logger.warning("No Gemini API keys configured; AI translation is unavailable")
        else:
            logger.info(
                "GeminiTranslator initialized (model: %s, keys: %d)",
                settings.model,
                len(self._rotator),
            )

    @property
    def is_available(self) -> bool:
        return self._rotator is not None

    def next_api_key(self) -> str:
        """
        Draws the next credential from the rotation.

        Raises:
            ServiceUnavailable: If no credentials are configured.
        """
        if self._rotator is None:
            raise ServiceUnavailable("AI service not available. Please configure API key.")
        return self._rotator.next()

    def status(self) -> Dict[str, Any]:
        """Reports provider availability without exposing credentials."""
        key_count = len(self._rotator) if self._rotator is not None else 0
        return {
            "service": self.service_name,
            "available": self.is_available,
            "has_api_key": key_count > 0,
            "key_count": key_count,
        }

    async def translate(
        self,
        mode: TranslationMode,
        text: str,
        *,
        api_key: Optional[str] = None,
    ) -> str:
        """
        Translates text in the requested direction.

        Args:
            mode: Translation direction.
            text: Raw user input, substituted into the prompt as-is.
            api_key: Credential to use; drawn from the rotation when omitted.

        Returns:
            Emoji sequence (text-to-emoji) or normalized text (emoji-to-text).

        Raises:
            ProviderError: One of the taxonomy subclasses on failure.
        """
        if api_key is None:
            api_key = self.next_api_key()

        payload = await self._generate(build_prompt(text), api_key)
        response_text = parse_candidate_text(payload)

        if mode is TranslationMode.TEXT_TO_EMOJI:
            return extract_emojis(response_text)
        return clean_text_response(response_text)

    async def _generate(self, prompt: str, api_key: str) -> Any:
        """POSTs the prompt and returns the decoded JSON body."""
        request_body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": self._settings.generation_config(),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self._settings.endpoint,
                    params={"key": api_key},
                    json=request_body,
                )
        except httpx.TimeoutException as exc:
            raise NetworkError("Gemini API request timed out") from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"Gemini API request failed: {type(exc).__name__}") from exc

        if not response.is_success:
            body = response.text
            logger.warning(
                "Gemini API returned %s: %s",
                response.status_code,
                body[:_MAX_LOGGED_BODY_CHARS],
            )
            raise ProviderHttpError(
                f"Gemini API error: {response.status_code} {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse("Gemini API returned invalid JSON") from exc


def _candidate_text(candidate: Dict[str, Any]) -> str:
    """Concatenates the non-thought text parts of a candidate."""
    content = candidate.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""

    texts: List[str] = []
    for part in parts:
        if not isinstance(part, dict) or part.get("thought"):
            continue
        value = part.get("text")
        if isinstance(value, str):
            texts.append(value)
    return "".join(texts).strip()


def parse_candidate_text(payload: Any) -> str:
    """
    Classifies a generateContent response and extracts its text.

    Order of checks: blocked, content present, length cutoff, malformed.

    Raises:
        SafetyBlocked: Prompt or candidate blocked by content filters.
        TruncatedOutput: Output ceiling reached before any text.
        MalformedResponse: No candidates or no recognizable text field.
    """
    if not isinstance(payload, dict):
        raise MalformedResponse("Gemini API response is not a JSON object")

    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        feedback = payload.get("promptFeedback")
        block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        if block_reason:
            raise SafetyBlocked(
                f"Prompt blocked by safety filters: {block_reason}",
                reason=block_reason,
            )
        raise MalformedResponse("No candidates in Gemini API response")

    candidate = candidates[0]
    finish_reason = candidate.get("finishReason")

    if finish_reason in _BLOCKED_FINISH_REASONS:
        raise SafetyBlocked(
            f"Response blocked by safety filters: {finish_reason}",
            reason=finish_reason,
        )

    text = _candidate_text(candidate)
    if text:
        return text

    if finish_reason == _LENGTH_FINISH_REASON:
        raise TruncatedOutput("Gemini response truncated before any text (MAX_TOKENS)")

    raise MalformedResponse("No text content found in Gemini API response")
