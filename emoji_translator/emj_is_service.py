"""
emj.is Translation Service

Text-to-emoji translation through the public emj.is API. No credentials.
"""

# Standard library
import logging
from typing import Optional

# Third-party
import httpx

# Local application
from core.settings import EmjIsSettings
from .exceptions import MalformedResponse, NetworkError, ProviderHttpError

# Configure logging
logger = logging.getLogger(__name__)

_RESULT_FIELD = "emojiText"


class EmjIsTranslator:
    """Secondary provider; only supports text-to-emoji."""

    service_name = "emj.is"

    def __init__(
        self,
        settings: EmjIsSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def translate_text_to_emoji(self, text: str) -> str:
        """
        Translates text to emoji using emj.is.

        Raises:
            NetworkError: Transport failure.
            ProviderHttpError: Non-2xx response.
            MalformedResponse: Body lacks a string `emojiText` field.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self._settings.endpoint, json={"text": text})
        except httpx.RequestError as exc:
            raise NetworkError(f"emj.is API request failed: {type(exc).__name__}") from exc

        if not response.is_success:
            raise ProviderHttpError(
                f"emj.is API error: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponse("emj.is API returned invalid JSON") from exc

        emoji_text = data.get(_RESULT_FIELD) if isinstance(data, dict) else None
        if not isinstance(emoji_text, str):
            raise MalformedResponse(f"emj.is API response missing `{_RESULT_FIELD}`")

        logger.debug("emj.is translated %d chars", len(text))
        return emoji_text
