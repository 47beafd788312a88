"""
Provider registry and interfaces for external translation APIs.

This module centralizes Gemini and emj.is provider selection so tests can run
without touching real external APIs. The HTTP transport is injectable; tests
pass `httpx.MockTransport` instead of patching a global client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from core.settings import AppSettings, get_settings, should_use_fake_providers
from emoji_translator.emj_is_service import EmjIsTranslator
from emoji_translator.exceptions import ProviderError
from emoji_translator.gemini_service import GeminiTranslator
from emoji_translator.schemas import TranslationMode
from emoji_translator.text_processing import EMOJI_PATTERN, contains_emojis

logger = logging.getLogger(__name__)


@runtime_checkable
class PrimaryTranslator(Protocol):
    """AI translation provider supporting both directions."""

    service_name: str

    @property
    def is_available(self) -> bool:
        """Whether credentials are configured."""

    def next_api_key(self) -> str:
        """Draw the next credential from the rotation."""

    def status(self) -> dict[str, Any]:
        """Availability report safe to expose to clients."""

    async def translate(
        self,
        mode: TranslationMode,
        text: str,
        *,
        api_key: Optional[str] = None,
    ) -> str:
        """Translate `text` in the given direction."""


@runtime_checkable
class ForwardTranslator(Protocol):
    """Provider that only supports text-to-emoji."""

    service_name: str

    async def translate_text_to_emoji(self, text: str) -> str:
        """Translate plain text to an emoji sequence."""


# Offline word maps used by the fake AI provider.
_FAKE_EMOJI_MAP = {
    "happy": "😊",
    "joy": "😄",
    "love": "❤️",
    "sad": "😢",
    "angry": "😠",
    "surprised": "😲",
    "party": "🎉",
    "cake": "🎂",
    "gift": "🎁",
    "star": "⭐",
    "sun": "☀️",
}
_FAKE_TEXT_MAP = {
    "😊": "happy",
    "😄": "joyful",
    "❤": "love",
    "😢": "sad",
    "😠": "angry",
    "😲": "surprised",
    "🎉": "celebration",
    "🎂": "cake",
    "🎁": "gift",
    "☀": "sun",
}


class FakeAITranslator:
    """Rule-based translator used in tests/fake mode; never calls external APIs."""

    service_name = "fake"

    @property
    def is_available(self) -> bool:
        return True

    def next_api_key(self) -> str:
        return "fake-key"

    def status(self) -> dict[str, Any]:
        return {
            "service": self.service_name,
            "available": True,
            "has_api_key": False,
            "key_count": 0,
        }

    async def translate(
        self,
        mode: TranslationMode,
        text: str,
        *,
        api_key: Optional[str] = None,
    ) -> str:
        if mode is TranslationMode.TEXT_TO_EMOJI:
            words = text.lower().split()
            emojis = [_FAKE_EMOJI_MAP[word] for word in words if word in _FAKE_EMOJI_MAP]
            return " ".join(emojis) if emojis else "😊"

        if not contains_emojis(text):
            return "emoji expression"
        descriptions = [
            _FAKE_TEXT_MAP.get(emoji, emoji) for emoji in EMOJI_PATTERN.findall(text)
        ]
        return ", ".join(descriptions)


class FakeEmjIsTranslator:
    """emj.is provider that blocks real API calls."""

    service_name = "fake-emj.is"

    async def translate_text_to_emoji(self, text: str) -> str:
        raise ProviderError(
            f"External emj.is translation is disabled in test/fake mode (chars={len(text)})"
        )


@dataclass
class ProviderRegistry:
    """Container for active providers."""

    primary: PrimaryTranslator
    secondary: ForwardTranslator


_registry: Optional[ProviderRegistry] = None


def configure_providers(
    use_fake: Optional[bool] = None,
    *,
    settings: Optional[AppSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ProviderRegistry:
    """
    Configure global provider registry.

    Args:
        use_fake: Force fake/real mode. If omitted, infer from env.
        settings: Settings for real providers. Defaults to `get_settings()`.
        transport: httpx transport shared by real providers.
    """
    global _registry

    if use_fake is None:
        use_fake = should_use_fake_providers()

    if use_fake:
        _registry = ProviderRegistry(
            primary=FakeAITranslator(),
            secondary=FakeEmjIsTranslator(),
        )
    else:
        settings = settings or get_settings()
        _registry = ProviderRegistry(
            primary=GeminiTranslator(settings.gemini, transport=transport),
            secondary=EmjIsTranslator(settings.emj_is, transport=transport),
        )

    logger.info("Provider registry configured (fake=%s)", use_fake)
    return _registry


def _get_registry() -> ProviderRegistry:
    global _registry
    if _registry is None:
        _registry = configure_providers()
    return _registry


def get_primary_translator() -> PrimaryTranslator:
    """Return the AI translator from the active registry."""
    return _get_registry().primary


def get_forward_translator() -> ForwardTranslator:
    """Return the text-to-emoji translator from the active registry."""
    return _get_registry().secondary


def using_fake_providers() -> bool:
    """Return whether fake providers are currently active."""
    return isinstance(_get_registry().primary, FakeAITranslator)
