"""Tests for provider routing, fallback and retry composition."""

from __future__ import annotations

from typing import Any, List, Optional

import httpx
import pytest

from conftest import RecordingTransport, gemini_text_response, sequence_handler
from core.settings import GeminiSettings, KeyRotationPolicy, RetrySettings
from emoji_translator.emj_is_service import EmjIsTranslator
from emoji_translator.exceptions import (
    MalformedResponse,
    NetworkError,
    ProviderError,
    SafetyBlocked,
    ServiceUnavailable,
    TranslationFailed,
)
from emoji_translator.gemini_service import GeminiTranslator
from emoji_translator.schemas import TranslationMode
from emoji_translator.service import TranslationRouter


class StubPrimary:
    """In-memory AI translator replaying scripted outcomes."""

    service_name = "stub-ai"

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.calls: List[tuple[TranslationMode, str, Optional[str]]] = []

    @property
    def is_available(self) -> bool:
        return True

    def next_api_key(self) -> str:
        return "stub-key"

    def status(self) -> dict[str, Any]:
        return {"service": self.service_name, "available": True, "has_api_key": True, "key_count": 1}

    async def translate(self, mode, text, *, api_key=None) -> str:
        self.calls.append((mode, text, api_key))
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class StubSecondary:
    """In-memory emj.is replacement replaying scripted outcomes."""

    service_name = "stub-emj"

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.calls: List[str] = []

    async def translate_text_to_emoji(self, text: str) -> str:
        self.calls.append(text)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestDirectionRouting:

    @pytest.mark.asyncio
    async def test_text_to_emoji_prefers_secondary(self, fast_retry):
        primary = StubPrimary("🤖")
        secondary = StubSecondary("👋")
        router = TranslationRouter(primary, secondary, retry=fast_retry)

        result = await router.route(TranslationMode.TEXT_TO_EMOJI, "Hey")

        assert result == "👋"
        assert secondary.calls == ["Hey"]
        assert primary.calls == []

    @pytest.mark.asyncio
    async def test_emoji_to_text_uses_primary_only(self, fast_retry):
        primary = StubPrimary("Hello")
        secondary = StubSecondary("unused")
        router = TranslationRouter(primary, secondary, retry=fast_retry)

        result = await router.route(TranslationMode.EMOJI_TO_TEXT, "👋")

        assert result == "Hello"
        assert secondary.calls == []
        assert primary.calls == [(TranslationMode.EMOJI_TO_TEXT, "👋", None)]

    @pytest.mark.asyncio
    async def test_non_transient_secondary_failure_falls_back_without_retry(self, fast_retry):
        primary = StubPrimary("🐶")
        secondary = StubSecondary(MalformedResponse("missing emojiText"))
        router = TranslationRouter(primary, secondary, retry=fast_retry)

        result = await router.route(TranslationMode.TEXT_TO_EMOJI, "dog")

        assert result == "🐶"
        assert len(secondary.calls) == 1
        assert primary.calls[0][0] is TranslationMode.TEXT_TO_EMOJI


class TestFailures:

    @pytest.mark.asyncio
    async def test_safety_block_is_not_retried(self, fast_retry):
        primary = StubPrimary(SafetyBlocked("Response blocked by safety filters: SAFETY", reason="SAFETY"))
        router = TranslationRouter(primary, StubSecondary("unused"), retry=fast_retry)

        with pytest.raises(TranslationFailed) as exc_info:
            await router.route(TranslationMode.EMOJI_TO_TEXT, "👋")

        assert len(primary.calls) == 1
        assert str(exc_info.value) == (
            "Failed to translate emoji to text: Response blocked by safety filters: SAFETY"
        )
        assert isinstance(exc_info.value.__cause__, SafetyBlocked)
        assert not hasattr(exc_info.value, "cause")

    @pytest.mark.asyncio
    async def test_transient_failure_exhausts_budget(self):
        primary = StubPrimary(NetworkError("connection reset"))
        router = TranslationRouter(
            primary,
            StubSecondary("unused"),
            retry=RetrySettings(max_attempts=3, delay_seconds=0.0),
        )

        with pytest.raises(TranslationFailed, match="connection reset"):
            await router.route(TranslationMode.EMOJI_TO_TEXT, "👋")

        assert len(primary.calls) == 3

    @pytest.mark.asyncio
    async def test_both_providers_failing_reports_primary_error(self, fast_retry):
        primary = StubPrimary(ServiceUnavailable("AI service not available. Please configure API key."))
        secondary = StubSecondary(ProviderError("emj.is down"))
        router = TranslationRouter(primary, secondary, retry=fast_retry)

        with pytest.raises(TranslationFailed) as exc_info:
            await router.route(TranslationMode.TEXT_TO_EMOJI, "Hey")

        assert str(exc_info.value).startswith("Failed to translate text to emoji: AI service")
        assert exc_info.value.mode is TranslationMode.TEXT_TO_EMOJI


class TestWithHttpProviders:
    """Routing over the real adapters and a mock transport."""

    @pytest.mark.asyncio
    async def test_secondary_http_errors_fall_back_to_primary(
        self, gemini_settings, emj_is_settings, fast_retry
    ):
        emj_transport = RecordingTransport(sequence_handler(httpx.Response(503)))
        gemini_transport = RecordingTransport(
            sequence_handler(httpx.Response(200, json=gemini_text_response("Sure! \U0001F431 \U0001F436")))
        )
        router = TranslationRouter(
            GeminiTranslator(gemini_settings, transport=gemini_transport),
            EmjIsTranslator(emj_is_settings, transport=emj_transport),
            retry=fast_retry,
        )

        result = await router.route(TranslationMode.TEXT_TO_EMOJI, "raining cats and dogs")

        assert len(emj_transport.requests) == 2
        assert len(gemini_transport.requests) == 1
        assert result == "\U0001F431 \U0001F436"

    @pytest.mark.asyncio
    async def test_per_attempt_policy_rotates_key_on_retry(self, gemini_settings, fast_retry):
        transport = RecordingTransport(
            sequence_handler(
                httpx.Response(429, json={"error": {"message": "Rate limit exceeded"}}),
                httpx.Response(200, json=gemini_text_response("Hello")),
            )
        )
        router = TranslationRouter(
            GeminiTranslator(gemini_settings, transport=transport),
            StubSecondary("unused"),
            retry=fast_retry,
            key_rotation=KeyRotationPolicy.PER_ATTEMPT,
        )

        assert await router.route(TranslationMode.EMOJI_TO_TEXT, "👋") == "Hello"
        assert transport.keys_used() == ["key1", "key2"]

    @pytest.mark.asyncio
    async def test_per_request_policy_reuses_key_on_retry(self, gemini_settings, fast_retry):
        transport = RecordingTransport(
            sequence_handler(
                httpx.Response(500, text="internal"),
                httpx.Response(200, json=gemini_text_response("Hello")),
            )
        )
        primary = GeminiTranslator(gemini_settings, transport=transport)
        router = TranslationRouter(
            primary,
            StubSecondary("unused"),
            retry=fast_retry,
            key_rotation=KeyRotationPolicy.PER_REQUEST,
        )

        assert await router.route(TranslationMode.EMOJI_TO_TEXT, "👋") == "Hello"
        assert transport.keys_used() == ["key1", "key1"]
        assert primary.next_api_key() == "key2"

    @pytest.mark.asyncio
    async def test_per_request_policy_without_keys_fails(self, emj_is_settings, fast_retry):
        router = TranslationRouter(
            GeminiTranslator(GeminiSettings(api_keys=())),
            EmjIsTranslator(emj_is_settings),
            retry=fast_retry,
            key_rotation=KeyRotationPolicy.PER_REQUEST,
        )

        with pytest.raises(TranslationFailed) as exc_info:
            await router.route(TranslationMode.EMOJI_TO_TEXT, "👋")

        assert isinstance(exc_info.value.__cause__, ServiceUnavailable)
