"""
Pytest Configuration and Shared Fixtures

Provides provider settings, canned Gemini payloads and mock HTTP transports.
"""

# Standard library
import json
import os
import sys
from typing import Any, Callable, Dict, List

# Third-party
import httpx
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Never hit real providers from the test suite.
os.environ["TEST_MODE"] = "true"

from core.settings import EmjIsSettings, GeminiSettings, RetrySettings  # noqa: E402

GEMINI_TEST_ENDPOINT = "https://gemini.test/v1beta/models/test-model:generateContent"
EMJ_IS_TEST_ENDPOINT = "https://emj.test/api/translate"


def gemini_text_response(text: str, finish_reason: str | None = None) -> Dict[str, Any]:
    """Builds a generateContent body with a single text candidate."""
    candidate: Dict[str, Any] = {"content": {"parts": [{"text": text}], "role": "model"}}
    if finish_reason is not None:
        candidate["finishReason"] = finish_reason
    return {"candidates": [candidate]}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def keys_used(self) -> List[str]:
        return [request.url.params.get("key") for request in self.requests]

    def json_bodies(self) -> List[Any]:
        return [json.loads(request.content) for request in self.requests]


def sequence_handler(*responses: httpx.Response) -> Callable[[httpx.Request], httpx.Response]:
    """Returns a handler replaying the given responses; the last one repeats."""
    queue = list(responses)

    def _handler(_request: httpx.Request) -> httpx.Response:
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    return _handler


# ============================================================================
# Settings Fixtures
# ============================================================================

@pytest.fixture
def gemini_settings() -> GeminiSettings:
    """Gemini settings with three credentials and a test endpoint."""
    return GeminiSettings(
        api_keys=("key1", "key2", "key3"),
        model="test-model",
        endpoint=GEMINI_TEST_ENDPOINT,
    )


@pytest.fixture
def emj_is_settings() -> EmjIsSettings:
    return EmjIsSettings(endpoint=EMJ_IS_TEST_ENDPOINT)


@pytest.fixture
def fast_retry() -> RetrySettings:
    """Default attempt budget without the real delay."""
    return RetrySettings(max_attempts=2, delay_seconds=0.0)
