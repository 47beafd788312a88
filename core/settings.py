"""
Application Settings

Reads provider credentials, generation parameters and retry behaviour from the
environment once at startup. Values are frozen for the process lifetime.
"""

# Standard library
import logging
import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Tuple

# Configure logging
logger = logging.getLogger(__name__)

APP_NAME = "MonkeyTalk"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Transform your words into emoji expressions and back again!"

_GEMINI_ENDPOINT_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
_DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
_DEFAULT_EMJ_IS_ENDPOINT = "https://www.emj.is/api/translate"

PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY_HERE"


class KeyRotationPolicy(str, Enum):
    """How retries of a single request draw Gemini credentials."""

    PER_ATTEMPT = "per_attempt"
    PER_REQUEST = "per_request"


@dataclass(frozen=True)
class GeminiSettings:
    """Primary provider configuration."""

    api_keys: Tuple[str, ...] = ()
    model: str = _DEFAULT_GEMINI_MODEL
    endpoint: str = _GEMINI_ENDPOINT_TEMPLATE.format(model=_DEFAULT_GEMINI_MODEL)
    temperature: float = 0.7
    max_output_tokens: int = 10000
    top_p: float = 0.8
    top_k: int = 10
    timeout_seconds: float = 30.0

    def generation_config(self) -> Dict[str, Any]:
        """Returns the `generationConfig` block sent with every request."""
        return {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
            "topP": self.top_p,
            "topK": self.top_k,
        }


@dataclass(frozen=True)
class EmjIsSettings:
    """Secondary provider configuration."""

    endpoint: str = _DEFAULT_EMJ_IS_ENDPOINT
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class RetrySettings:
    """Fixed-delay retry budget applied around each provider call."""

    max_attempts: int = 2
    delay_seconds: float = 1.0


@dataclass(frozen=True)
class AppSettings:
    """Container for all runtime settings."""

    gemini: GeminiSettings
    emj_is: EmjIsSettings
    retry: RetrySettings
    key_rotation: KeyRotationPolicy = KeyRotationPolicy.PER_ATTEMPT


def _is_true(name: str, default: str = "false") -> bool:
    """Parse boolean-like env vars."""
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using default %s", name, raw, default)
        return default


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using default %s", name, raw, default)
        return default


def parse_api_keys(raw: str) -> Tuple[str, ...]:
    """
    Splits a comma-delimited credential list.

    Blank entries and the config.env.example placeholder are dropped; order
    is preserved.
    """
    keys = (key.strip() for key in raw.split(","))
    return tuple(key for key in keys if key and key != PLACEHOLDER_API_KEY)


def _get_rotation_policy() -> KeyRotationPolicy:
    raw = os.getenv("GEMINI_KEY_ROTATION", KeyRotationPolicy.PER_ATTEMPT.value)
    try:
        return KeyRotationPolicy(raw.strip().lower())
    except ValueError:
        logger.warning(
            "GEMINI_KEY_ROTATION=%r is not supported; using %s",
            raw,
            KeyRotationPolicy.PER_ATTEMPT.value,
        )
        return KeyRotationPolicy.PER_ATTEMPT


def load_settings() -> AppSettings:
    """
    Builds settings from the current environment.

    Returns:
        Fully populated AppSettings.
    """
    model = os.getenv("GEMINI_MODEL", _DEFAULT_GEMINI_MODEL).strip() or _DEFAULT_GEMINI_MODEL
    endpoint = os.getenv("GEMINI_ENDPOINT", "").strip() or _GEMINI_ENDPOINT_TEMPLATE.format(
        model=model
    )

    gemini = GeminiSettings(
        api_keys=parse_api_keys(os.getenv("GEMINI_API_KEYS", "")),
        model=model,
        endpoint=endpoint,
        temperature=_get_float("GEMINI_TEMPERATURE", 0.7),
        max_output_tokens=_get_int("GEMINI_MAX_TOKENS", 10000),
        top_p=_get_float("GEMINI_TOP_P", 0.8),
        top_k=_get_int("GEMINI_TOP_K", 10),
        timeout_seconds=_get_float("GEMINI_TIMEOUT_SECONDS", 30.0),
    )
    emj_is = EmjIsSettings(
        endpoint=os.getenv("EMJ_IS_ENDPOINT", "").strip() or _DEFAULT_EMJ_IS_ENDPOINT,
        timeout_seconds=_get_float("EMJ_IS_TIMEOUT_SECONDS", 30.0),
    )

    max_attempts = _get_int("TRANSLATE_RETRY_ATTEMPTS", 2)
    if max_attempts < 1:
        logger.warning("TRANSLATE_RETRY_ATTEMPTS must be >= 1; using 1")
        max_attempts = 1
    retry = RetrySettings(
        max_attempts=max_attempts,
        delay_seconds=max(0.0, _get_float("TRANSLATE_RETRY_DELAY_SECONDS", 1.0)),
    )

    return AppSettings(
        gemini=gemini,
        emj_is=emj_is,
        retry=retry,
        key_rotation=_get_rotation_policy(),
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Returns the cached process-wide settings."""
    return load_settings()


def clear_settings_cache() -> None:
    """
    Clears the settings cache.

    Useful for testing or after the environment has been reloaded.
    """
    get_settings.cache_clear()


def should_use_fake_providers() -> bool:
    """
    Decide whether offline fake providers replace the real APIs.

    Rules:
    - TEST_MODE=true -> always fake (test safety)
    - USE_FAKE_PROVIDERS=true -> fake
    """
    return _is_true("TEST_MODE") or _is_true("USE_FAKE_PROVIDERS")
