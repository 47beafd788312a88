"""Failure taxonomy for translation providers."""

from __future__ import annotations

from typing import Optional

from .schemas import TranslationMode


class ProviderError(RuntimeError):
    """Raised when a translation provider call fails."""

    transient = False


class ServiceUnavailable(ProviderError):
    """No usable credentials are configured for the provider."""


class ProviderHttpError(ProviderError):
    """Provider answered with a non-2xx status."""

    transient = True

    def __init__(self, message: str, *, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NetworkError(ProviderError):
    """Transport failure before a response was received."""

    transient = True


class SafetyBlocked(ProviderError):
    """Provider refused to answer because of its content filters."""

    def __init__(self, message: str, *, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.reason = reason


class TruncatedOutput(ProviderError):
    """Provider hit its output length ceiling before producing content."""


class MalformedResponse(ProviderError):
    """Response body was present but had no recognizable content."""


def is_transient(exc: BaseException) -> bool:
    """Returns True for failures worth retrying (HTTP and transport errors)."""
    return isinstance(exc, ProviderError) and exc.transient


_FAILURE_PREFIXES = {
    TranslationMode.TEXT_TO_EMOJI: "Failed to translate text to emoji",
    TranslationMode.EMOJI_TO_TEXT: "Failed to translate emoji to text",
}


class TranslationFailed(RuntimeError):
    """All providers for a request were exhausted."""

    def __init__(self, mode: TranslationMode, cause: BaseException) -> None:
        super().__init__(f"{_FAILURE_PREFIXES[mode]}: {cause}")
        self.mode = mode
