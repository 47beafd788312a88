"""
Translation Schemas

Pydantic models for the emoji translation API.
"""

# Standard library
from enum import Enum
from typing import Optional

# Third-party
from pydantic import BaseModel, Field


class TranslationMode(str, Enum):
    """Direction of a translation request."""

    TEXT_TO_EMOJI = "text-to-emoji"
    EMOJI_TO_TEXT = "emoji-to-text"


class TranslateRequest(BaseModel):
    """
    Request model for `POST /translate`.

    Both fields are optional at the schema level so that a missing value is
    reported as a 400 by the endpoint instead of a 422 validation error.

    Attributes:
        text: Text or emoji sequence to translate.
        mode: "text-to-emoji" or "emoji-to-text".
    """
    text: Optional[str] = None
    mode: Optional[str] = None


class TranslateResponse(BaseModel):
    """
    Response model for a successful translation.

    Attributes:
        translation: Translated text or emoji sequence.
    """
    translation: str


class PrimaryProviderStatus(BaseModel):
    """Availability of the primary AI provider."""
    service: str
    available: bool
    has_api_key: bool
    key_count: int = Field(default=0, ge=0)


class ServiceStatusResponse(BaseModel):
    """Response model for `GET /status`."""
    app: str
    version: str
    primary: PrimaryProviderStatus
    fallback_service: str
    fake_providers: bool
