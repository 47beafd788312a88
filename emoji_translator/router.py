"""
Emoji Translation Router

Provides the translate endpoint and a provider status endpoint.
"""

# Standard library
import logging

# Third-party
from fastapi import APIRouter, Depends

# Local application
from core.errors import AppError, ErrorCode
from core.providers import get_forward_translator, get_primary_translator, using_fake_providers
from core.settings import APP_NAME, APP_VERSION
from .exceptions import TranslationFailed
from .schemas import (
    PrimaryProviderStatus,
    ServiceStatusResponse,
    TranslateRequest,
    TranslateResponse,
    TranslationMode,
)
from .service import TranslationRouter, get_translation_router

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_request(payload: TranslateRequest) -> TranslationMode:
    """
    Validates the request body and resolves its direction.

    Raises:
        AppError: 400 when text or mode is missing or mode is unknown.
    """
    if not payload.text or not payload.mode:
        raise AppError(
            code=ErrorCode.BAD_REQUEST,
            message="Missing text or mode",
            status_code=400,
        )
    try:
        return TranslationMode(payload.mode)
    except ValueError:
        raise AppError(
            code=ErrorCode.BAD_REQUEST,
            message="Invalid mode",
            status_code=400,
            details={"allowed": [mode.value for mode in TranslationMode]},
        ) from None


@router.post("/translate", response_model=TranslateResponse)
async def translate(
    payload: TranslateRequest,
    translation_router: TranslationRouter = Depends(get_translation_router),
) -> TranslateResponse:
    """
    Translates text to emoji or emoji to text.

    Provider failures are logged with full detail and collapsed into a
    generic 500 so no provider body reaches the client.

    Raises:
        AppError: 400 for invalid input, 500 when every provider failed.
    """
    mode = _parse_request(payload)

    try:
        translation = await translation_router.route(mode, payload.text)
    except TranslationFailed as exc:
        logger.error(f"Translation error: {exc}", exc_info=True)
        raise AppError(
            code=ErrorCode.TRANSLATION_FAILED,
            message="Failed to translate",
            status_code=500,
        ) from exc

    return TranslateResponse(translation=translation)


@router.get("/status", response_model=ServiceStatusResponse)
async def service_status() -> ServiceStatusResponse:
    """Reports which providers are configured."""
    return ServiceStatusResponse(
        app=APP_NAME,
        version=APP_VERSION,
        primary=PrimaryProviderStatus(**get_primary_translator().status()),
        fallback_service=get_forward_translator().service_name,
        fake_providers=using_fake_providers(),
    )
