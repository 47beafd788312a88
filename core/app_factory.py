"""
Builds the MonkeyTalk FastAPI app: environment, logging, CORS, request ids,
error envelopes, the translation router and the provider registry lifespan.
"""

# Standard library
import logging
import os
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Third-party
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from core.errors import (
    AppError,
    app_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from core.settings import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    clear_settings_cache,
    get_settings,
    should_use_fake_providers,
)

logger = logging.getLogger(__name__)

_DEFAULT_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8080",  # static frontend
    "http://127.0.0.1:8080",
]
_ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]


def _load_environment() -> None:
    """Reads config.env next to the project root, then drops cached settings."""
    project_root = os.path.dirname(os.path.dirname(__file__))
    dotenv_path = os.path.join(project_root, "config.env")
    load_dotenv(dotenv_path=dotenv_path)
    clear_settings_cache()


def _configure_logging() -> None:
    """Sets up root logging and reports the effective configuration (no key values)."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # httpx logs full request URLs, which carry the Gemini key as a query param.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    settings = get_settings()
    logger.info(
        "GEMINI_API_KEYS: %s",
        f"{len(settings.gemini.api_keys)} loaded" if settings.gemini.api_keys else "Not Found",
    )
    logger.info("GEMINI_MODEL: %s", settings.gemini.model)
    logger.info("GEMINI_KEY_ROTATION: %s", settings.key_rotation.value)
    logger.info(
        "Retry budget: %d attempts, %.1fs delay",
        settings.retry.max_attempts,
        settings.retry.delay_seconds,
    )
    logger.info("USE_FAKE_PROVIDERS: %s", should_use_fake_providers())


def _get_cors_origins() -> list[str]:
    """Comma-separated CORS_ORIGINS, or the local frontend ports."""
    raw = os.getenv("CORS_ORIGINS", "")
    if raw:
        origins = [item.strip() for item in raw.split(",") if item.strip()]
        if origins:
            logger.info("CORS origins from env: %s", origins)
            return origins
        logger.warning("CORS_ORIGINS contained no origins; falling back to local defaults")

    logger.info("CORS origins: local defaults (%d)", len(_DEFAULT_ORIGINS))
    return list(_DEFAULT_ORIGINS)


def _configure_cors(app: FastAPI) -> None:
    """Allows the browser frontend to call the API."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_cors_origins(),
        allow_methods=list(_ALLOWED_METHODS),
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )


def _register_error_handlers(app: FastAPI) -> None:
    """Routes every failure through the JSON error envelope."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def _register_request_id_middleware(app: FastAPI) -> None:
    """Tags each request with an id echoed back in `X-Request-Id`."""

    @app.middleware("http")
    async def assign_request_id(request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response


def _register_routers(app: FastAPI) -> None:
    """Mounts the translation endpoints."""
    from emoji_translator.router import router as translate_router

    app.include_router(translate_router, tags=["Emoji Translation"])


def _initialize_providers() -> None:
    """Builds the provider registry and warns when Gemini has no keys."""
    from core.providers import configure_providers

    registry = configure_providers()
    status = registry.primary.status()
    if not status["available"]:
        logger.warning(
            "Primary AI provider unavailable; emoji-to-text requests will fail "
            "until GEMINI_API_KEYS is set"
        )


@asynccontextmanager
async def app_lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Configures translation providers before the first request."""
    logger.info("Starting %s %s", APP_NAME, APP_VERSION)
    _initialize_providers()
    logger.info("Translation providers ready")
    yield


async def read_root() -> dict[str, str]:
    """Liveness probe."""
    return {"message": f"Welcome to the {APP_NAME} emoji translation API."}


def create_app() -> FastAPI:
    """Returns a fully wired MonkeyTalk application."""
    _load_environment()
    _configure_logging()

    app = FastAPI(
        title=f"{APP_NAME} API",
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        lifespan=app_lifespan,
    )
    _configure_cors(app)
    _register_request_id_middleware(app)
    _register_error_handlers(app)
    _register_routers(app)
    app.add_api_route("/", read_root, methods=["GET"])
    return app
