"""
AudioCraft Backend: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn audiocraft.main:app`) and by
       `python -m audiocraft`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  /api/auth  /api/audio  /api/payments               │
    │  /api/users /api/health                             │
    │                                                     │
    │  Exception Handlers:                                │
    │  AudioCraftError → its status │ body → 400 │ * → 500│
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (missing JWT_SECRET aborts startup)
    3. Create the upload directory
    Shutdown:
    1. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from audiocraft import __version__
from audiocraft.config import settings
from audiocraft.exceptions import AudioCraftError, UnauthenticatedError
from audiocraft.middleware.logging import RequestLoggingMiddleware
from audiocraft.middleware.request_id import RequestIDMiddleware, request_id_var
from audiocraft.routes import audio, auth, health, payments, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2026-01-15T12:00:00 [INFO] audiocraft.services.auth_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("AudioCraft Backend starting up...")

    try:
        settings.validate_required()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        logger.critical("Fix the configuration and restart the server.")
        raise

    if settings.allows_any_origin:
        logger.warning("CORS_ORIGINS allows any origin. Restrict it before going to production.")

    uploads = Path(settings.upload_dir)
    uploads.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory: %s", uploads.resolve())

    logger.info("AudioCraft server running on port %d", settings.port)
    logger.info("Environment: %s", settings.environment)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("AudioCraft Backend shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str) -> dict:
    return {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to status codes and the ErrorResponse body.

    Handler hierarchy:
        AudioCraftError subclasses → exc.status_code (400/401/403/404/500)
        RequestValidationError     → 500 internal_server_error (body parse fault)
        Exception (fallback)       → 500 internal_server_error

    Security: responses never include exception context, stack traces or
    file paths. Those are logged server-side.
    """

    @app.exception_handler(AudioCraftError)
    async def handle_app_error(request: Request, exc: AudioCraftError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            message = "An internal error occurred. Please try again later."
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
            message = exc.message

        headers = {}
        if isinstance(exc, UnauthenticatedError):
            headers["WWW-Authenticate"] = "Bearer"
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, message),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """An unparseable body, or one missing a field the handler cannot do without."""
        rid = request_id_var.get("")
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        logger.error("[%s] Request body could not be parsed: %s", rid, fields)
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_server_error", "Server error"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_server_error", "Server error"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="AudioCraft API",
        description="Accounts, free-trial credits, checkout and audio enhancement for AudioCraft.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=not settings.allows_any_origin,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(audio.router)
    app.include_router(payments.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()
