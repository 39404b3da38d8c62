"""
MoodLog Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app) and by the
       test suite with fake providers (create_app(services=...)).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │    POST /register   POST /login                     │
    │    POST /mood       GET  /mood/{userId}             │
    │    GET  /jentries   GET  /jentry/{id}   POST /jlog  │
    │    POST /gemini     GET  /health                    │
    │                                                     │
    │  Exception Handlers:                                │
    │    MoodLogError → exc.status_code + exc envelope    │
    │    RequestValidationError → 400                     │
    │    Exception → 500                                  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, report missing provider keys
    Shutdown: close the shared HTTP client and the document store
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, settings as default_settings
from app.dependencies import Services, build_services
from app.exceptions import (
    AuthenticationError,
    GenerativeTextError,
    MoodLogError,
    NotFoundError,
    RegistrationError,
    StoreError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import accounts, gemini, health, journal, mood

logger = logging.getLogger(__name__)

RESPONSE_ENVELOPE_PATHS = frozenset({"/gemini"})


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    # httpx logs full URLs at INFO, and both API keys travel as ?key=...
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("MoodLog Backend %s starting up...", __version__)

    try:
        config.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health and the store routes still work without keys
        logger.error("Configuration error: %s", str(e))

    logger.info("Document store: %s", config.store_backend)
    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("MoodLog Backend shutting down...")
    await app.state.services.aclose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to the endpoint error envelopes.

        ValidationError          → 400 (never logged as a server error)
        RegistrationError        → 400 {"message", "error"}
        AuthenticationError      → 401 {"message", "error"}
        NotFoundError            → 404 {"message"}
        StoreError               → 500 {"error"} (details logged server-side)
        GenerativeTextError      → 500 {"response"}
        RequestValidationError   → 400 {"error", "details"} ({"response"} on /gemini)
        Exception (fallback)     → 500 {"error"}
    """

    def render(exc: MoodLogError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error on %s: %s", rid, request.url.path, exc.message)
        return render(exc)

    @app.exception_handler(RegistrationError)
    async def handle_registration_error(request: Request, exc: RegistrationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Registration failed: %s", rid, exc.code)
        return render(exc)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Login failed: %s", rid, exc.detail)
        return render(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return render(exc)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return render(exc)

    @app.exception_handler(GenerativeTextError)
    async def handle_generative_text_error(request: Request, exc: GenerativeTextError):
        rid = request_id_var.get("")
        logger.error("[%s] Gemini proxy error | Context: %s", rid, exc.context)
        return render(exc)

    @app.exception_handler(MoodLogError)
    async def handle_app_error(request: Request, exc: MoodLogError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return render(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body is not JSON, or a field has the wrong JSON type."""
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request body on %s", rid, request.url.path)
        # /gemini answers every failure as {"response": ...}
        if request.url.path in RESPONSE_ENVELOPE_PATHS:
            return JSONResponse(status_code=400, content={"response": "Invalid request body"})
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": details},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred. Please try again later."},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    services: Optional[Services] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:   Settings to use (defaults to the environment-loaded singleton)
        services: Pre-built service graph; built from `config` when omitted.
                  Tests pass one wired to an in-memory store and fake providers.
    """
    config = config or default_settings

    app = FastAPI(
        title="MoodLog API",
        description=(
            "Account, mood and journal gateway over Firebase and Firestore, "
            "with a single-turn Google Gemini proxy."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.services = services or build_services(config)

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(accounts.router)
    app.include_router(mood.router)
    app.include_router(journal.router)
    app.include_router(gemini.router)
    app.include_router(health.router)

    return app


app = create_app()
