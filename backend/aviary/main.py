"""
Aviary Backend: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn aviary.main:app).

Application Architecture:
    Middleware Chain:   Request ID → Logging → GZip → CORS
    Routes:             POST /birds, GET /birds, GET /birds/{id}, GET /health
    Exception Handlers:
        malformed JSON → 400 │ schema errors → 422 │ AviaryError → its status_code
        anything else  → 500

Lifecycle:
    Startup:  configure logging, log the effective settings
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from aviary import __version__
from aviary.config import settings
from aviary.database import dispose_engine
from aviary.exceptions import AviaryError, PersistenceError
from aviary.middleware.logging import RequestLoggingMiddleware
from aviary.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from aviary.routes import birds, health
from aviary.schemas.bird import ErrorResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When: Called once during app startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # These libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Code before yield runs on startup, code after yield on shutdown."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Aviary Backend %s starting up...", __version__)

    required = settings.required_bird_fields_list
    logger.info("Required bird fields: %s", ", ".join(required) if required else "none")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Aviary Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).to_content(),
    )


def _summarize_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keeps loc/msg/type of each validation error; raw input values are not echoed."""
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in errors
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError (json_invalid) → 400 Bad Request
        RequestValidationError (other)        → 422 Unprocessable Entity
        PersistenceError                      → its status_code, generic message for 500s
        AviaryError (base)                    → its status_code
        Exception (fallback)                  → 500 Internal Server Error

    Exception handlers never expose stack traces, driver messages or SQL
    in the response. Details are logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body could not be decoded, or decoded into the wrong shape."""
        rid = request_id_var.get("")
        errors = _summarize_errors(exc.errors())

        if any(err["type"] == "json_invalid" for err in errors):
            logger.warning("[%s] Malformed JSON body on %s %s", rid, request.method, request.url.path)
            return _error_response(400, "Malformed JSON in request body", {"errors": errors})

        logger.warning("[%s] Request validation failed: %s", rid, errors)
        return _error_response(422, "Invalid request", {"errors": errors})

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        """Storage failure: generic message to the client, context logged."""
        rid = request_id_var.get("")
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        if exc.status_code >= 500:
            return _error_response(exc.status_code, "An internal error occurred. Please try again later.")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(AviaryError)
    async def handle_aviary_error(request: Request, exc: AviaryError):
        """Application errors carry their own status code and a client-safe message."""
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return _error_response(exc.status_code, exc.message)

        logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        # Not-found bodies carry only the message
        details = None if exc.status_code == 404 else (exc.context or None)
        return _error_response(exc.status_code, exc.message, details)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors. Stack trace is logged, never returned.

        Starlette runs this handler in ServerErrorMiddleware, outside
        RequestIDMiddleware, so the X-Request-ID header is set here from
        request.state. Starlette re-raises the exception after sending the
        response so the server can log it too.
        """
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        response = _error_response(500, "An unexpected error occurred. Please try again later.")
        if rid:
            response.headers[REQUEST_ID_HEADER] = rid
        return response


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Aviary API",
        description="JSON API for recording birds by common name and species.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the request ID is set
    # first so the logging middleware can include it.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(birds.router)
    app.include_router(health.router)

    return app


# uvicorn expects `aviary.main:app` to be importable
app = create_app()
