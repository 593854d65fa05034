"""
RecipeShare Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; the module-level
       `app` is what uvicorn serves (uvicorn recipeshare.main:app).
Who:   Started by `python -m recipeshare`, uvicorn, or the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────────┐ ┌────────────┐ ┌──────┐ ┌──────┐         │
    │  │ Request ID │→│ Access Log │→│ GZip │→│ CORS │         │
    │  └────────────┘ └────────────┘ └──────┘ └──────┘         │
    │                                                          │
    │  Routers (/api):                                         │
    │  recipes · steps & images · likes · users · health       │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ NotFound→404 │ Constraint→409          │
    │  StoreUnavailable→503 │ Database/unexpected→500          │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Check configuration (logged, not fatal)
    3. Build the Database handle and open the pool
       (a failure is logged; requests then fail individually with 503)

    Shutdown:
    1. Refuse new database work, drain in-flight sessions for the grace period
    2. Dispose the pool; a failure marks app.state.shutdown_failed
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipeshare import __version__
from recipeshare.config import Settings, settings as default_settings
from recipeshare.database import Database
from recipeshare.exceptions import RecipeShareError
from recipeshare.middleware.logging import RequestLoggingMiddleware
from recipeshare.middleware.request_id import RequestIDMiddleware, request_id_var
from recipeshare.routes import health, likes, recipes, steps, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Noisy at INFO; SQL echo is driven by Database when LOG_LEVEL=DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the Database handle for the lifetime of the process.

    uvicorn turns SIGINT/SIGTERM into the shutdown half of this context, so
    the pool is drained and closed exactly once however the server stops.
    """
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("RecipeShare Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    app.state.shutdown_failed = False
    app.state.database = None
    try:
        database = Database(settings)
    except Exception:
        logger.exception("Could not create the database engine")
    else:
        app.state.database = database
        try:
            await database.connect()
        except RecipeShareError as e:
            # Keep serving: each request reports 503 until the database is back
            logger.error("Error connecting to the database: %s", e.message)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("RecipeShare Backend shutting down...")
    database = app.state.database
    if database is not None:
        try:
            await database.close(settings.shutdown_grace_period)
        except Exception:
            logger.exception("Error closing the connection pool")
            app.state.shutdown_failed = True

    if app.state.shutdown_failed:
        logger.error("Shutdown finished with errors.")
    else:
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    code: str,
    details: Optional[object] = None,
) -> JSONResponse:
    content = {"error": message, "code": code, "request_id": _request_id(request)}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the `{"error": ...}` envelope.

    Handler hierarchy:
        RecipeShareError and subclasses → exc.status_code (400/404/409/503/500)
        RequestValidationError          → 400 (malformed body, path or query)
        HTTPException                   → its own status (unknown route, 405)
        Exception (fallback)            → 500

    Driver messages and SQL text never reach the response; they are logged.
    """

    @app.exception_handler(RecipeShareError)
    async def handle_recipeshare_error(request: Request, exc: RecipeShareError):
        rid = _request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.code, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, exc.code, exc.message)

        details = exc.context if exc.status_code == 400 else None
        return _error_response(request, exc.status_code, exc.message, exc.code, details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        message = "Invalid request"
        if errors:
            first = errors[0]
            message = f"Invalid request: {'.'.join(first['loc'])}: {first['msg']}"
        logger.warning("[%s] Validation error: %s", _request_id(request), message)
        return _error_response(request, 400, message, "validation_error", {"errors": errors})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        code = "not_found" if exc.status_code == 404 else "http_error"
        return _error_response(request, exc.status_code, str(exc.detail), code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return _error_response(
            request,
            500,
            "An unexpected error occurred. Please try again later.",
            "internal_server_error",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to run with; the process-wide settings by default.
                  Tests pass their own to point the lifespan at a scratch database.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="RecipeShare API",
        description=(
            "Recipe-sharing backend: recipes with ordered steps and images, "
            "likes, users ranked by points, pantries and store locations."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = None
    app.state.shutdown_failed = False

    # Middleware executes in reverse order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # likes before recipes: /recipes/liked must not be shadowed
    app.include_router(likes.router)
    app.include_router(recipes.router)
    app.include_router(steps.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()
