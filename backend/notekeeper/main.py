"""
NoteKeeper Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       the lifespan owns the process-wide StorageClient.
Who:   uvicorn (uvicorn notekeeper.main:app, or python -m notekeeper).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Req ID → Logging → GZip → CORS        │
    │                                                     │
    │  Routes:      /notes (CRUD)        /health          │
    │                                                     │
    │  app.state.storage: one StorageClient per process   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Check configuration (logged, not fatal)
    3. Build the StorageClient unless one was injected
    4. Create missing tables (DB_CREATE_TABLES)

    Shutdown:
    1. Dispose the StorageClient's pool if the lifespan built it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from notekeeper import __version__
from notekeeper.config import settings
from notekeeper.exceptions import InternalError, NoteKeeperError, ValidationError
from notekeeper.middleware.logging import RequestLoggingMiddleware
from notekeeper.middleware.request_id import RequestIDMiddleware, request_id_var
from notekeeper.responses import error_response
from notekeeper.routes import health, notes
from notekeeper.storage import StorageClient

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container runtimes collect it)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

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
    Startup and shutdown for one application instance.

    The StorageClient is created here exactly once and kept on app.state.
    A client injected through create_app(storage=...) is used as-is and
    left for its owner to dispose.
    """
    setup_logging()
    logger.info("NoteKeeper Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.warning("Configuration warning: %s", str(e))

    owns_storage = getattr(app.state, "storage", None) is None
    if owns_storage:
        app.state.storage = StorageClient.from_settings(settings)
    storage: StorageClient = app.state.storage

    if settings.db_create_tables:
        try:
            await storage.create_tables()
        except Exception as e:
            # Keep serving: /health reports the database as disconnected
            logger.error("Could not create tables: %s", str(e), exc_info=True)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("NoteKeeper Backend shutting down...")
    if owns_storage:
        await storage.dispose()
        app.state.storage = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Render errors that escape the route layer.

    Handlers return outcomes rather than raising, so these only see:
        RequestValidationError → 400 (malformed JSON, wrongly typed fields)
        NoteKeeperError        → its own status code
        Exception (fallback)   → 500, stack trace logged server-side only
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return error_response(
            ValidationError(message="Request body is malformed", context={"errors": errors})
        )

    @app.exception_handler(NoteKeeperError)
    async def handle_app_error(request: Request, exc: NoteKeeperError):
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True
        )
        return error_response(InternalError())


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(storage: Optional[StorageClient] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        storage: Pre-built StorageClient. Tests pass one bound to a scratch
                 database; production leaves it None and the lifespan
                 builds one from settings.
    """
    app = FastAPI(
        title="NoteKeeper API",
        description="Persistent storage for titled text and HTML notes.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.storage = storage

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
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

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `notekeeper.main:app` to be importable
app = create_app()
