"""
Idea Box API: FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires settings, the Database storage handle, middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn ideabox.main:app`), the `ideabox` console script,
       and tests (which pass their own Database).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │                                                      │
    │  Middleware:  Request ID → Access Log → CORS         │
    │                                                      │
    │  Routes:                                             │
    │  ┌──────────────┐ ┌────────────────────┐ ┌─────────┐ │
    │  │ /boxes       │ │ /boxes/{id}/ideas  │ │ /health │ │
    │  └──────────────┘ └────────────────────┘ └─────────┘ │
    │                                                      │
    │  Exception Handlers:                                 │
    │  ValidationError→400 │ NotFound→404 │ Storage→400    │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging → create schema (AUTO_CREATE_SCHEMA) → ready
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ideabox import __version__
from ideabox.config import Settings, settings as default_settings
from ideabox.database import Database
from ideabox.exceptions import NotFoundError, StorageError, ValidationError
from ideabox.middleware.logging import RequestLoggingMiddleware
from ideabox.middleware.request_id import RequestIDMiddleware, request_id_var
from ideabox.routes import boxes, health, ideas

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container log collectors read it from there)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Create the boxes/ideas tables (unless AUTO_CREATE_SCHEMA=false)
        3. Log ready

    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(settings)
    logger.info("Idea Box API %s starting up...", __version__)

    if settings.auto_create_schema:
        await database.create_schema()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Idea Box API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _request_id(request: Request) -> str:
    # The catch-all handler runs after RequestIDMiddleware has reset the ContextVar
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _to_validation_error(exc: RequestValidationError) -> ValidationError:
    """
    Flatten pydantic errors into one ValidationError.

    e.g. [{"loc": ("body", "title"), "msg": "Field required"}] → "title: Field required"
    """
    parts = []
    fields = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc)
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
        if field:
            fields.append(field)
    return ValidationError(
        message="; ".join(parts) or "invalid request",
        field=fields[0] if fields else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and `{"error": message}` bodies.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → ValidationError → 400 (pydantic body/path errors)
        NotFoundError           → 404 Not Found
        StorageError            → 400 Bad Request
        HTTPException           → its own status (unknown route, wrong method)
        Exception (fallback)    → 500 Internal Server Error
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "[%s] Validation error on %s: %s", _request_id(request), request.url.path, exc.message
        )
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return await handle_validation_error(request, _to_validation_error(exc))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error("[%s] Storage error: %s | Context: %s", _request_id(request), exc.message, exc.context)
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail).lower(), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded settings.
        database: Storage handle; defaults to Database.from_settings(settings).
                  Tests pass an in-memory SQLite Database here.

    Returns:
        Configured FastAPI instance. The storage handle is available to
        handlers as `request.app.state.database`.
    """
    settings = settings or default_settings
    database = database or Database.from_settings(settings)

    app = FastAPI(
        title="Idea Box API",
        description="Boxes of ideas: a two-level note-taking API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(boxes.router)
    app.include_router(ideas.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    import uvicorn

    uvicorn.run(
        "ideabox.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
