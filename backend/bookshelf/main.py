"""
Bookshelf API - FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       the lifespan sets up logging and owns the database engine.
Who:   uvicorn (uvicorn bookshelf.main:app) and the test suite.

Lifecycle:
    Startup:
    1. Configure logging
    2. Create tables when CREATE_TABLES_ON_STARTUP is set
    3. Log startup complete

    Shutdown:
    1. Dispose the database engine
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf import __version__
from bookshelf.config import settings
from bookshelf.database import create_tables, dispose_engine
from bookshelf.middleware.logging import RequestLoggingMiddleware
from bookshelf.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from bookshelf.results import UNEXPECTED_MESSAGE
from bookshelf.routes import books, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] bookshelf.services.book_service: Book 1 created
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Bookshelf API %s starting up...", __version__)

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Bookshelf API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_validation_messages(exc: RequestValidationError) -> List[str]:
    """
    Turn FastAPI's error list into envelope messages.

    Example: {"loc": ("path", "book_id"), "msg": "Input should be a valid integer"}
             → "book_id: Input should be a valid integer"
    """
    result = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        name = ".".join(loc)
        message = error.get("msg", "Invalid request")
        result.append(f"{name}: {message}" if name else message)
    return result


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the handlers for errors that escape a route.

    Handler hierarchy:
        RequestValidationError → 400 envelope (bad path parameter, malformed JSON)
        HTTPException          → envelope with the framework's status and detail
                                 (undecodable body, unknown route, wrong method)
        Exception (fallback)   → 500 envelope "Something went wrong!"

    Domain outcomes (not found, duplicate) never reach these handlers; the
    book routes map them from service results.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        msgs = _request_validation_messages(exc)
        logger.warning("Request validation failed on %s: %s", request.url.path, msgs)
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": msgs},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "HTTP %d on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": UNEXPECTED_MESSAGE},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into a new app."""
    app = FastAPI(
        title="Bookshelf API",
        description="CRUD service for book records with validated input and a uniform JSON envelope.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(books.router)

    return app


app = create_app()
