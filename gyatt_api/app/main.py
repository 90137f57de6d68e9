"""
Main entrypoint for the GYATT PPL API.

This module assembles the FastAPI application, sets up logging,
installs the error handlers and includes the API router under
``/api``.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``.
Importing the app here makes it easy to run with uvicorn or another
ASGI server, e.g.::

    uvicorn gyatt_api.app.main:app --reload

Tests build their own instance with ``create_app(settings)`` and a
memory-backed store.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings
from .core.errors import AppError
from .core.logging_config import setup_logging
from .core.store import RecordStore, build_store
from .services.user_service import UserService

logger = logging.getLogger(__name__)


def _operation_name(request: Request) -> str:
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", request.url.path)


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to a JSON ``{"error": message}`` body."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s failed: %s", _operation_name(request), exc.message, exc_info=exc)
            return JSONResponse(status_code=exc.status_code, content={"error": "Server error"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s failed", _operation_name(request), exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Server error"})


def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration; read from the environment when omitted.
    store : Optional[RecordStore]
        Record store; built from ``settings`` when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  On startup it
        prepares the storage backend and creates the first
        administrator if the user store is empty.
    """
    settings = settings or Settings()
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file)
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # An unusable data directory is fatal; let the error stop startup.
        store.backend.ensure_ready()
        await UserService(store, settings).ensure_admin()
        logger.info(
            "%s %s started (storage: %s)",
            settings.project_name,
            settings.api_version,
            getattr(store.backend, "data_dir", "memory"),
        )
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")

    # Serve the static frontend last so it never shadows an API route.
    if settings.frontend_dir:
        frontend = Path(settings.frontend_dir)
        if frontend.is_dir():
            app.mount("/", StaticFiles(directory=str(frontend), html=True), name="frontend")
        else:
            logger.warning("FRONTEND_DIR %s is not a directory; static files disabled", frontend)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
