"""
FastAPI application for the Movie Lobby API.

Public read access to the movie catalog; create, update and delete
are restricted to admin bearer tokens.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.exceptions import (
    APIError,
    api_error_handler,
    generic_exception_handler,
    http_exception_handler,
    request_validation_handler,
)
from api.routers import movies
from api.schemas.common import HealthResponse
from movie_lobby.config import Config
from movie_lobby.database import MovieStore
from movie_lobby.logging_config import generate_request_id, set_request_id, setup_logger

logger = logging.getLogger("api")

# Paths skipped by request logging
SKIP_LOG_PATHS = {"/health", "/", "/api/docs", "/api/redoc", "/api/openapi.json"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the database before the server accepts requests.

    A store handed to create_app is used as-is; otherwise one is built
    from the config and pinged. Any failure here aborts startup.
    """
    if app.state.config is None:
        app.state.config = Config.from_env()
    config = app.state.config
    setup_logger("api", config.log_dir)

    owns_store = app.state.store is None
    if owns_store:
        logger.info(f"Connecting to MongoDB at {config.redacted_uri()}")
        store = MovieStore.from_config(config)
        try:
            await store.ping()
        except Exception:
            store.close()
            logger.error("MongoDB connection failed, aborting startup")
            raise
        app.state.store = store
        logger.info("MongoDB connected successfully")

    yield

    if owns_store:
        app.state.store.close()
        app.state.store = None


def create_app(config: Optional[Config] = None, store: Optional[MovieStore] = None) -> FastAPI:
    """
    Build the Movie Lobby application.

    Args:
        config: Settings to use; loaded from the environment at startup if omitted.
        store: Movie store to use; opened from the config at startup if omitted.
    """
    app = FastAPI(
        title="Movie Lobby API",
        description="REST API for browsing and curating the movie lobby",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = (config.allowed_origins if config else None) or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allowed_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log all HTTP requests with timing and response status."""
        request_id = generate_request_id()
        set_request_id(request_id)

        if request.url.path in SKIP_LOG_PATHS:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            f"Request started: {request.method} {request.url.path} "
            f"from {client_ip}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"duration={duration_ms:.2f}ms error={str(e)}"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_msg = (
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration_ms:.2f}ms"
        )
        if response.status_code >= 500:
            logger.error(log_msg)
        elif response.status_code >= 400:
            logger.warning(log_msg)
        else:
            logger.info(log_msg)

        # Add request ID to response headers for debugging
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(movies.router, prefix="/api", tags=["Movies"])

    @app.get("/", include_in_schema=False)
    async def root():
        """Service banner."""
        return {
            "message": "Movie Lobby API",
            "docs": "/api/docs",
        }

    @app.get("/health", response_model=HealthResponse, include_in_schema=False)
    async def health():
        """Simple health check endpoint."""
        return HealthResponse()

    return app


app = create_app()
