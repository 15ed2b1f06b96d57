"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from statustracker.api.models import ErrorResponse
from statustracker.api.routes import categories, health, issues
from statustracker.config import Settings, load_settings
from statustracker.github import (
    GitHubClient,
    InvalidReferenceError,
    ItemNotFoundError,
    RateLimitedError,
    UpstreamError,
)
from statustracker.logging import get_logger
from statustracker.tracker import InvalidInputError, TrackerService
from statustracker.tracker_store import (
    CategoryExistsError,
    CategoryNotFoundError,
    StoreError,
    TrackedItemExistsError,
    TrackedItemNotFoundError,
    TrackerStore,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    import httpx

logger = get_logger("api")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    store = TrackerStore(settings.db_path)
    client = GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.fetch_timeout,
        transport=app.state.github_transport,
    )
    app.state.tracker_service = TrackerService(
        store=store, client=client, max_workers=settings.max_workers
    )
    logger.info(
        "Tracker ready (db=%s, %d tracked item(s))", settings.db_path, store.count_tracked_items()
    )
    if settings.has_token:
        logger.info("GitHub token configured (higher rate limit active)")
    else:
        logger.info("No GitHub token configured, unauthenticated rate limit applies")

    yield
    # Shutdown
    app.state.tracker_service = None
    client.close()
    store.close()


def create_app(
    settings: Settings | None = None,
    github_transport: httpx.BaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Runtime settings. Read from the environment when omitted.
        github_transport: Custom httpx transport for the GitHub client (testing).
    """
    app = FastAPI(
        title="GitHub Status Tracker API",
        description="Tracks GitHub issues and pull requests by category with live status",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else load_settings()
    app.state.github_transport = github_transport

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(_request: Request, exc: InvalidInputError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(InvalidReferenceError)
    async def invalid_reference_handler(
        _request: Request, exc: InvalidReferenceError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(TrackedItemExistsError)
    async def item_exists_handler(_request: Request, _exc: TrackedItemExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Issue has already been added")

    @app.exception_handler(CategoryExistsError)
    async def category_exists_handler(_request: Request, _exc: CategoryExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Category already exists")

    @app.exception_handler(TrackedItemNotFoundError)
    async def item_not_found_handler(
        _request: Request, _exc: TrackedItemNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Issue not found")

    @app.exception_handler(CategoryNotFoundError)
    async def category_not_found_handler(
        _request: Request, _exc: CategoryNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Category not found")

    @app.exception_handler(ItemNotFoundError)
    async def upstream_not_found_handler(
        _request: Request, exc: ItemNotFoundError
    ) -> JSONResponse:
        logger.warning("Rejected %s/%s#%d: not found on GitHub", exc.owner, exc.repo, exc.number)
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(RateLimitedError)
    async def rate_limited_handler(_request: Request, exc: RateLimitedError) -> JSONResponse:
        logger.warning("GitHub rate limit reached")
        return _error(status.HTTP_429_TOO_MANY_REQUESTS, str(exc))

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(_request: Request, exc: UpstreamError) -> JSONResponse:
        logger.warning("GitHub request failed (status=%s): %s", exc.status_code, exc)
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    # Include routers
    app.include_router(categories.router, prefix="/api")
    app.include_router(issues.router, prefix="/api")
    app.include_router(health.router)

    return app


# Default app instance
app = create_app()
