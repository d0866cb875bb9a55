"""FastAPI application entry point.

Feuerwehr Website - bilingual fire brigade site with a content backend.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from feuerwehr.routes import api_router, site_router
from feuerwehr.routes.errors import INTERNAL_ERROR, VALIDATION_ERROR, error_response
from feuerwehr.services.cms_globals import ensure_globals
from feuerwehr.services.repository import get_repository
from feuerwehr.settings import get_settings
from feuerwehr.stores.postgres import init_db, close_db, ping_db
from feuerwehr.stores.redis import init_redis, close_redis

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Initialize database (skip in tests if no DB available)
    try:
        await init_db()
        await ping_db()
        logger.info("Postgres connected")
        await ensure_globals(get_repository())
    except Exception:
        logger.exception("Postgres init failed")

    # Initialize Redis (skip in tests if no Redis available)
    try:
        await init_redis()
    except Exception:
        logger.exception("Redis init failed")
        # Leave the cache disabled rather than half-connected
        await close_redis()

    yield

    # Shutdown
    await close_redis()
    await close_db()


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to {"loc", "msg"} pairs."""
    return [
        {"loc": ".".join(str(part) for part in error.get("loc", ())), "msg": str(error.get("msg", ""))}
        for error in exc.errors()
    ]


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Volunteer fire brigade website and content API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Malformed request bodies use the same envelope as service validation errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            400,
            VALIDATION_ERROR,
            "Invalid request",
            detail={"errors": jsonable_errors(exc)},
        )

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            500,
            INTERNAL_ERROR,
            str(exc) or "Internal server error",
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    # Uploaded media served locally when no object storage is used
    if settings.media_dir and Path(settings.media_dir).is_dir():
        app.mount(settings.media_url_prefix, StaticFiles(directory=settings.media_dir), name="media")

    # Pages last: they contain the /{category} catch-alls
    app.include_router(site_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "feuerwehr.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
