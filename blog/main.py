"""FastAPI application entry point.

Redis Blog - list, view and create posts stored in Redis.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from blog.errors import StorageError
from blog.routes import api_router
from blog.schemas import ErrorResponse
from blog.settings import get_settings
from blog.stores.redis import StoreClient

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the one StoreClient (and its pool) the process uses.
    """
    # Startup
    settings = get_settings()
    store = StoreClient.from_url(
        settings.redis_url,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
    )
    app.state.store = store

    # Validate connectivity early; requests still fail individually if Redis is down.
    try:
        await store.ping()
        logger.info("Redis connected")
    except StorageError:
        logger.exception("Redis init failed")

    yield

    # Shutdown
    await store.close()
    app.state.store = None


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Minimal blog backed by Redis",
        lifespan=lifespan,
    )

    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
        """Storage failures become a generic server error."""
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        payload = ErrorResponse.build(
            code="STORAGE_ERROR",
            message=str(exc) if settings.debug else "Internal server error",
        )
        return JSONResponse(status_code=500, content=payload.model_dump())

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        payload = ErrorResponse.build(
            code="INTERNAL_ERROR",
            message=str(exc) if settings.debug else "Internal server error",
        )
        return JSONResponse(status_code=500, content=payload.model_dump())

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check(request: Request) -> dict[str, bool]:
        """Health check endpoint; reports Redis reachability."""
        store: StoreClient | None = getattr(request.app.state, "store", None)
        redis_ok = False
        if store is not None:
            try:
                redis_ok = await store.ping()
            except StorageError:
                redis_ok = False
        return {"ok": True, "redis": redis_ok}

    # Include blog routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "blog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
