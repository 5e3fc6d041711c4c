"""ASGI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI

from skylogin.interface.api.routes import health, oauth_metadata
from skylogin.interface.error import register_error_handlers
from skylogin.persistence.storage import StorageContext
from skylogin.util.di.container import create_container, setup_di
from skylogin.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize storage before serving and close the container on shutdown.

    Resolving StorageContext connects the backend, so an unreachable Redis
    stops the application here instead of failing the first request.
    """
    container: AsyncContainer = app.state.dishka_container
    await container.get(StorageContext)
    try:
        yield
    finally:
        await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the app around a DI container.

    uvicorn calls this with no arguments (see scripts/start_app.py, which
    configures Logfire beforehand); tests pass a test container.

    Args:
        container: DI container to use; defaults to the production container
    """
    app_instance = FastAPI(
        title="skylogin",
        description="AT Protocol OAuth login demo backend",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(oauth_metadata.router)  # client-metadata.json (no prefix)

    return app_instance
