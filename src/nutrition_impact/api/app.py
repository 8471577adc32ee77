"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from nutrition_impact.api.catalog import router as catalog_router
from nutrition_impact.api.errors import register_exception_handlers
from nutrition_impact.api.profile import router as profile_router
from nutrition_impact.api.reports import router as reports_router
from nutrition_impact.api.resources import router as resources_router
from nutrition_impact.app_logging import configure_logging
from nutrition_impact.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    register_exception_handlers(app)

    app.include_router(profile_router)
    app.include_router(catalog_router)
    app.include_router(reports_router)
    app.include_router(resources_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
