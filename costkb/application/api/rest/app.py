import asyncio
import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from costkb.application.api.v1.errors import map_catalog_error
from costkb.application.api.v1.routes import admin, health, resources, search
from costkb.application.di import create_container
from costkb.config import Config, configure_logging
from costkb.domain.search.port.store import SearchStore
from costkb.domain.shared.error import CatalogError
from costkb.infrastructure.persistence.migrate import run_migrations
from costkb.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.auto_migrate:
        await asyncio.to_thread(run_migrations, config.database.url)

    store = await container.get(SearchStore)
    await store.ensure_text_index()

    yield

    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    config = config or Config()

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s v%s", config.server.name, config.server.version)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_httpx()
    logfire.instrument_fastapi(app_instance)

    container = create_container(config)
    setup_dishka(container, app_instance)

    # Register v1 routes with /api/v1 prefix
    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(search.router, prefix="/api/v1")
    app_instance.include_router(resources.router, prefix="/api/v1")
    app_instance.include_router(admin.router, prefix="/api/v1")

    # Maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        http_exc = map_catalog_error(exc)
        return JSONResponse(status_code=http_exc.status_code, content=http_exc.detail)

    # Logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    return app_instance
