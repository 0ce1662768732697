"""filterscope API — FastAPI application entry point.

Invariants:
    - Routers and error handlers registered explicitly in create_app()
    - CORS origins come from settings; the API is read-only (GET)
    - The database engine lives exactly as long as the lifespan
    - Resources are registered by the embedding application on resource_registry

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - create_app() factory, module-level app for ASGI servers
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from filterscope.api.error_handlers import register_error_handlers
from filterscope.api.routes import health, resources
from filterscope.config import Settings, get_settings
from filterscope.infrastructure.database import close_db, init_db
from filterscope.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("filterscope API ready")
    try:
        yield
    finally:
        await close_db()
        logger.info("filterscope API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(title="filterscope API", version="0.1.0", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    application.include_router(health.router)
    application.include_router(resources.router)
    register_error_handlers(application)
    return application


app = create_app()
