"""Application configuration and router setup."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import fastapi
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi

from components.core import init_db
from components.core.config import get_settings
from components.core.database import DatabaseManager
from components.core.factory import register_default_services
from components.core.logger import configure_logging
from restapi.endpoints import health_check, templates, planners

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create the store on startup and release its connections on shutdown."""
    await app.state.db_manager.create_schema()
    logger.info("Store ready at %s", app.state.db_manager.url)
    yield
    await app.state.db_manager.dispose()


def create_app(db_manager: Optional[DatabaseManager] = None) -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings)
    register_default_services()

    app = fastapi.FastAPI(
        title=settings.SERVICE_NAME,
        description="Monthly cash-flow planner",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Initialize database
    init_db.init_db(app, db_manager)

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_check.router)
    app.include_router(templates.router)
    app.include_router(planners.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=settings.SERVICE_NAME,
            version="1.0.0",
            description="Monthly cash-flow planner",
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
