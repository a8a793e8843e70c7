"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown: logging setup, the shared
identity service client, and the database engine.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dietracker import __version__
from dietracker.api import api_router
from dietracker.clients.identity import IdentityClient
from dietracker.config import settings
from dietracker.logging_config import configure_logging
from dietracker.middleware.request_log import RequestLoggingMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    configure_logging(settings.environment)
    logger.info(
        "dietracker.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    app.state.identity = IdentityClient(
        settings.identity_url,
        settings.app_id,
        timeout=settings.identity_timeout_seconds,
        retries=settings.identity_retries_count,
    )
    logger.info("dietracker.identity_client_ready", url=settings.identity_url)

    yield

    logger.info("dietracker.shutdown")
    await app.state.identity.aclose()

    from dietracker.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Simple Diet Tracker",
        description="Daily calorie tracking backed by an external identity service",
        version=__version__,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse order of registration:
    # RequestLogging → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router)
    return app


# Default app instance (used by uvicorn: dietracker.main:app)
app = create_app()
