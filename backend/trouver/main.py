"""Trouver API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TrouverError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Settings and the store client are injected into create_app(); the container
      built from them is the only path from routes to persisted state

Design Decisions:
    - Lifespan over @app.on_event: configures logging on startup, disposes the
      connection pool on shutdown
    - Container built eagerly in create_app() (engine creation does not connect), so
      test transports that skip lifespan still get wired services
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trouver.api.error_handlers import register_error_handlers
from trouver.api.routes import health, places, reviews
from trouver.config import Settings, get_settings
from trouver.core.repository_protocols import DocumentStoreClient
from trouver.infrastructure.document_store import SqlDocumentStore
from trouver.infrastructure.observability import setup_logging
from trouver.services.container import build_container

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: DocumentStoreClient | None = None,
) -> FastAPI:
    """Build the API around one store client."""
    settings = settings or get_settings()
    if store is None:
        store = SqlDocumentStore.from_url(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            search_language=settings.search_language,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info(
            f"Trouver API started ({settings.environment}, v{settings.app_version})",
        )
        yield
        if isinstance(store, SqlDocumentStore):
            await store.dispose()
        logger.info("Trouver API shutting down")

    app = FastAPI(
        title="Trouver API", version=settings.app_version, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = build_container(settings, store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(places.router)
    app.include_router(reviews.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings()
    uvicorn.run("trouver.main:app", host=settings.host, port=settings.port)
