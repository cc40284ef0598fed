"""
Forum API Server

Entry point for the FastAPI application.
"""

from __future__ import annotations

from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from forum_server.api.error_handlers import register_error_handlers
from forum_server.api.v1 import router as api_v1_router
from forum_server.core.config import Settings, get_settings
from forum_server.core.database import create_engine, init_db
from forum_server.core.logging_config import configure_logging
from forum_server.store import TopicStore

log = structlog.get_logger()


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    engine = engine or create_engine(settings)

    app = FastAPI(
        title="Topic Forum",
        description="Topics, posts and gated membership for a community forum.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.topic_store = TopicStore(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.on_event("startup")
    async def on_startup():
        if settings.create_tables:
            await init_db(engine)
        log.info("forum.starting", create_tables=settings.create_tables)

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("forum.shutting_down")
        await engine.dispose()

    return app


def run() -> None:
    """CLI entry point: serve the API with uvicorn."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
