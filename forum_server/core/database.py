"""
Database engine construction and schema bootstrap.

The engine is created by the application factory and handed to the stores;
nothing here holds a module-level connection.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

from forum_server.core.config import Settings
from forum_server import models  # noqa: F401  (populates SQLModel.metadata)


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables (development only; use migrations in production)."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
