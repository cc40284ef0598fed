"""
Unit-of-work plumbing shared by the stores.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from forum_server.core.errors import DatabaseError

log = structlog.get_logger()

# Dialects with INSERT ... ON CONFLICT DO NOTHING ... RETURNING
_CONFLICT_TOLERANT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseStore:
    """Owns a session factory bound to one engine; every public call is one transaction."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)
        try:
            self._insert_factory = _CONFLICT_TOLERANT_INSERTS[engine.dialect.name]
        except KeyError:
            raise ValueError(f"Unsupported database dialect '{engine.dialect.name}'")

    def insert(self, model):
        """Dialect insert construct supporting on_conflict_do_nothing()."""
        return self._insert_factory(model)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Commit on success, roll back on any exception.

        Store failures surface as DatabaseError; other exceptions propagate
        unchanged after the rollback.
        """
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except SQLAlchemyError as exc:
                log.error("store.transaction_failed", error=str(exc))
                raise DatabaseError("Database operation failed") from exc
