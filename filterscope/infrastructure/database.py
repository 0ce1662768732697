"""Database Session Manager — async engine, read-only sessions, error translation.

Invariants:
    - Filter queries are reads: every session is rolled back on exit, never committed
    - A failed rollback is logged, never raised over the error that caused it
    - SQLAlchemy exceptions leave this module as DatabaseError (core/errors.py)
    - SQLite URLs get no pool sizing (SQLite pools reject pool_size/max_overflow)

Design Decisions:
    - Singleton db_manager assigned by the FastAPI lifespan, never at import
    - expire_on_commit=False: returned rows stay readable after the session closes
    - Exception translation is an ordered table, most specific class first
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from filterscope.core.errors import DatabaseError

logger = logging.getLogger(__name__)


_TRANSLATIONS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def translate_error(error: SQLAlchemyError) -> DatabaseError:
    for error_type, message, operation in _TRANSLATIONS:
        if isinstance(error, error_type):
            return DatabaseError(message, operation)
    return DatabaseError(str(error), "unknown")


async def _discard(session: AsyncSession) -> None:
    """Roll back and close; a failure here never masks the query's own error."""
    try:
        await session.rollback()
    except SQLAlchemyError as e:
        logger.warning(f"Rollback failed on a discarded session: {e}")
    finally:
        await session.close()


def engine_options(
    database_url: str, pool_size: int, max_overflow: int,
) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine; hands out sessions that never commit."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"{type(e).__name__} during filter query: {e}")
            raise translate_error(e) from e
        finally:
            await _discard(session)

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
    db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one read session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
