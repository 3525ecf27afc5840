"""Database Session Manager - async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - A unique-constraint violation surfaces as RequestValidationFailed (400)
    - Connection failures surface as DatabaseError 503, every other SQLAlchemy
      error as DatabaseError 500; driver text is logged, never returned
    - One AsyncSession per request, handed out by the get_db dependency

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Unique violations detected by SQLSTATE 23505 (asyncpg) or the driver text
      (SQLite "UNIQUE constraint failed"); services check duplicates up front,
      this catches the concurrent-insert race
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy import text

from speechkarma.core.errors import DatabaseError, RequestValidationFailed

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"
DUPLICATE_MESSAGE = "A record with these values already exists"


def is_unique_violation(error: IntegrityError) -> bool:
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return "unique" in str(orig).lower()


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            if is_unique_violation(e):
                logger.warning(f"DB unique violation: {e.orig}")
                raise RequestValidationFailed(DUPLICATE_MESSAGE) from e
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("commit") from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("execute", http_status=503) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("query") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (used by the readiness endpoint)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False
        except OSError as e:
            logger.error(f"DB health check failed (network): {e}")
            return False


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
