"""
Idea Box API: Database Session Management
=========================================

What:  Declarative base, the `Database` storage handle (async engine plus
       session factory) and the FastAPI session dependency.
How:   create_app() constructs one Database and stores it on `app.state`.
       The dependency opens one session per request, commits on success
       and rolls back on error.
Who:   Route handlers via Depends(get_db_session); tests construct their own
       Database against in-memory SQLite.
When:  Engine is created with the app; sessions are created per-request.

Connection Pooling:
    Server databases (PostgreSQL) use the configured pool_size/max_overflow.
    SQLite uses SQLAlchemy's default pool for the URL; in-memory URLs must
    pass StaticPool so every session sees the same database.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ideabox.config import Settings
from ideabox.exceptions import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register their tables on Base.metadata, which is used both by
    Database.create_schema() and by Alembic autogenerate.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES / ON DELETE CASCADE unless this is on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Storage handle shared by all requests.

    Wraps an AsyncEngine and its session factory. The engine is safe for
    concurrent use; each request gets its own AsyncSession.

    Example:
        database = Database("sqlite+aiosqlite:///./idea-box.db")
        await database.create_schema()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: response schemas are built from ORM objects
        # after flush/commit without triggering lazy loads
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database from application settings."""
        engine_kwargs: Dict[str, Any] = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )
        return cls(settings.database_url, **engine_kwargs)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Transactional session scope.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller (the caller performs queries)
            3. On success: commits the transaction
            4. On error: rolls back and re-raises
            5. Always: closes the session on leaving `async with`

        Raises:
            StorageError: COMMIT failed (e.g. SQLite "database is locked");
                          the transaction is rolled back first.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Commit failed: %s", str(e), exc_info=True)
                raise StorageError(
                    message="could not save changes",
                    context={"error_type": type(e).__name__},
                ) from e

    async def create_schema(self) -> None:
        """Create the boxes and ideas tables if they do not exist."""
        # Registers Box and Idea on Base.metadata
        import ideabox.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def ping(self) -> bool:
        """Run SELECT 1; True when the database answers."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Gracefully close all connections in the pool."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    What:    Opens a transactional session on the app's Database.
    Who:     Injected into route handlers via FastAPI's Depends() system.

    Example usage in a route:
        @router.get("/boxes")
        async def list_boxes(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Exceptions from the handler propagate (after rollback) to the
        global error handlers.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def get_database(request: Request) -> Optional[Database]:
    """FastAPI dependency returning the app's storage handle."""
    return getattr(request.app.state, "database", None)
