"""
FlyBook Backend: Database Connection Management
=================================================

What:  Lazily connected async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   A single `Database` instance owns the engine. The first caller of
       `connect()` builds the engine, pings the server and memoises the
       result; every later caller reuses it.
Who:   Used by route handlers via FastAPI's dependency injection system,
       by the health check, and by the seeder CLI.
When:  Engine is created on first use; sessions are created per-request.

Initialization:
    connect() is guarded by an asyncio.Lock with a double-checked fast path:

        caller A ─┐                    ┌─ create engine, SELECT 1, memoise
                  ├─▶ lock ─▶ engine? ─┤
        caller B ─┘   (waits)          └─ already set → return it

    Concurrent first callers suspend on the lock; only one builds the engine.
    If the ping fails the handle stays unset and the error propagates, so a
    later request can try again.

Connection Pooling Strategy (PostgreSQL):
    pool_size:        Persistent connections for normal load
    max_overflow:     Temporary connections for traffic spikes
    pool_pre_ping:    Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

import asyncio
import logging
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from flybook.config import settings
from flybook.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic reads for
    migrations and `create_all()` uses in development and tests.
    """
    pass


class Database:
    """
    Owner of the process-wide engine and session factory.

    Attributes:
        url:  Async SQLAlchemy URL the engine connects to
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; await connect() first")
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        options = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            "echo": settings.log_level == "DEBUG",
        }
        if not self.url.startswith("sqlite"):
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )
        return create_async_engine(self.url, **options)

    async def connect(self) -> AsyncEngine:
        """
        Return the memoised engine, establishing it on first call.

        Raises:
            Whatever the driver raises when the server is unreachable. The
            handle is left unset in that case.
        """
        if self._engine is not None:
            return self._engine

        async with self._lock:
            if self._engine is not None:
                return self._engine

            engine = self._create_engine()
            try:
                async with engine.begin() as conn:
                    await conn.execute(text("SELECT 1"))
                    if settings.db_create_tables:
                        # Import models so they register with Base.metadata
                        import flybook.models  # noqa: F401
                        await conn.run_sync(Base.metadata.create_all)
            except Exception:
                await engine.dispose()
                raise

            self._session_factory = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
            self._engine = engine
            logger.info("Database connected")
            return engine

    async def session_factory(self) -> async_sessionmaker[AsyncSession]:
        await self.connect()
        return self._session_factory

    async def dispose(self) -> None:
        """
        Close all pooled connections and forget the engine.

        The next connect() builds a fresh one. A new lock is created as well,
        since asyncio primitives bind to the loop they first wait on.
        """
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database connections closed")
        self._engine = None
        self._session_factory = None
        self._lock = asyncio.Lock()


# Process-wide handle
database = Database()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Waits for the shared engine (connecting on first use)
        2. Yields a fresh session to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/flights")
        async def list_flights(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        DatabaseError when the engine cannot be established.
    """
    try:
        factory = await database.session_factory()
    except Exception as e:
        logger.error("Database connection failed: %s", str(e))
        raise DatabaseError(
            message="The database is unavailable. Please try again later.",
            context={"error_type": type(e).__name__},
        )

    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (application shutdown)."""
    await database.dispose()
