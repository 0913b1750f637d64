"""
Database session configuration.

This module owns the process-scoped connection pool. The engine is built
explicitly by ``Database.connect()`` and released by ``Database.disconnect()``
so that the application lifespan (and the test suite) control its lifetime.
"""

from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from estate_ledger.app.core.config import settings

# Create declarative base for models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Holder for the async engine and its session factory.

    One instance lives for the whole process; tests build their own
    instance against an isolated store.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ):
        self.url = url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._session_factory

    def connect(self) -> AsyncEngine:
        """Create the engine and session factory (idempotent)."""
        if self.engine is not None:
            return self.engine

        engine_kwargs = {"echo": self.echo, "future": True}
        if not self.is_sqlite:
            engine_kwargs["pool_size"] = self.pool_size
            engine_kwargs["max_overflow"] = self.max_overflow
            engine_kwargs["pool_pre_ping"] = True

        self.engine = create_async_engine(self.url, **engine_kwargs)

        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        return self.engine

    async def create_all(self) -> None:
        """Create all tables registered on ``Base``."""
        # Registers the models on Base.metadata
        from estate_ledger.app.models import ledger_entry, payee  # noqa: F401

        async with self.connect().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def disconnect(self) -> None:
        """Dispose the connection pool."""
        if self.engine is not None:
            await self.engine.dispose()
        self.engine = None
        self._session_factory = None


database = Database(
    settings.database_url,
    echo=settings.db_echo,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)


async def get_session_factory() -> async_sessionmaker:
    """
    FastAPI dependency for the unit-of-work factory.

    Services that run their own transactions (the payment coordinator)
    receive the factory rather than a live session.
    """
    return database.session_factory


async def get_db():
    """
    FastAPI dependency for database sessions.
    
    Yields an async database session and ensures it's properly closed.
    """
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
