"""
Database Infrastructure
=======================

Manages the process-wide async engine, session lifecycle, and the
connectivity probe.

Uses SQLAlchemy 2.0 async. The dialect comes from configuration: Azure SQL
through aioodbc in production, SQLite through aiosqlite in tests.
"""

from contextlib import contextmanager
from typing import Any, AsyncGenerator, Iterator

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.config import settings
from src.core import RepositoryException


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    The tables already exist in the production database; models only
    describe the columns this service reads and writes.
    """
    pass


# Global engine and session maker
_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """
    Get the database engine.

    Raises:
        RuntimeError: If engine has not been initialized
    """
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call init_database() first.")
    return _engine


def init_database() -> AsyncEngine:
    """
    Initialize the database engine and session maker.

    Should be called during application startup. No connection is opened
    until the first query.
    """
    global _engine, _session_maker

    if _engine is not None:
        return _engine

    _engine = create_async_engine(
        settings.sqlalchemy_url(),
        echo=settings.debug,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_timeout_seconds,
        pool_pre_ping=True,
    )

    _session_maker = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    return _engine


async def close_database() -> None:
    """
    Close the database engine and dispose of connections.

    Should be called during application shutdown.
    """
    global _engine, _session_maker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_maker = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async generator for database sessions.

    For use with FastAPI's Depends(). Repositories commit their own writes;
    anything left open is rolled back when the request ends.
    """
    if _session_maker is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    async with _session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


async def fetch_server_time(session: AsyncSession) -> Any:
    """Ask the database for its current timestamp (connectivity probe)."""
    result = await session.execute(select(func.now().label("fecha")))
    return result.scalar_one()


async def create_tables() -> None:
    """
    Create all database tables.

    Only for development and tests; production tables are managed outside
    this service.
    """
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """
    Translate driver and SQLAlchemy failures into RepositoryException.

    Usage inside a repository method:
        with store_errors("list tickets"):
            result = await self._session.execute(stmt)
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        raise RepositoryException(f"{operation} failed: {e}") from e
