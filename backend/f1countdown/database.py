"""Database connection and session management."""

from collections.abc import AsyncGenerator
from pathlib import Path

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def to_async_url(database_url: str) -> str:
    """Convert sqlite:// to sqlite+aiosqlite:// for async."""
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


def _ensure_sqlite_dir(engine: AsyncEngine) -> None:
    if engine.url.get_backend_name() != "sqlite":
        return
    path = engine.url.database
    if path and path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)


def create_engine_for(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for a sync-style database URL."""
    return create_async_engine(
        to_async_url(database_url),
        echo=echo,
        future=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database session."""
    session_factory = request.app.state.services.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables."""
    # Register every table on Base.metadata
    import f1countdown.models  # noqa: F401

    _ensure_sqlite_dir(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
