"""Shared test fixtures."""

import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from f1countdown.config import Settings
from f1countdown.database import Base, create_session_factory
from f1countdown.repositories import RaceStore
from f1countdown.schemas import Race
from f1countdown.services import DataService

from tests.fixtures.factories import (
    FIXED_NOW,
    FakeClock,
    FakeFetcher,
    create_bahrain_2024_data,
    create_season,
)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment."""
    return Settings(
        database_url="sqlite:///:memory:",
        log_dir=None,
        _env_file=None,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
async def db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create async session with transaction rollback."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def store(session_factory) -> RaceStore:
    return RaceStore(session_factory)


@pytest.fixture
def bahrain() -> Race:
    """Bahrain Grand Prix 2024, round 1, 2024-03-02 15:00 UTC."""
    return Race.model_validate(create_bahrain_2024_data())


@pytest.fixture
def season_2024() -> list[Race]:
    return create_season("2024")


@pytest.fixture
def fetcher(season_2024) -> FakeFetcher:
    return FakeFetcher(season_2024)


@pytest.fixture
def data_service(store, fetcher, settings, clock) -> DataService:
    return DataService(store, fetcher, settings, clock)
