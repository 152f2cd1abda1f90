"""Shared fixtures for API integration tests."""

import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from f1countdown.dependencies import Services, build_services
from f1countdown.main import create_app


@pytest.fixture
def services(settings, db_engine, session_factory, fetcher, clock) -> Services:
    """Service graph wired to the in-memory database and a fake fetcher."""
    return build_services(
        settings,
        engine=db_engine,
        session_factory=session_factory,
        fetcher=fetcher,
        clock=clock,
    )


@pytest.fixture
def app(settings, services):
    return create_app(settings, services)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def synced(services):
    """Current season already fetched and cached."""
    return await services.data_service.fetch_and_cache_races()
