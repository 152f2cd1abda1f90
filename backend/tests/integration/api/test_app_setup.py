"""Tests for building the application from settings."""

import pytest
from httpx import ASGITransport, AsyncClient

from f1countdown.config import Settings
from f1countdown.database import init_db
from f1countdown.dependencies import build_services
from f1countdown.main import create_app
from f1countdown.repositories.preferences_repository import PreferencesRepository


@pytest.fixture
def file_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'custom.db'}",
        log_dir=None,
        _env_file=None,
    )


class TestAppSetup:
    """The service graph and request sessions follow the given settings."""

    @pytest.mark.asyncio
    async def test_build_services_uses_configured_database(self, file_settings, fetcher, tmp_path):
        services = build_services(file_settings, fetcher=fetcher)
        try:
            assert services.engine.url.database == str(tmp_path / "custom.db")
            assert services.entitlements.is_pro_user is False

            await init_db(services.engine)
            await services.data_service.fetch_and_cache_races()

            assert await services.store.count_races() == 3
        finally:
            await services.close()

        assert (tmp_path / "custom.db").exists()
        assert fetcher.closed

    @pytest.mark.asyncio
    async def test_lifespan_serves_requests_from_configured_database(
        self, file_settings, tmp_path
    ):
        app = create_app(file_settings)

        async with app.router.lifespan_context(app):
            services = app.state.services
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/preferences")

            assert response.status_code == 200
            assert services.engine.url.database == str(tmp_path / "custom.db")
            async with services.session_factory() as session:
                assert await PreferencesRepository(session).count() == 1

        assert (tmp_path / "custom.db").exists()
