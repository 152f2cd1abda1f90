"""Service graph and FastAPI dependencies."""

from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from f1countdown.config import Settings, get_settings
from f1countdown.database import create_engine_for, create_session_factory, get_db
from f1countdown.fetchers import DataFetcher, JolpicaFetcher
from f1countdown.repositories import RaceStore
from f1countdown.services import (
    DataService,
    EntitlementService,
    InMemoryActivitySink,
    InMemoryNotificationSink,
    LiveActivityService,
    NotificationService,
    PreferencesService,
    RaceDetailService,
    RaceListService,
    StaticEntitlements,
    TimelineService,
)
from f1countdown.timeutils import Clock, utcnow


@dataclass
class Services:
    """Process-wide components, built once by the application lifespan."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    store: RaceStore
    fetcher: DataFetcher
    data_service: DataService
    timeline: TimelineService
    race_list: RaceListService
    notifications: NotificationService
    entitlements: EntitlementService
    live_activity: LiveActivityService
    clock: Clock = utcnow

    async def close(self) -> None:
        await self.fetcher.close()
        await self.engine.dispose()


def build_services(
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    fetcher: DataFetcher | None = None,
    clock: Clock = utcnow,
    entitlements: EntitlementService | None = None,
) -> Services:
    settings = settings or get_settings()
    engine = engine or create_engine_for(settings.database_url, echo=settings.debug)
    session_factory = session_factory or create_session_factory(engine)
    fetcher = fetcher or JolpicaFetcher(settings)
    entitlements = entitlements or StaticEntitlements(settings.pro_user)

    store = RaceStore(session_factory)
    data_service = DataService(store, fetcher, settings, clock)
    timeline = TimelineService(data_service, settings, clock)
    return Services(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        store=store,
        fetcher=fetcher,
        data_service=data_service,
        timeline=timeline,
        race_list=RaceListService(data_service, clock),
        notifications=NotificationService(InMemoryNotificationSink(), clock),
        entitlements=entitlements,
        live_activity=LiveActivityService(timeline, entitlements, InMemoryActivitySink(), clock),
        clock=clock,
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_timeline_service(services: Services = Depends(get_services)) -> TimelineService:
    return services.timeline


def get_live_activity_service(
    services: Services = Depends(get_services),
) -> LiveActivityService:
    return services.live_activity


def get_preferences_service(
    db: AsyncSession = Depends(get_db),
    services: Services = Depends(get_services),
) -> PreferencesService:
    return PreferencesService(db, services.clock)


def get_race_detail_service(
    services: Services = Depends(get_services),
    preferences: PreferencesService = Depends(get_preferences_service),
) -> RaceDetailService:
    return RaceDetailService(
        services.data_service, preferences, services.notifications, services.clock
    )
