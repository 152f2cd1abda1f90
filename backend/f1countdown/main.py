"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from f1countdown.api import (
    preferences_router,
    races_router,
    register_exception_handlers,
    timeline_router,
)
from f1countdown.api_logging import configure_logging, get_logger
from f1countdown.config import Settings, get_settings
from f1countdown.database import init_db
from f1countdown.dependencies import Services, build_services

logger = get_logger("main")


def create_app(
    settings: Settings | None = None,
    services: Services | None = None,
) -> FastAPI:
    """Build the app. ``services`` replaces the default service graph (tests)."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        configure_logging(settings)
        graph = services or build_services(settings)
        app.state.services = graph
        await init_db(graph.engine)
        cached = await graph.data_service.load_cached_races()
        logger.info("Started with %d cached races", len(cached))
        yield
        # Shutdown
        await graph.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Formula 1 race calendar, countdowns and widget timelines",
        lifespan=lifespan,
    )
    if services is not None:
        app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173"],  # Vite dev server
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Register API routers
    app.include_router(races_router, prefix="/api")
    app.include_router(timeline_router, prefix="/api")
    app.include_router(preferences_router, prefix="/api")
    return app


app = create_app()
