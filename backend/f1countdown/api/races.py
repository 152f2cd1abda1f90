"""Race API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from f1countdown.api.preferences import FavoriteCircuitResponse
from f1countdown.dependencies import (
    Services,
    get_preferences_service,
    get_race_detail_service,
    get_services,
)
from f1countdown.exceptions import DataServiceError, SyncFailedError
from f1countdown.schemas import Race, RaceListResponse, RaceResponse
from f1countdown.services import PreferencesService, RaceDetailService, RaceFilterMode
from f1countdown.services.race_detail_service import share_text

router = APIRouter(prefix="/races", tags=["races"])


class NotificationsResponse(BaseModel):
    race_id: str
    identifiers: list[str]


def _list_response(
    races: list[Race],
    services: Services,
    error: str | None = None,
    retry_after: int | None = None,
) -> RaceListResponse:
    now = services.clock()
    return RaceListResponse(
        items=[RaceResponse.from_race(race, now) for race in races],
        total=len(races),
        last_sync_date=services.data_service.last_sync_date,
        error=error,
        retry_after=retry_after,
    )


@router.get("", response_model=RaceListResponse)
async def get_races(
    season: str | None = None,
    services: Services = Depends(get_services),
):
    """Get cached races, optionally for one season."""
    races = await services.data_service.get_cached_races(season)
    return _list_response(races, services)


@router.get("/browse", response_model=RaceListResponse)
async def browse_races(
    season: int | None = Query(None, ge=1950),
    mode: RaceFilterMode = RaceFilterMode.ALL,
    q: str = "",
    services: Services = Depends(get_services),
    preferences: PreferencesService = Depends(get_preferences_service),
):
    """Cache-first season listing with a network refresh, filtered and searched."""
    favorites: list[str] = []
    if mode is RaceFilterMode.FAVORITES:
        favorites = (await preferences.get_response()).favorite_circuit_ids
    state = await services.race_list.load(season, mode, q, favorites)
    return _list_response(
        state.filtered,
        services,
        error=state.error_message or state.warning,
        retry_after=state.retry_after,
    )


@router.post("/refresh", response_model=RaceListResponse)
async def refresh_races(
    year: int | None = Query(None, ge=1950),
    force: bool = False,
    services: Services = Depends(get_services),
):
    """User-initiated refresh. Cached races are kept and returned on failure."""
    data = services.data_service
    season = str(year) if year is not None else None
    cached = await data.get_cached_races(season)
    if not force and not data.should_refresh(year):
        return _list_response(cached, services)

    try:
        races = await data.fetch_and_cache_races(year)
    except DataServiceError as exc:
        if not cached:
            raise
        retry_after = exc.retry_after if isinstance(exc, SyncFailedError) else None
        return _list_response(cached, services, error=str(exc), retry_after=retry_after)
    return _list_response(races, services)


@router.get("/upcoming", response_model=list[RaceResponse])
async def get_upcoming_races(services: Services = Depends(get_services)):
    now = services.clock()
    return [RaceResponse.from_race(r, now) for r in services.data_service.get_upcoming_races(now)]


@router.get("/completed", response_model=list[RaceResponse])
async def get_completed_races(services: Services = Depends(get_services)):
    now = services.clock()
    return [
        RaceResponse.from_race(r, now) for r in services.data_service.get_completed_races(now)
    ]


@router.get("/next", response_model=RaceResponse)
async def get_next_race(services: Services = Depends(get_services)):
    now = services.clock()
    race = services.data_service.get_next_race(now)
    if race is None:
        raise HTTPException(status_code=404, detail="No upcoming race")
    return RaceResponse.from_race(race, now)


async def _load_race(race_id: str, detail: RaceDetailService) -> Race:
    race = await detail.load_race(race_id)
    if race is None:
        raise HTTPException(status_code=404, detail="Race not found")
    return race


@router.get("/{race_id}", response_model=RaceResponse)
async def get_race(
    race_id: str,
    detail: RaceDetailService = Depends(get_race_detail_service),
    services: Services = Depends(get_services),
):
    """Get a race by ID (e.g. ``2024-1``)."""
    race = await _load_race(race_id, detail)
    return RaceResponse.from_race(race, services.clock())


@router.get("/{race_id}/share", response_class=PlainTextResponse)
async def get_share_text(
    race_id: str,
    detail: RaceDetailService = Depends(get_race_detail_service),
):
    return share_text(await _load_race(race_id, detail))


@router.post("/{race_id}/notifications", response_model=NotificationsResponse)
async def schedule_notifications(
    race_id: str,
    detail: RaceDetailService = Depends(get_race_detail_service),
):
    """Schedule notifications for a race according to the user's preferences."""
    race = await _load_race(race_id, detail)
    identifiers = await detail.schedule_notifications(race)
    return NotificationsResponse(race_id=race.id, identifiers=identifiers)


@router.delete("/{race_id}/notifications", response_model=NotificationsResponse)
async def cancel_notifications(
    race_id: str,
    detail: RaceDetailService = Depends(get_race_detail_service),
):
    race = await _load_race(race_id, detail)
    identifiers = await detail.cancel_notifications(race)
    return NotificationsResponse(race_id=race.id, identifiers=identifiers)


@router.post("/{race_id}/favorite", response_model=FavoriteCircuitResponse)
async def toggle_favorite(
    race_id: str,
    detail: RaceDetailService = Depends(get_race_detail_service),
):
    race = await _load_race(race_id, detail)
    is_favorite = await detail.toggle_favorite(race)
    return FavoriteCircuitResponse(circuit_id=race.circuit.circuit_id, is_favorite=is_favorite)
