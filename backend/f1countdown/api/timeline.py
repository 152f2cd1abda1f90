"""Widget timeline and live activity API routes."""

from fastapi import APIRouter, Depends

from f1countdown.dependencies import get_live_activity_service, get_timeline_service
from f1countdown.schemas import Timeline
from f1countdown.services import LiveActivityService, LiveActivityState, TimelineService

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.get("", response_model=Timeline)
async def get_timeline(timeline: TimelineService = Depends(get_timeline_service)):
    """Countdown snapshots for the host, plus the earliest time to ask again."""
    return timeline.get_timeline()


@router.post("/live-activity", response_model=LiveActivityState | None)
async def update_live_activity(
    live_activity: LiveActivityService = Depends(get_live_activity_service),
):
    """Push the current race to the live activity. Requires Pro."""
    return await live_activity.update()


@router.delete("/live-activity", response_model=LiveActivityState | None)
async def end_live_activity(
    live_activity: LiveActivityService = Depends(get_live_activity_service),
):
    return await live_activity.end()
