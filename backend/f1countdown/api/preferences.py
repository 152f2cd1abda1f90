"""User preferences API routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from f1countdown.dependencies import get_preferences_service
from f1countdown.schemas import PreferencesResponse, PreferencesUpdate
from f1countdown.services import PreferencesService

router = APIRouter(prefix="/preferences", tags=["preferences"])


class FavoriteCircuitResponse(BaseModel):
    circuit_id: str
    is_favorite: bool


@router.get("", response_model=PreferencesResponse)
async def get_preferences(service: PreferencesService = Depends(get_preferences_service)):
    return await service.get_response()


@router.patch("", response_model=PreferencesResponse)
async def update_preferences(
    data: PreferencesUpdate,
    service: PreferencesService = Depends(get_preferences_service),
):
    """Apply a partial update to the preferences."""
    preferences = await service.update(data)
    return service.to_response(preferences)


@router.post("/favorites/circuits/{circuit_id}", response_model=FavoriteCircuitResponse)
async def toggle_favorite_circuit(
    circuit_id: str,
    service: PreferencesService = Depends(get_preferences_service),
):
    is_favorite = await service.toggle_favorite_circuit(circuit_id)
    return FavoriteCircuitResponse(circuit_id=circuit_id, is_favorite=is_favorite)
