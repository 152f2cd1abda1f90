"""Data access repositories."""

from f1countdown.repositories.base import BaseRepository
from f1countdown.repositories.circuit_repository import CircuitRepository
from f1countdown.repositories.preferences_repository import PreferencesRepository
from f1countdown.repositories.race_repository import RaceRepository
from f1countdown.repositories.store import RaceStore

__all__ = [
    "BaseRepository",
    "CircuitRepository",
    "RaceRepository",
    "PreferencesRepository",
    "RaceStore",
]
