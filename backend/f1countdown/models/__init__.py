"""SQLAlchemy models."""

from f1countdown.models.circuit import CircuitRecord
from f1countdown.models.preferences import PREFERENCES_ID, UserPreferences
from f1countdown.models.race import RaceRecord

__all__ = [
    "CircuitRecord",
    "RaceRecord",
    "UserPreferences",
    "PREFERENCES_ID",
]
