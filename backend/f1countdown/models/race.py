"""Race model."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from f1countdown.database import Base
from f1countdown.models.circuit import CircuitRecord
from f1countdown.schemas.race import Race
from f1countdown.schemas.session import SessionData, SessionType
from f1countdown.timeutils import utcnow

# Session blocks stored in the JSON column, keyed by SessionType value
_SESSION_FIELDS = {
    SessionType.FP1: "first_practice",
    SessionType.FP2: "second_practice",
    SessionType.FP3: "third_practice",
    SessionType.QUALIFYING: "qualifying",
    SessionType.SPRINT: "sprint",
}


def _encode_sessions(race: Race) -> dict[str, dict[str, Any]]:
    return {
        kind.value: block.model_dump()
        for kind, block in race.session_blocks.items()
    }


class RaceRecord(Base):
    """Race table model, keyed by "{season}-{round}"."""

    __tablename__ = "races"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    season: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    round: Mapped[str] = mapped_column(String(8), nullable=False)
    race_name: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    time: Mapped[str | None] = mapped_column(String(16), nullable=True)  # HH:MM:SSZ
    circuit_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("circuits.circuit_id"), nullable=False, index=True
    )
    sessions: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    circuit = relationship("CircuitRecord", back_populates="races", lazy="joined")

    @classmethod
    def from_race(cls, race: Race, circuit: CircuitRecord) -> "RaceRecord":
        record = cls(id=race.id, circuit_id=circuit.circuit_id, is_completed=False)
        record.update_from(race, circuit)
        return record

    def update_from(self, race: Race, circuit: CircuitRecord) -> None:
        self.season = race.season
        self.round = race.round
        self.race_name = race.race_name
        self.date = race.date
        self.time = race.time
        self.circuit = circuit
        self.circuit_id = circuit.circuit_id
        self.sessions = _encode_sessions(race)
        self.last_updated = utcnow()

    def mark_completed(self) -> None:
        self.is_completed = True
        self.last_updated = utcnow()

    def to_race(self) -> Race | None:
        """Rebuild the domain race; None if the circuit cannot be resolved."""
        if self.circuit is None:
            return None

        blocks: dict[str, SessionData] = {}
        for kind, field in _SESSION_FIELDS.items():
            raw = (self.sessions or {}).get(kind.value)
            if raw:
                blocks[field] = SessionData.model_validate(raw)

        return Race(
            season=self.season,
            round=self.round,
            race_name=self.race_name,
            circuit=self.circuit.to_circuit(),
            date=self.date,
            time=self.time,
            **blocks,
        )

    def __repr__(self) -> str:
        return f"<RaceRecord(id='{self.id}', name='{self.race_name}')>"
