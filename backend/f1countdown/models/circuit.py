"""Circuit model."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from f1countdown.database import Base
from f1countdown.schemas.race import Circuit, CircuitLocation
from f1countdown.timeutils import utcnow


class CircuitRecord(Base):
    """Circuit table model."""

    __tablename__ = "circuits"

    circuit_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    circuit_name: Mapped[str] = mapped_column(String(200), nullable=False)
    locality: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    # Reverse index only; a race owns its circuit reference
    races = relationship("RaceRecord", back_populates="circuit")

    @classmethod
    def from_circuit(cls, circuit: Circuit) -> "CircuitRecord":
        return cls(
            circuit_id=circuit.circuit_id,
            circuit_name=circuit.circuit_name,
            locality=circuit.location.locality,
            country=circuit.location.country,
            last_updated=utcnow(),
        )

    def update_from(self, circuit: Circuit) -> None:
        self.circuit_name = circuit.circuit_name
        self.locality = circuit.location.locality
        self.country = circuit.location.country
        self.last_updated = utcnow()

    def to_circuit(self) -> Circuit:
        return Circuit(
            circuit_id=self.circuit_id,
            circuit_name=self.circuit_name,
            location=CircuitLocation(locality=self.locality, country=self.country),
        )

    def __repr__(self) -> str:
        return f"<CircuitRecord(circuit_id='{self.circuit_id}', name='{self.circuit_name}')>"
