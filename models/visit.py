# models/visit.py

from dataclasses import dataclass

from sqlalchemy import Column, Integer, BigInteger, String, Float, JSON, ForeignKey

from core.database import Base


@dataclass(frozen=True)
class Vitals:
    """Vitals at time of visit. Each reading is independently optional."""

    blood_pressure: str | None = None
    temperature: float | None = None
    pulse: int | None = None
    weight: float | None = None


class ClinicalVisit(Base):
    __tablename__ = "clinical_visits"

    id = Column(Integer, primary_key=True, autoincrement=False)

    # Link to patient; fixed once created
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)

    # Caller supplied (ns since epoch) so visits can be backdated
    date = Column(BigInteger, nullable=False)

    symptoms = Column(JSON, nullable=False, default=list)
    diagnosis = Column(String, nullable=False, default="")
    treatment_plan = Column(JSON, nullable=False, default=list)

    # Vitals
    blood_pressure = Column(String, nullable=True)
    temperature = Column(Float, nullable=True)
    pulse = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)

    @property
    def vitals(self) -> Vitals:
        return Vitals(
            blood_pressure=self.blood_pressure,
            temperature=self.temperature,
            pulse=self.pulse,
            weight=self.weight,
        )

    @vitals.setter
    def vitals(self, value: Vitals | None):
        value = value or Vitals()
        self.blood_pressure = value.blood_pressure
        self.temperature = value.temperature
        self.pulse = value.pulse
        self.weight = value.weight

    def __repr__(self):
        return f"<ClinicalVisit {self.id} for Patient {self.patient_id}>"
