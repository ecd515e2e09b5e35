# models/prescription.py

from dataclasses import dataclass, asdict

from sqlalchemy import Column, Integer, BigInteger, String, JSON, ForeignKey
from core.database import Base


@dataclass(frozen=True)
class Medicine:
    name: str
    dosage: str
    frequency: str
    duration: str


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True, autoincrement=False)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    visit_id = Column(Integer, ForeignKey("clinical_visits.id"), nullable=False, index=True)

    doctor_name = Column(String, nullable=False, default="")
    date = Column(BigInteger, nullable=False)

    # Stored as a list of dicts, caller order preserved
    medicine_rows = Column("medicines", JSON, nullable=False, default=list)

    @property
    def medicines(self) -> list[Medicine]:
        return [Medicine(**row) for row in self.medicine_rows or []]

    @medicines.setter
    def medicines(self, value):
        self.medicine_rows = [asdict(m) for m in value]

    def __repr__(self):
        return f"<Prescription {self.id} for Visit {self.visit_id}>"
