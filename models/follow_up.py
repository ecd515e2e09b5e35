# models/follow_up.py

import enum

from sqlalchemy import Column, Integer, BigInteger, String, Boolean, Enum, ForeignKey
from core.database import Base


class FollowUpStatus(str, enum.Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


class FollowUp(Base):
    __tablename__ = "follow_ups"

    id = Column(Integer, primary_key=True, autoincrement=False)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)

    appointment_date = Column(BigInteger, nullable=False)
    notes = Column(String, nullable=False, default="")

    completed = Column(Boolean, nullable=False, default=False)
    # Cancelled follow-ups stay as tombstones
    status = Column(
        Enum(FollowUpStatus, native_enum=False, length=16),
        nullable=False,
        default=FollowUpStatus.scheduled,
    )

    @property
    def cancelled(self) -> bool:
        return self.status == FollowUpStatus.cancelled

    def is_upcoming(self, now: int) -> bool:
        return not self.completed and not self.cancelled and self.appointment_date > now

    def __repr__(self):
        return f"<FollowUp {self.id} ({self.status.value}) for Patient {self.patient_id}>"
