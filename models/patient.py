# models/patient.py

import enum

from sqlalchemy import Column, Integer, String, JSON, Enum
from core.database import Base


class Gender(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, autoincrement=False)

    # Demographics
    name = Column(String, nullable=False, default="")
    age = Column(Integer, nullable=False)
    gender = Column(Enum(Gender, native_enum=False, length=16), nullable=False)

    contact_number = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")

    # Free-text notes, caller order preserved
    medical_history = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Patient {self.id}>"
