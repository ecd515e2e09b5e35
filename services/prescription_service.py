import logging
from collections.abc import Mapping

from sqlalchemy.orm import Session

from core.errors import PrescriptionNotFound, ValidationError
from core.id_allocator import allocate_id
from models.prescription import Prescription, Medicine
from services.integrity import require_visit_for_patient
from services.visit_service import check_timestamp

logger = logging.getLogger(__name__)

MEDICINE_FIELDS = ("name", "dosage", "frequency", "duration")


def as_medicine(value) -> Medicine:
    if isinstance(value, Medicine):
        return value
    if not isinstance(value, Mapping):
        raise ValidationError(f"Invalid medicine entry: {value!r}")

    missing = [f for f in MEDICINE_FIELDS if f not in value]
    if missing:
        raise ValidationError(f"Medicine entry missing {', '.join(missing)}")
    return Medicine(**{f: str(value[f]) for f in MEDICINE_FIELDS})


def as_medicines(values) -> list[Medicine]:
    return [as_medicine(v) for v in values or []]


def create_prescription(
    db: Session,
    patient_id: int,
    visit_id: int,
    medicines,
    doctor_name: str,
    date: int,
) -> Prescription:
    prescription = Prescription(
        patient_id=patient_id,
        visit_id=visit_id,
        doctor_name=doctor_name or "",
        date=check_timestamp(date),
        medicines=as_medicines(medicines),
    )
    # Patient, visit and their pairing are checked in this transaction
    require_visit_for_patient(db, patient_id, visit_id)
    prescription.id = allocate_id(db, Prescription.__tablename__)

    db.add(prescription)
    db.flush()
    logger.info(
        "Created prescription %s for patient %s (visit %s)",
        prescription.id, patient_id, visit_id,
    )
    return prescription


def update_prescription(db: Session, prescription_id: int, medicines, doctor_name: str) -> Prescription:
    prescription = db.get(Prescription, prescription_id)
    if prescription is None:
        raise PrescriptionNotFound(prescription_id)

    prescription.medicines = as_medicines(medicines)
    prescription.doctor_name = doctor_name or ""

    db.flush()
    logger.info("Updated prescription %s", prescription.id)
    return prescription


def get_prescription(db: Session, prescription_id: int):
    return db.get(Prescription, prescription_id)
