import logging

from sqlalchemy.orm import Session

from core.errors import VisitNotFound, ValidationError
from core.id_allocator import allocate_id
from models.visit import ClinicalVisit, Vitals
from services.integrity import require_patient
from services.patient_service import text_list, check_int64

logger = logging.getLogger(__name__)


def _check_vitals(vitals: Vitals) -> Vitals:
    if vitals.blood_pressure is not None and not isinstance(vitals.blood_pressure, str):
        raise ValidationError(f"blood_pressure must be text, got {vitals.blood_pressure!r}.")
    for field in ("temperature", "weight"):
        reading = getattr(vitals, field)
        if reading is not None and (isinstance(reading, bool) or not isinstance(reading, (int, float))):
            raise ValidationError(f"{field} must be a number, got {reading!r}.")
    if vitals.pulse is not None:
        check_int64(vitals.pulse, "pulse")
    return vitals


def as_vitals(value) -> Vitals:
    """Accept a Vitals, a mapping of readings, or None (nothing recorded)."""
    if value is None:
        return Vitals()
    if isinstance(value, Vitals):
        return _check_vitals(value)
    try:
        vitals = Vitals(**dict(value))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid vitals: {e}") from None
    return _check_vitals(vitals)


def check_timestamp(value, field: str = "date") -> int:
    """Nanoseconds since the epoch, within the signed 64-bit column range."""
    return check_int64(value, field)


# -----------------------------
# Create a new visit
# -----------------------------
def create_clinical_visit(
    db: Session,
    patient_id: int,
    date: int,
    symptoms,
    diagnosis: str,
    treatment_plan,
    vitals=None,
) -> ClinicalVisit:
    visit = ClinicalVisit(
        patient_id=patient_id,
        date=check_timestamp(date),
        symptoms=text_list(symptoms),
        diagnosis=diagnosis or "",
        treatment_plan=text_list(treatment_plan),
        vitals=as_vitals(vitals),
    )
    # Parent check right before the write
    require_patient(db, patient_id)
    visit.id = allocate_id(db, ClinicalVisit.__tablename__)

    db.add(visit)
    db.flush()
    logger.info("Created clinical visit %s for patient %s", visit.id, patient_id)
    return visit


# -----------------------------
# Update clinical content; patient and date stay fixed
# -----------------------------
def update_visit(
    db: Session,
    visit_id: int,
    symptoms,
    diagnosis: str,
    treatment_plan,
    vitals=None,
) -> ClinicalVisit:
    visit = db.get(ClinicalVisit, visit_id)
    if visit is None:
        raise VisitNotFound(visit_id)

    visit.symptoms = text_list(symptoms)
    visit.diagnosis = diagnosis or ""
    visit.treatment_plan = text_list(treatment_plan)
    visit.vitals = as_vitals(vitals)

    db.flush()
    logger.info("Updated clinical visit %s", visit.id)
    return visit


def get_visit(db: Session, visit_id: int):
    return db.get(ClinicalVisit, visit_id)
