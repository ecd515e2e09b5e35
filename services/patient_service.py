import logging

from sqlalchemy.orm import Session

from core.errors import PatientNotFound, ValidationError
from core.id_allocator import allocate_id
from models.patient import Patient, Gender

logger = logging.getLogger(__name__)


# ------------------------------------------
# Input normalisation
# ------------------------------------------
def parse_gender(value) -> Gender:
    if isinstance(value, Gender):
        return value
    try:
        return Gender((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid gender {value!r}. Expected male, female, or other.") from None


# Integer columns are signed 64-bit
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def check_int64(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer, got {value!r}.")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValidationError(f"{field} {value} does not fit in a signed 64-bit integer.")
    return value


def check_age(age) -> int:
    check_int64(age, "Age")
    if age < 0:
        raise ValidationError("Age cannot be negative.")
    return age


def text_list(values) -> list[str]:
    """Copy a list of notes, keeping caller order and duplicates."""
    if values is None:
        return []
    if isinstance(values, str):
        raise ValidationError("Expected a list of text entries, got a single string.")
    try:
        notes = list(values)
    except TypeError:
        raise ValidationError(f"Expected a list of text entries, got {values!r}.") from None
    for v in notes:
        if not isinstance(v, str):
            raise ValidationError(f"Expected text entries, got {v!r}.")
    return notes


# ------------------------------------------
# Create a new patient
# ------------------------------------------
def register_patient(
    db: Session,
    name: str,
    age: int,
    gender,
    contact_number: str,
    address: str,
    medical_history=None,
) -> Patient:
    # Empty names are stored as given
    patient = Patient(
        name=name or "",
        age=check_age(age),
        gender=parse_gender(gender),
        contact_number=contact_number or "",
        address=address or "",
        medical_history=text_list(medical_history),
    )
    patient.id = allocate_id(db, Patient.__tablename__)

    db.add(patient)
    db.flush()
    logger.info("Registered patient %s", patient.id)
    return patient


# ------------------------------------------
# Full replace of a patient's mutable fields
# ------------------------------------------
def update_patient(
    db: Session,
    patient_id: int,
    name: str,
    age: int,
    gender,
    contact_number: str,
    address: str,
    medical_history=None,
) -> Patient:
    patient = db.get(Patient, patient_id)
    if patient is None:
        raise PatientNotFound(patient_id)

    patient.name = name or ""
    patient.age = check_age(age)
    patient.gender = parse_gender(gender)
    patient.contact_number = contact_number or ""
    patient.address = address or ""
    patient.medical_history = text_list(medical_history)

    db.flush()
    logger.info("Updated patient %s", patient.id)
    return patient


def get_patient(db: Session, patient_id: int):
    return db.get(Patient, patient_id)


def get_all_patients(db: Session):
    return db.query(Patient).order_by(Patient.id).all()
