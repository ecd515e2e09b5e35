"""
Referential integrity checks.

Write paths call these inside their transaction immediately before the
insert; the listing helpers return [] for unknown parents.
"""

from sqlalchemy.orm import Session

from core.errors import PatientNotFound, VisitNotFound, VisitPatientMismatch
from models.patient import Patient
from models.visit import ClinicalVisit
from models.follow_up import FollowUp, FollowUpStatus
from models.prescription import Prescription


def require_patient(db: Session, patient_id: int) -> Patient:
    patient = db.get(Patient, patient_id)
    if patient is None:
        raise PatientNotFound(patient_id)
    return patient


def require_visit(db: Session, visit_id: int) -> ClinicalVisit:
    visit = db.get(ClinicalVisit, visit_id)
    if visit is None:
        raise VisitNotFound(visit_id)
    return visit


def require_visit_for_patient(db: Session, patient_id: int, visit_id: int) -> ClinicalVisit:
    """Both ids are supplied independently by callers, so check they agree."""
    require_patient(db, patient_id)
    visit = require_visit(db, visit_id)
    if visit.patient_id != patient_id:
        raise VisitPatientMismatch(visit_id, visit.patient_id, patient_id)
    return visit


# ------------------------------------------
# Child records for a parent
# ------------------------------------------
def clinical_history(db: Session, patient_id: int):
    return (
        db.query(ClinicalVisit)
        .filter(ClinicalVisit.patient_id == patient_id)
        .order_by(ClinicalVisit.id)
        .all()
    )


def prescriptions_for_patient(db: Session, patient_id: int):
    return (
        db.query(Prescription)
        .filter(Prescription.patient_id == patient_id)
        .order_by(Prescription.id)
        .all()
    )


def follow_ups_for_patient(db: Session, patient_id: int, include_cancelled: bool = False):
    query = db.query(FollowUp).filter(FollowUp.patient_id == patient_id)
    if not include_cancelled:
        query = query.filter(FollowUp.status != FollowUpStatus.cancelled)
    return query.order_by(FollowUp.id).all()
