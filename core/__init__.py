from .database import RecordStore, Base, make_engine
from .config import Config
from .errors import (
    ClinicalRecordsError,
    Unauthorized,
    ValidationError,
    NotFound,
    PatientNotFound,
    VisitNotFound,
    PrescriptionNotFound,
    FollowUpNotFound,
    VisitPatientMismatch,
    FollowUpStateError,
)
from .access_control import role_of, require_role

__all__ = [
    "RecordStore",
    "Base",
    "make_engine",
    "Config",
    "ClinicalRecordsError",
    "Unauthorized",
    "ValidationError",
    "NotFound",
    "PatientNotFound",
    "VisitNotFound",
    "PrescriptionNotFound",
    "FollowUpNotFound",
    "VisitPatientMismatch",
    "FollowUpStateError",
    "role_of",
    "require_role",
]
