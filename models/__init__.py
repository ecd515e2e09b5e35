from .patient import Patient, Gender
from .visit import ClinicalVisit, Vitals
from .follow_up import FollowUp, FollowUpStatus
from .prescription import Prescription, Medicine
from .user import UserAccount, UserRole
from .id_sequence import IdSequence

__all__ = [
    "Patient",
    "Gender",
    "ClinicalVisit",
    "Vitals",
    "FollowUp",
    "FollowUpStatus",
    "Prescription",
    "Medicine",
    "UserAccount",
    "UserRole",
    "IdSequence",
]
