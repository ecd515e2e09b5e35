"""
Clinical records service.

The single entry point for callers. Every operation takes the caller's
principal first, passes the role gate, then runs as one transaction on the
record store. Mutations hold the writer lock of the collection they insert
into or update; reads take no lock.

Usage:
    store = RecordStore("sqlite://")
    store.create_all()
    service = ClinicalRecordsService(store)
    patient_id = service.register_patient("nurse-1", "Asha", 30, "female", ...)
"""

import logging
from contextlib import contextmanager

from core.access_control import require_role, role_of, has_role, is_anonymous
from core.database import RecordStore
from core.errors import Unauthorized
from core.time_utils import now_ns
from models.follow_up import FollowUp
from models.patient import Patient
from models.prescription import Prescription
from models.user import UserAccount, UserRole
from models.visit import ClinicalVisit
from services import (
    follow_up_service,
    integrity,
    patient_service,
    prescription_service,
    search_service,
    user_service,
    visit_service,
)

logger = logging.getLogger(__name__)


class ClinicalRecordsService:
    def __init__(self, store: RecordStore, clock=now_ns):
        self.store = store
        self.clock = clock

    @contextmanager
    def _write(self, caller: str, collection: str, minimum: UserRole = UserRole.user):
        """Locked session for `collection`, opened only if the caller is allowed."""
        with self.store.writing(collection) as db:
            require_role(db, caller, minimum)
            yield db

    # ==================================================
    # Patients
    # ==================================================
    def register_patient(self, caller, name, age, gender, contact_number, address, medical_history=None) -> int:
        with self._write(caller, Patient.__tablename__) as db:
            patient = patient_service.register_patient(
                db, name, age, gender, contact_number, address, medical_history
            )
            return patient.id

    def update_patient(self, caller, patient_id, name, age, gender, contact_number, address, medical_history=None):
        with self._write(caller, Patient.__tablename__) as db:
            patient_service.update_patient(
                db, patient_id, name, age, gender, contact_number, address, medical_history
            )

    def get_all_patients(self, caller):
        with self.store.session() as db:
            return patient_service.get_all_patients(db)

    def get_patient_by_id(self, caller, patient_id):
        with self.store.session() as db:
            return patient_service.get_patient(db, patient_id)

    def search_patients_by_name(self, caller, term):
        with self.store.session() as db:
            return search_service.search_patients_by_name(db, term)

    def search_patients_by_contact(self, caller, term):
        with self.store.session() as db:
            return search_service.search_patients_by_contact(db, term)

    # ==================================================
    # Clinical visits
    # ==================================================
    def create_clinical_visit(self, caller, patient_id, date, symptoms, diagnosis, treatment_plan, vitals=None) -> int:
        with self._write(caller, ClinicalVisit.__tablename__) as db:
            visit = visit_service.create_clinical_visit(
                db, patient_id, date, symptoms, diagnosis, treatment_plan, vitals
            )
            return visit.id

    def update_visit(self, caller, visit_id, symptoms, diagnosis, treatment_plan, vitals=None):
        with self._write(caller, ClinicalVisit.__tablename__) as db:
            visit_service.update_visit(db, visit_id, symptoms, diagnosis, treatment_plan, vitals)

    def get_visit_by_id(self, caller, visit_id):
        with self.store.session() as db:
            return visit_service.get_visit(db, visit_id)

    def get_clinical_history(self, caller, patient_id):
        with self.store.session() as db:
            return integrity.clinical_history(db, patient_id)

    # ==================================================
    # Follow-ups
    # ==================================================
    def schedule_follow_up(self, caller, patient_id, appointment_date, notes) -> int:
        with self._write(caller, FollowUp.__tablename__) as db:
            follow_up = follow_up_service.schedule_follow_up(db, patient_id, appointment_date, notes)
            return follow_up.id

    def mark_follow_up_completed(self, caller, follow_up_id):
        with self._write(caller, FollowUp.__tablename__) as db:
            follow_up_service.mark_follow_up_completed(db, follow_up_id)

    def cancel_follow_up(self, caller, follow_up_id):
        with self._write(caller, FollowUp.__tablename__) as db:
            follow_up_service.cancel_follow_up(db, follow_up_id)

    def get_all_follow_ups(self, caller):
        with self.store.session() as db:
            return follow_up_service.get_active_follow_ups(db)

    def get_follow_up_by_id(self, caller, follow_up_id):
        with self.store.session() as db:
            return follow_up_service.get_follow_up(db, follow_up_id)

    def get_upcoming_follow_ups(self, caller, patient_id):
        now = self.clock()
        with self.store.session() as db:
            return follow_up_service.get_upcoming_follow_ups(db, patient_id, now)

    def get_past_follow_ups(self, caller, patient_id):
        now = self.clock()
        with self.store.session() as db:
            return follow_up_service.get_past_follow_ups(db, patient_id, now)

    # ==================================================
    # Prescriptions
    # ==================================================
    def create_prescription(self, caller, patient_id, visit_id, medicines, doctor_name, date) -> int:
        with self._write(caller, Prescription.__tablename__) as db:
            prescription = prescription_service.create_prescription(
                db, patient_id, visit_id, medicines, doctor_name, date
            )
            return prescription.id

    def update_prescription(self, caller, prescription_id, medicines, doctor_name):
        with self._write(caller, Prescription.__tablename__) as db:
            prescription_service.update_prescription(db, prescription_id, medicines, doctor_name)

    def get_prescription_by_id(self, caller, prescription_id):
        with self.store.session() as db:
            return prescription_service.get_prescription(db, prescription_id)

    def get_prescriptions_by_patient(self, caller, patient_id):
        with self.store.session() as db:
            return integrity.prescriptions_for_patient(db, patient_id)

    # ==================================================
    # Caller identity and roles
    # ==================================================
    def get_caller_user_role(self, caller) -> UserRole:
        with self.store.session() as db:
            return role_of(db, caller)

    def is_caller_admin(self, caller) -> bool:
        with self.store.session() as db:
            return has_role(db, caller, UserRole.admin)

    def get_caller_user_profile(self, caller):
        if is_anonymous(caller):
            return None
        with self.store.session() as db:
            return user_service.get_profile(db, caller)

    def save_caller_user_profile(self, caller, name, role=None):
        if is_anonymous(caller):
            raise Unauthorized("Anonymous callers cannot save a profile.")
        with self.store.writing(UserAccount.__tablename__) as db:
            user_service.save_profile(db, caller, name, role, self.clock())

    def get_user_profile(self, caller, principal):
        with self.store.session() as db:
            if caller != principal or is_anonymous(caller):
                require_role(db, caller, UserRole.admin)
            return user_service.get_profile(db, principal)

    def assign_caller_user_role(self, caller, principal, role):
        with self._write(caller, UserAccount.__tablename__, UserRole.admin) as db:
            user_service.assign_role(db, principal, role, self.clock())
            logger.info("Role change for %s made by %s", principal, caller)
