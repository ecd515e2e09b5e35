"""
Error kinds raised by the clinical records service.

Every failure reaches the caller as one of these. Relation listings
(history, prescriptions, follow-ups for a patient) return empty lists
instead of raising.
"""


class ClinicalRecordsError(Exception):
    """Base class for all service errors."""


class Unauthorized(ClinicalRecordsError):
    pass


class ValidationError(ClinicalRecordsError, ValueError):
    pass


class NotFound(ClinicalRecordsError, LookupError):
    entity = "Record"

    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__(f"{self.entity} {record_id} not found")


class PatientNotFound(NotFound):
    entity = "Patient"


class VisitNotFound(NotFound):
    entity = "Clinical visit"


class PrescriptionNotFound(NotFound):
    entity = "Prescription"


class FollowUpNotFound(NotFound):
    entity = "Follow-up"


class VisitPatientMismatch(ClinicalRecordsError):
    def __init__(self, visit_id, visit_patient_id, patient_id):
        self.visit_id = visit_id
        self.visit_patient_id = visit_patient_id
        self.patient_id = patient_id
        super().__init__(
            f"Clinical visit {visit_id} belongs to patient {visit_patient_id}, not {patient_id}"
        )


class FollowUpStateError(ClinicalRecordsError):
    pass
