import pytest

from core.errors import PatientNotFound, PrescriptionNotFound, ValidationError, VisitNotFound, VisitPatientMismatch
from models.prescription import Medicine
from tests.conftest import NURSE, GUEST, START_NS

PARACETAMOL = {"name": "Paracetamol", "dosage": "500mg", "frequency": "TID", "duration": "5 days"}
CETIRIZINE = Medicine(name="Cetirizine", dosage="10mg", frequency="OD", duration="7 days")


class TestCreatePrescription:
    def test_visit_to_prescription_flow(self, service, register, new_visit):
        patient_id = register()
        visit_id = new_visit(patient_id)

        service.create_prescription(NURSE, patient_id, visit_id, [PARACETAMOL, CETIRIZINE], "Dr. Rao", START_NS)

        prescriptions = service.get_prescriptions_by_patient(GUEST, patient_id)
        assert len(prescriptions) == 1
        prescription = prescriptions[0]
        assert prescription.visit_id == visit_id
        assert prescription.doctor_name == "Dr. Rao"
        assert prescription.date == START_NS
        assert prescription.medicines == [Medicine(**PARACETAMOL), CETIRIZINE]

    def test_several_per_visit(self, service, register, new_visit):
        patient_id = register()
        visit_id = new_visit(patient_id)
        first = service.create_prescription(NURSE, patient_id, visit_id, [PARACETAMOL], "Dr. Rao", START_NS)
        second = service.create_prescription(NURSE, patient_id, visit_id, [CETIRIZINE], "Dr. Rao", START_NS)

        assert second > first
        assert [p.id for p in service.get_prescriptions_by_patient(NURSE, patient_id)] == [first, second]

    def test_unknown_patient(self, service, register, new_visit):
        visit_id = new_visit(register())
        with pytest.raises(PatientNotFound):
            service.create_prescription(NURSE, 77, visit_id, [PARACETAMOL], "Dr. Rao", START_NS)
        assert service.get_prescription_by_id(NURSE, 1) is None

    def test_unknown_visit(self, service, register):
        patient_id = register()
        with pytest.raises(VisitNotFound):
            service.create_prescription(NURSE, patient_id, 77, [PARACETAMOL], "Dr. Rao", START_NS)
        assert service.get_prescriptions_by_patient(NURSE, patient_id) == []

    def test_visit_of_another_patient(self, service, register, new_visit):
        asha, ravi = register(name="Asha"), register(name="Ravi")
        ravi_visit = new_visit(ravi)

        with pytest.raises(VisitPatientMismatch):
            service.create_prescription(NURSE, asha, ravi_visit, [PARACETAMOL], "Dr. Rao", START_NS)

        assert service.get_prescriptions_by_patient(NURSE, asha) == []
        assert service.get_prescriptions_by_patient(NURSE, ravi) == []

    def test_failed_create_does_not_consume_id(self, service, register, new_visit):
        asha, ravi = register(name="Asha"), register(name="Ravi")
        ravi_visit = new_visit(ravi)
        with pytest.raises(VisitPatientMismatch):
            service.create_prescription(NURSE, asha, ravi_visit, [PARACETAMOL], "Dr. Rao", START_NS)

        assert service.create_prescription(NURSE, ravi, ravi_visit, [PARACETAMOL], "Dr. Rao", START_NS) == 1

    def test_incomplete_medicine_rejected(self, service, register, new_visit):
        patient_id = register()
        visit_id = new_visit(patient_id)
        with pytest.raises(ValidationError):
            service.create_prescription(NURSE, patient_id, visit_id, [{"name": "Ibuprofen"}], "Dr. Rao", START_NS)

    def test_empty_for_unknown_patient(self, service):
        assert service.get_prescriptions_by_patient(GUEST, 1) == []


class TestUpdatePrescription:
    def test_replaces_medicines_and_doctor(self, service, register, new_visit):
        patient_id = register()
        visit_id = new_visit(patient_id)
        prescription_id = service.create_prescription(
            NURSE, patient_id, visit_id, [PARACETAMOL], "Dr. Rao", START_NS
        )

        service.update_prescription(NURSE, prescription_id, [CETIRIZINE, CETIRIZINE], "Dr. Iyer")

        prescription = service.get_prescription_by_id(NURSE, prescription_id)
        assert prescription.medicines == [CETIRIZINE, CETIRIZINE]
        assert prescription.doctor_name == "Dr. Iyer"
        assert (prescription.patient_id, prescription.visit_id, prescription.date) == (
            patient_id, visit_id, START_NS,
        )

    def test_unknown_prescription(self, service):
        with pytest.raises(PrescriptionNotFound):
            service.update_prescription(NURSE, 9, [], "Dr. Rao")
