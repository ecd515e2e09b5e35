import pytest

from core.setup_db import init_store
from core.time_utils import NANOS_PER_SECOND
from services.clinical_records import ClinicalRecordsService

ADMIN = "admin-principal"
NURSE = "nurse-principal"
GUEST = "guest-principal"

# 2026-01-01T00:00:00Z
START_NS = 1_767_225_600 * NANOS_PER_SECOND
DAY_NS = 86_400 * NANOS_PER_SECOND


class FakeClock:
    def __init__(self, now: int = START_NS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, nanos: int):
        self.now += nanos


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    store = init_store("sqlite://", admin_principals=[ADMIN])
    yield store
    store.dispose()


@pytest.fixture
def service(store, clock):
    service = ClinicalRecordsService(store, clock=clock)
    service.assign_caller_user_role(ADMIN, NURSE, "user")
    return service


@pytest.fixture
def register(service):
    """Register a patient as the nurse and return its id."""
    def _register(name="Asha", age=30, gender="female", contact="555-1", address="X", history=None):
        return service.register_patient(
            NURSE, name, age, gender, contact, address, history if history is not None else ["asthma"]
        )
    return _register


@pytest.fixture
def new_visit(service):
    def _new_visit(patient_id, date=START_NS, symptoms=None, diagnosis="Viral fever"):
        return service.create_clinical_visit(
            NURSE, patient_id, date, symptoms or ["fever"], diagnosis, ["rest"], None
        )
    return _new_visit
