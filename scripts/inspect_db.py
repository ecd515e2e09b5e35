from core.config import Config
from core.database import RecordStore, COLLECTIONS
from core.id_allocator import peek_last_id
from models import Patient, ClinicalVisit, FollowUp, Prescription, UserAccount
from services.user_service import get_admins

MODELS = {
    "patients": Patient,
    "clinical_visits": ClinicalVisit,
    "follow_ups": FollowUp,
    "prescriptions": Prescription,
    "user_accounts": UserAccount,
}


def main():
    print("DB:", Config.DATABASE_URL)
    store = RecordStore()
    with store.session() as db:
        for name in COLLECTIONS:
            rows = db.query(MODELS[name]).count()
            if name == "user_accounts":
                print(f"{name}: {rows} rows")
            else:
                print(f"{name}: {rows} rows, last id {peek_last_id(db, name)}")
        print("admins:", [a.principal for a in get_admins(db)])
    store.dispose()


if __name__ == "__main__":
    main()
