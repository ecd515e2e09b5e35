from sqlalchemy.orm import Session

from models.patient import Patient


def _matches(term: str, value: str | None) -> bool:
    return term in (value or "").casefold()


def _search(db: Session, term: str | None, field: str):
    # An empty search box must not dump the whole registry
    needle = (term or "").casefold()
    if not needle:
        return []

    patients = db.query(Patient).order_by(Patient.id).all()
    return [p for p in patients if _matches(needle, getattr(p, field))]


def search_patients_by_name(db: Session, term: str | None):
    """Case-insensitive substring match on patient name."""
    return _search(db, term, "name")


def search_patients_by_contact(db: Session, term: str | None):
    """Case-insensitive substring match on contact number."""
    return _search(db, term, "contact_number")
