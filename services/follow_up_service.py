"""
Follow-up appointments.

Stored status is one of scheduled / completed / cancelled. Whether a
scheduled follow-up is "upcoming" or "past" is decided at read time against
the supplied clock value:

    upcoming = not completed and not cancelled and appointment_date > now
    past     = every other non-cancelled follow-up

Cancelling keeps the row (tombstone) so it can still be looked up by id.
"""

import logging

from sqlalchemy.orm import Session

from core.errors import FollowUpNotFound, FollowUpStateError
from core.id_allocator import allocate_id
from models.follow_up import FollowUp, FollowUpStatus
from services.integrity import require_patient, follow_ups_for_patient
from services.visit_service import check_timestamp

logger = logging.getLogger(__name__)


def _require_follow_up(db: Session, follow_up_id: int) -> FollowUp:
    follow_up = db.get(FollowUp, follow_up_id)
    if follow_up is None:
        raise FollowUpNotFound(follow_up_id)
    return follow_up


def schedule_follow_up(db: Session, patient_id: int, appointment_date: int, notes: str) -> FollowUp:
    follow_up = FollowUp(
        patient_id=patient_id,
        appointment_date=check_timestamp(appointment_date, "appointment_date"),
        notes=notes or "",
        completed=False,
        status=FollowUpStatus.scheduled,
    )
    require_patient(db, patient_id)
    follow_up.id = allocate_id(db, FollowUp.__tablename__)

    db.add(follow_up)
    db.flush()
    logger.info("Scheduled follow-up %s for patient %s", follow_up.id, patient_id)
    return follow_up


def mark_follow_up_completed(db: Session, follow_up_id: int) -> FollowUp:
    follow_up = _require_follow_up(db, follow_up_id)

    if follow_up.cancelled:
        raise FollowUpStateError(f"Follow-up {follow_up_id} was cancelled and cannot be completed.")
    if follow_up.completed:
        return follow_up

    follow_up.completed = True
    follow_up.status = FollowUpStatus.completed
    db.flush()
    logger.info("Completed follow-up %s", follow_up_id)
    return follow_up


def cancel_follow_up(db: Session, follow_up_id: int) -> FollowUp:
    follow_up = _require_follow_up(db, follow_up_id)

    if follow_up.cancelled:
        return follow_up
    if follow_up.completed:
        raise FollowUpStateError(f"Follow-up {follow_up_id} is already completed and cannot be cancelled.")

    follow_up.status = FollowUpStatus.cancelled
    db.flush()
    logger.info("Cancelled follow-up %s", follow_up_id)
    return follow_up


def get_follow_up(db: Session, follow_up_id: int):
    return db.get(FollowUp, follow_up_id)


def get_active_follow_ups(db: Session):
    """Every follow-up that has not been cancelled."""
    return (
        db.query(FollowUp)
        .filter(FollowUp.status != FollowUpStatus.cancelled)
        .order_by(FollowUp.id)
        .all()
    )


def get_upcoming_follow_ups(db: Session, patient_id: int, now: int):
    return [f for f in follow_ups_for_patient(db, patient_id) if f.is_upcoming(now)]


def get_past_follow_ups(db: Session, patient_id: int, now: int):
    return [f for f in follow_ups_for_patient(db, patient_id) if not f.is_upcoming(now)]
