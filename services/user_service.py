import logging

from sqlalchemy.orm import Session

from core.access_control import is_anonymous, parse_role
from core.errors import ValidationError
from models.user import UserAccount, UserRole

logger = logging.getLogger(__name__)


def _get_or_create_account(db: Session, principal: str, now: int) -> UserAccount:
    account = db.get(UserAccount, principal)
    if account is None:
        account = UserAccount(
            principal=principal,
            access_role=UserRole.guest,
            created_at=now,
            updated_at=now,
        )
        db.add(account)
    return account


def get_profile(db: Session, principal: str):
    """Return the saved profile for a principal, or None if there is none."""
    account = db.get(UserAccount, principal)
    if account is None or not account.has_profile:
        return None
    return account


def save_profile(db: Session, principal: str, name: str, profile_role: str | None, now: int) -> UserAccount:
    """Create or replace a principal's profile.

    The profile role is a free-text job title and never touches access_role.
    """
    if is_anonymous(principal):
        raise ValidationError("Anonymous callers cannot save a profile.")

    account = _get_or_create_account(db, principal, now)
    account.name = name or ""
    account.profile_role = profile_role or ""
    account.updated_at = now
    db.flush()
    logger.info("Saved profile for %s", principal)
    return account


def assign_role(db: Session, principal: str, role, now: int) -> UserAccount:
    if is_anonymous(principal):
        raise ValidationError("Cannot assign a role to an anonymous principal.")

    account = _get_or_create_account(db, principal, now)
    account.access_role = parse_role(role)
    account.updated_at = now
    db.flush()
    logger.info("Assigned role %s to %s", account.access_role.value, principal)
    return account


def ensure_admin_principals(db: Session, principals, now: int):
    """
    Grants admin to the configured bootstrap principals on a fresh database.
    """
    granted = []
    for principal in principals:
        account = db.get(UserAccount, principal)
        if account is not None and account.access_role is UserRole.admin:
            continue
        assign_role(db, principal, UserRole.admin, now)
        granted.append(principal)
    return granted


def get_admins(db: Session):
    return (
        db.query(UserAccount)
        .filter(UserAccount.access_role == UserRole.admin)
        .order_by(UserAccount.principal)
        .all()
    )
