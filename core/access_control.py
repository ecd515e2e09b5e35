import logging

from sqlalchemy.orm import Session

from core.errors import Unauthorized, ValidationError
from models.user import UserAccount, UserRole

logger = logging.getLogger(__name__)


def role_rank(role: UserRole) -> int:
    """Position of a role in guest < user < admin."""
    if role is UserRole.guest:
        return 0
    if role is UserRole.user:
        return 1
    if role is UserRole.admin:
        return 2
    raise ValueError(f"Unknown role: {role!r}")


def parse_role(value) -> UserRole:
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid role {value!r}. Expected guest, user, or admin.") from None


def is_anonymous(principal: str | None) -> bool:
    return not (principal or "").strip()


def role_of(db: Session, principal: str | None) -> UserRole:
    """Resolve a caller to a role; unknown or anonymous callers are guests."""
    if is_anonymous(principal):
        return UserRole.guest

    account = db.get(UserAccount, principal)
    if account is None:
        return UserRole.guest
    return account.access_role


def has_role(db: Session, principal: str | None, minimum: UserRole) -> bool:
    return role_rank(role_of(db, principal)) >= role_rank(minimum)


def require_role(db: Session, principal: str | None, minimum: UserRole):
    """Raise Unauthorized unless the caller holds at least `minimum`."""
    current = role_of(db, principal)
    if role_rank(current) < role_rank(minimum):
        logger.warning(
            "Access denied for %r: requires %s, has %s",
            principal, minimum.value, current.value,
        )
        raise Unauthorized(f"This operation requires the '{minimum.value}' role.")
    return current
