import enum

from sqlalchemy import Column, String, BigInteger, Enum
from core.database import Base


class UserRole(str, enum.Enum):
    guest = "guest"
    user = "user"
    admin = "admin"


class UserAccount(Base):
    __tablename__ = "user_accounts"

    principal = Column(String, primary_key=True)

    # Saved profile; name is None until the principal saves one
    name = Column(String, nullable=True)
    profile_role = Column(String, nullable=True)  # job title, e.g. "Doctor"

    access_role = Column(
        Enum(UserRole, native_enum=False, length=16),
        nullable=False,
        default=UserRole.guest,
    )

    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    @property
    def has_profile(self) -> bool:
        return self.name is not None

    def __repr__(self):
        return f"<UserAccount {self.principal} ({self.access_role.value})>"
