import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String

from portal.db.base import Base


class Role(str, enum.Enum):
    APPLICANT = "APPLICANT"
    HR = "HR"
    ADMIN = "ADMIN"


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Any portal actor: applicant, HR member or administrator."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)  # stored lower-cased
    password = Column(String, nullable=False)  # bcrypt hash, never plaintext
    phone_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    linkedin_profile = Column(String, nullable=True)
    role = Column(String, nullable=False, default=Role.APPLICANT.value, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
