"""
Credential validation.

Checks an email/password pair against the credential store (bcrypt) and,
for emails the store does not know, against the configured demo accounts.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from portal.core.config import DemoAccountConfig, settings
from portal.core.logging import get_logger
from portal.core.security import verify_password
from portal.models import User
from portal.services.users import get_user_by_email, normalize_email

logger = get_logger("credentials")


@dataclass(frozen=True)
class SessionUser:
    """Resolved identity attached to each authenticated request."""

    id: str
    email: str
    name: str
    role: str
    linkedin_profile: Optional[str] = None
    is_demo: bool = False

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            id=user.id,
            email=user.email,
            name=user.full_name,
            role=user.role,
            linkedin_profile=user.linkedin_profile or None,
        )

    @classmethod
    def from_demo(cls, account: DemoAccountConfig) -> "SessionUser":
        email = normalize_email(account.email)
        # Demo accounts have no store row; the email doubles as the id
        return cls(id=email, email=email, name=account.name, role=account.role, is_demo=True)

    def to_claims(self) -> dict:
        claims = {
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }
        if self.linkedin_profile:
            claims["linkedin_profile"] = self.linkedin_profile
        return claims


class DemoAccounts:
    """Immutable set of plaintext fallback logins, keyed by email."""

    def __init__(self, accounts: Iterable[DemoAccountConfig] = (), enabled: bool = True):
        self.enabled = enabled
        self._accounts = {normalize_email(a.email): a for a in accounts}

    def __len__(self) -> int:
        return len(self._accounts) if self.enabled else 0

    def get(self, email: str) -> Optional[DemoAccountConfig]:
        if not self.enabled or not email:
            return None
        return self._accounts.get(normalize_email(email))

    def validate(self, email: str, password: str) -> Optional[SessionUser]:
        account = self.get(email)
        if account is None or account.password != password:
            return None
        return SessionUser.from_demo(account)


@lru_cache()
def get_demo_accounts() -> DemoAccounts:
    """Demo account set built once from settings."""
    return DemoAccounts(settings.DEMO_ACCOUNTS, enabled=settings.DEMO_ACCOUNTS_ENABLED)


def validate_credentials(
    db: Session,
    email: Optional[str],
    password: Optional[str],
    demo_accounts: DemoAccounts,
) -> Optional[SessionUser]:
    """
    Authenticate a user by email and password.

    Returns None on any mismatch; a failed login is not an error.
    """
    if not email or not password:
        return None

    user = get_user_by_email(db, email)
    if user is not None:
        if not verify_password(password, user.password):
            logger.info("Invalid password for user: %s", user.email)
            return None
        return SessionUser.from_user(user)

    demo_user = demo_accounts.validate(email, password)
    if demo_user is None:
        logger.info("User not found: %s", normalize_email(email))
    return demo_user
