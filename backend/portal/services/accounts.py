"""
Account management.

Registration, HR and admin account maintenance, HR password resets and
profile updates. Each operation validates its input, raises a
``PortalError`` kind on failure, and hashes every password it writes.
"""

import re
from typing import Optional

from sqlalchemy.orm import Session

from portal.core.config import settings
from portal.core.errors import (
    EmailConflict,
    InvalidEmail,
    InvalidProfile,
    MissingField,
    NotFound,
    SelfDeletion,
    WeakPassword,
    WrongRole,
)
from portal.core.logging import get_logger
from portal.core.security import BCRYPT_MAX_BYTES, get_password_hash, password_too_long
from portal.models import Role, User
from portal.services import users

logger = get_logger("accounts")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def _require(*values: Optional[str]) -> None:
    if any(value is None or not str(value).strip() for value in values):
        raise MissingField()


def _check_password(password: str, min_length: int, too_short: str) -> None:
    if len(password) < min_length:
        raise WeakPassword(too_short)
    # Longer input would be silently truncated by bcrypt
    if password_too_long(password):
        raise WeakPassword(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")


def _check_new_account(
    db: Session,
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> None:
    _require(first_name, last_name, email, password)

    if not is_valid_email(email.strip()):
        raise InvalidEmail()

    min_length = settings.REGISTRATION_MIN_PASSWORD_LENGTH
    _check_password(password, min_length, f"Password must be at least {min_length} characters long")

    if users.email_exists(db, email):
        raise EmailConflict()


def _create_account(
    db: Session,
    role: Role,
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    phone_number: Optional[str] = None,
) -> User:
    _check_new_account(db, first_name, last_name, email, password)

    user = users.create_user(
        db,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=email,
        password_hash=get_password_hash(password),
        phone_number=phone_number or None,
        role=role.value,
    )
    logger.info("Created %s account %s", role.value, user.id)
    return user


def register_applicant(
    db: Session,
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    phone_number: Optional[str] = None,
) -> User:
    """Self-registration; the new account is always an APPLICANT."""
    return _create_account(db, Role.APPLICANT, first_name, last_name, email, password, phone_number)


def create_hr_user(
    db: Session,
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    phone_number: Optional[str] = None,
) -> User:
    return _create_account(db, Role.HR, first_name, last_name, email, password, phone_number)


def get_hr_user(db: Session, user_id: str) -> User:
    return _get_with_role(db, user_id, Role.HR, "HR user not found")


def get_admin_user(db: Session, user_id: str) -> User:
    return _get_with_role(db, user_id, Role.ADMIN, "Admin not found")


def _get_with_role(db: Session, user_id: str, role: Role, message: str) -> User:
    user = users.get_user_by_id(db, user_id)
    if user is None or user.role != role.value:
        raise NotFound(message)
    return user


def change_hr_password(db: Session, user_id: str, password: Optional[str]) -> User:
    """
    Reset an HR member's password.

    The minimum length here (``HR_RESET_MIN_PASSWORD_LENGTH``) is lower than
    the one for self-registration. Non-HR targets are refused and left
    untouched.
    """
    min_length = settings.HR_RESET_MIN_PASSWORD_LENGTH
    password = (password or "").strip()
    _check_password(password, min_length, f"Password must be at least {min_length} characters")

    user = users.get_user_by_id(db, user_id)
    if user is None:
        raise NotFound()
    if user.role != Role.HR.value:
        raise WrongRole()

    users.update_password_hash(db, user, get_password_hash(password))
    logger.info("Password reset for HR user %s", user.id)
    return user


def _profile_changes(fields: dict, allowed: tuple[str, ...]) -> dict:
    return {name: value for name, value in fields.items() if name in allowed and value is not None}


def _save_account_changes(db: Session, user: User, changes: dict) -> User:
    """Validate names and email in ``changes`` and persist them."""
    for name in ("first_name", "last_name", "email"):
        if name in changes:
            changes[name] = changes[name].strip()
            if not changes[name]:
                raise MissingField()

    if "email" in changes:
        if not is_valid_email(changes["email"]):
            raise InvalidEmail()
        other = users.get_user_by_email(db, changes["email"])
        if other is not None and other.id != user.id:
            raise EmailConflict()

    return users.update_user_fields(db, user, changes)


def update_hr_user(db: Session, user_id: str, fields: dict) -> User:
    user = get_hr_user(db, user_id)
    changes = _profile_changes(
        fields,
        ("first_name", "last_name", "email", "phone_number", "address", "linkedin_profile"),
    )
    return _save_account_changes(db, user, changes)


def delete_hr_user(db: Session, user_id: str) -> None:
    user = get_hr_user(db, user_id)
    users.delete_user(db, user)
    logger.info("Deleted HR user %s", user_id)


def update_admin_user(db: Session, user_id: str, fields: dict) -> User:
    """
    Update an administrator's name and email, and optionally the password.

    Names and email are all required; a blank password leaves the current
    one in place.
    """
    _require(fields.get("first_name"), fields.get("last_name"), fields.get("email"))
    user = get_admin_user(db, user_id)

    changes = _profile_changes(fields, ("first_name", "last_name", "email"))

    password = fields.get("password") or ""
    if password.strip():
        min_length = settings.REGISTRATION_MIN_PASSWORD_LENGTH
        _check_password(password, min_length, f"Password must be at least {min_length} characters long")
        changes["password"] = get_password_hash(password)

    user = _save_account_changes(db, user, changes)
    logger.info("Updated admin %s%s", user.id, " (password changed)" if "password" in changes else "")
    return user


def delete_admin_user(db: Session, user_id: str, acting_user_id: str) -> None:
    if user_id == acting_user_id:
        raise SelfDeletion()

    user = get_admin_user(db, user_id)
    users.delete_user(db, user)
    logger.info("Admin %s deleted admin %s", acting_user_id, user_id)


def update_profile(db: Session, user: User, fields: dict) -> User:
    """Self-service profile update for the signed-in user."""
    changes = _profile_changes(
        fields,
        ("first_name", "last_name", "phone_number", "address", "linkedin_profile"),
    )

    # Blank names keep their current value
    for name in ("first_name", "last_name"):
        if name in changes:
            changes[name] = changes[name].strip()
            if not changes[name]:
                del changes[name]

    if "linkedin_profile" in changes:
        profile = changes["linkedin_profile"].strip()
        if profile and "linkedin.com" not in profile:
            raise InvalidProfile()
        changes["linkedin_profile"] = profile or None

    return users.update_user_fields(db, user, changes)
