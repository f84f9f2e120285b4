"""
Credential store.

Thin data-access helpers over the ``users`` table. Emails are normalised
(trimmed, lower-cased) on every lookup and write, so uniqueness is
case-insensitive.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.core.errors import EmailConflict
from portal.models import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    """Get a user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def email_exists(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == normalize_email(email)).first() is not None


def create_user(
    db: Session,
    *,
    first_name: str,
    last_name: str,
    email: str,
    password_hash: str,
    role: str,
    phone_number: Optional[str] = None,
) -> User:
    """
    Insert a new user.

    The unique constraint on ``users.email`` is the authoritative guard:
    a concurrent insert that slips past any pre-check surfaces here as
    ``EmailConflict``.
    """
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=normalize_email(email),
        password=password_hash,
        phone_number=phone_number,
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailConflict()
    db.refresh(user)
    return user


def list_users_by_role(db: Session, role: str) -> list[User]:
    """All users with the given role, newest first."""
    return (
        db.query(User)
        .filter(User.role == role)
        .order_by(User.created_at.desc())
        .all()
    )


def update_password_hash(db: Session, user: User, password_hash: str) -> User:
    user.password = password_hash
    db.commit()
    db.refresh(user)
    return user


def update_user_fields(db: Session, user: User, changes: dict) -> User:
    """Apply column changes; an email collision raises ``EmailConflict``."""
    if "email" in changes:
        changes["email"] = normalize_email(changes["email"])
    for field, value in changes.items():
        setattr(user, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailConflict()
    db.refresh(user)
    return user


def delete_user(db: Session, user: User) -> None:
    db.delete(user)
    db.commit()
