"""
Authentication API endpoints.

Handles registration, email availability, login with JWT issuance, and the
session/role guards used by every protected router.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from portal.core.config import settings
from portal.core.errors import Forbidden, MissingParameter, Unauthenticated
from portal.core.logging import get_logger
from portal.db.session import get_db
from portal.models import Role
from portal.services import (
    DemoAccounts,
    SessionUser,
    email_exists,
    get_demo_accounts,
    issue_token,
    register_applicant,
    resolve_session,
    validate_credentials,
)

router = APIRouter()

logger = get_logger("auth")

# auto_error is off so a missing header reaches our own Unauthenticated error
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False,
)


# ============== Pydantic Schemas ==============


class CamelModel(BaseModel):
    """Base schema speaking camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserResponse(CamelModel):
    """Schema for user response (without password)."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    linkedin_profile: Optional[str] = None
    role: str
    created_at: datetime


class UserRegister(CamelModel):
    """Schema for applicant self-registration. Presence is checked by the service."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class EmailCheckResponse(BaseModel):
    exists: bool


class SessionResponse(CamelModel):
    """The caller's identity as currently held in the store."""

    id: str
    email: str
    name: str
    role: str
    linkedin_profile: Optional[str] = None
    is_demo: bool = False


class Token(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    token_type: str = "bearer"
    user: SessionResponse


# ============== Guards ==============


def get_current_session(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    demo_accounts: DemoAccounts = Depends(get_demo_accounts),
) -> SessionUser:
    """
    Dependency to get the current session from the bearer token.

    The role is re-read from the credential store on every request.
    Raises Unauthenticated if the token is missing, invalid or expired.
    """
    session_user = resolve_session(db, token, demo_accounts)
    if session_user is None:
        raise Unauthenticated()
    return session_user


def require_role(*roles: Role):
    """Build a dependency that only admits sessions holding one of ``roles``."""
    allowed = {role.value for role in roles}

    def guard(session_user: SessionUser = Depends(get_current_session)) -> SessionUser:
        if session_user.role not in allowed:
            logger.warning(
                "Rejected %s session %s (needs %s)",
                session_user.role, session_user.id, ", ".join(sorted(allowed)),
            )
            raise Forbidden()
        return session_user

    return guard


require_admin = require_role(Role.ADMIN)


# ============== API Endpoints ==============


@router.get("/check-email", response_model=EmailCheckResponse)
def check_email(email: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Report whether an email is already registered.

    Public so the registration form can check availability before submit.
    """
    if not email or not email.strip():
        raise MissingParameter()

    return EmailCheckResponse(exists=email_exists(db, email))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """Register a new applicant account."""
    user = register_applicant(
        db,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        password=user_data.password,
        phone_number=user_data.phone_number,
    )

    return RegisterResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    demo_accounts: DemoAccounts = Depends(get_demo_accounts),
):
    """
    OAuth2 compatible token login.

    The form's ``username`` field carries the email address.
    """
    session_user = validate_credentials(db, form_data.username, form_data.password, demo_accounts)

    if session_user is None:
        raise Unauthenticated("Incorrect email or password")

    logger.info("Login successful for user: %s", session_user.email)
    return Token(
        access_token=issue_token(session_user),
        user=SessionResponse.model_validate(session_user),
    )


@router.get("/session", response_model=SessionResponse)
def get_session(session_user: SessionUser = Depends(get_current_session)):
    """Current session, with the role as it stands in the store now."""
    return SessionResponse.model_validate(session_user)


@router.post("/refresh", response_model=Token)
def refresh(session_user: SessionUser = Depends(get_current_session)):
    """Re-issue a token so the signed claims match the current role."""
    return Token(
        access_token=issue_token(session_user),
        user=SessionResponse.model_validate(session_user),
    )
