"""
Profile API endpoints for the signed-in user.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from portal.api.v1.auth import CamelModel, UserResponse, get_current_session
from portal.core.errors import NotFound
from portal.db.session import get_db
from portal.models import User
from portal.services import SessionUser, get_user_by_id, update_profile

router = APIRouter()


class ProfileResponse(BaseModel):
    user: UserResponse


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    linkedin_profile: Optional[str] = None


class ProfileUpdated(BaseModel):
    message: str
    user: UserResponse


def _own_user(db: Session, session_user: SessionUser) -> User:
    # Demo sessions have no stored profile
    user = None if session_user.is_demo else get_user_by_id(db, session_user.id)
    if user is None:
        raise NotFound()
    return user


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    session_user: SessionUser = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return ProfileResponse(user=UserResponse.model_validate(_own_user(db, session_user)))


@router.patch("/profile", response_model=ProfileUpdated)
def patch_profile(
    body: ProfileUpdate,
    session_user: SessionUser = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Update the caller's own contact details and LinkedIn profile."""
    user = update_profile(db, _own_user(db, session_user), body.model_dump(exclude_unset=True))

    return ProfileUpdated(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user),
    )
