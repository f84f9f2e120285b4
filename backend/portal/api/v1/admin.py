"""
Admin API endpoints.

HR and administrator account management. Every route is gated on the ADMIN
role; the guard runs as a dependency, before any handler touches the store.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from portal.api.v1.auth import CamelModel, UserResponse, require_admin
from portal.core.logging import get_logger
from portal.db.session import get_db
from portal.models import Role
from portal.services import (
    SessionUser,
    change_hr_password,
    create_hr_user,
    delete_admin_user,
    delete_hr_user,
    get_admin_user,
    get_hr_user,
    update_admin_user,
    update_hr_user,
)
from portal.services.users import list_users_by_role

router = APIRouter()

logger = get_logger("admin")


class HRUserList(BaseModel):
    users: list[UserResponse]


class HRUserCreate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None


class HRUserCreated(BaseModel):
    message: str
    user: UserResponse


class HRUserDetail(CamelModel):
    hr_user: UserResponse


class HRUserUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    linkedin_profile: Optional[str] = None


class HRUserUpdated(CamelModel):
    message: str
    hr_user: UserResponse


class PasswordChange(BaseModel):
    password: Optional[str] = None


class PasswordTarget(BaseModel):
    id: str
    email: str


class PasswordChanged(BaseModel):
    message: str
    user: PasswordTarget


class Message(BaseModel):
    message: str


class AdminDetail(BaseModel):
    admin: UserResponse


class AdminUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class AdminUpdated(BaseModel):
    message: str
    admin: UserResponse


@router.get("/hr-users", response_model=HRUserList)
def list_hr_users(
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """All HR users, newest first."""
    users = list_users_by_role(db, Role.HR.value)
    return HRUserList(users=[UserResponse.model_validate(u) for u in users])


@router.post("/hr-users", response_model=HRUserCreated, status_code=status.HTTP_201_CREATED)
def create_hr(
    body: HRUserCreate,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Provision a new HR account."""
    user = create_hr_user(
        db,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=body.password,
        phone_number=body.phone_number,
    )
    logger.info("Admin %s created HR user %s", admin.id, user.id)

    return HRUserCreated(
        message="HR user created successfully",
        user=UserResponse.model_validate(user),
    )


@router.get("/hr-users/{user_id}", response_model=HRUserDetail)
def get_hr(
    user_id: str,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = get_hr_user(db, user_id)
    return HRUserDetail(hr_user=UserResponse.model_validate(user))


@router.put("/hr-users/{user_id}", response_model=HRUserUpdated)
def update_hr(
    user_id: str,
    body: HRUserUpdate,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = update_hr_user(db, user_id, body.model_dump(exclude_unset=True))
    logger.info("Admin %s updated HR user %s", admin.id, user.id)

    return HRUserUpdated(
        message="HR user updated successfully",
        hr_user=UserResponse.model_validate(user),
    )


@router.delete("/hr-users/{user_id}", response_model=Message)
def delete_hr(
    user_id: str,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    delete_hr_user(db, user_id)
    logger.info("Admin %s deleted HR user %s", admin.id, user_id)
    return Message(message="HR user deleted successfully")


@router.put("/hr-users/{user_id}/password", response_model=PasswordChanged)
def change_hr_user_password(
    user_id: str,
    body: PasswordChange,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Reset an HR member's password. The new password is stored hashed."""
    user = change_hr_password(db, user_id, body.password)
    logger.info("Admin %s changed password of HR user %s", admin.id, user.id)

    return PasswordChanged(
        message="Password updated successfully",
        user=PasswordTarget(id=user.id, email=user.email),
    )


@router.get("/admins/{user_id}", response_model=AdminDetail)
def get_admin(
    user_id: str,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = get_admin_user(db, user_id)
    return AdminDetail(admin=UserResponse.model_validate(user))


@router.put("/admins/{user_id}", response_model=AdminUpdated)
def update_admin(
    user_id: str,
    body: AdminUpdate,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Update an administrator. A non-empty password replaces the current one."""
    user = update_admin_user(db, user_id, body.model_dump(exclude_unset=True))

    return AdminUpdated(
        message="Admin updated successfully",
        admin=UserResponse.model_validate(user),
    )


@router.delete("/admins/{user_id}", response_model=Message)
def delete_admin(
    user_id: str,
    admin: SessionUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Remove another administrator. Admins cannot delete themselves."""
    delete_admin_user(db, user_id, admin.id)
    return Message(message="Admin deleted successfully")
