from portal.services.users import (
    email_exists,
    get_user_by_email,
    get_user_by_id,
    normalize_email,
)
from portal.services.credentials import (
    DemoAccounts,
    SessionUser,
    get_demo_accounts,
    validate_credentials,
)
from portal.services.sessions import issue_token, resolve_session
from portal.services.accounts import (
    change_hr_password,
    create_hr_user,
    delete_admin_user,
    delete_hr_user,
    get_admin_user,
    get_hr_user,
    register_applicant,
    update_admin_user,
    update_hr_user,
    update_profile,
)

__all__ = [
    "email_exists",
    "get_user_by_email",
    "get_user_by_id",
    "normalize_email",
    "DemoAccounts",
    "SessionUser",
    "get_demo_accounts",
    "validate_credentials",
    "issue_token",
    "resolve_session",
    "change_hr_password",
    "create_hr_user",
    "delete_admin_user",
    "delete_hr_user",
    "get_admin_user",
    "get_hr_user",
    "register_applicant",
    "update_admin_user",
    "update_hr_user",
    "update_profile",
]
