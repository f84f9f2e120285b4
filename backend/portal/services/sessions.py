"""
Session tokens.

Tokens are stateless signed JWTs, but the role they carry is only a hint:
``resolve_session`` re-reads identity and role from the credential store
(or the demo account set) on every call, so role changes and deletions
take effect on the next request.
"""

from typing import Optional

from sqlalchemy.orm import Session

from portal.core.logging import get_logger
from portal.core.security import create_access_token, decode_access_token
from portal.services.credentials import DemoAccounts, SessionUser
from portal.services.users import get_user_by_email, get_user_by_id

logger = get_logger("sessions")


def issue_token(session_user: SessionUser) -> str:
    return create_access_token(session_user.id, session_user.to_claims())


def resolve_session(
    db: Session,
    token: Optional[str],
    demo_accounts: DemoAccounts,
) -> Optional[SessionUser]:
    """
    Resolve a bearer token into the caller's current session.

    Returns None for a missing, expired or tampered token, and for a token
    whose user no longer exists.
    """
    if not token:
        return None

    payload = decode_access_token(token)
    if payload is None:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    user = get_user_by_id(db, user_id)
    if user is not None:
        current = SessionUser.from_user(user)
        if current.role != payload.get("role"):
            logger.info(
                "Role for user %s changed from %s to %s since token issue",
                current.id, payload.get("role"), current.role,
            )
        return current

    email = payload.get("email", "")
    account = demo_accounts.get(email)
    if account is not None and SessionUser.from_demo(account).id == user_id:
        # A real account with the same email shadows the demo login
        if get_user_by_email(db, email) is not None:
            logger.info("Demo session for %s shadowed by a stored account", email)
            return None
        return SessionUser.from_demo(account)

    logger.info("Token subject %s no longer exists", user_id)
    return None

