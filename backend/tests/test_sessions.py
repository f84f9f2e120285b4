from datetime import datetime, timedelta, timezone

import jwt

from portal.core.config import settings
from portal.core.security import create_access_token, decode_access_token
from portal.models import Role, User
from portal.services import DemoAccounts, SessionUser, issue_token, resolve_session


def test_resolves_store_user(db, make_user, demo_accounts):
    user = make_user("hr@example.com", role=Role.HR)
    token = issue_token(SessionUser.from_user(user))

    session_user = resolve_session(db, token, demo_accounts)

    assert session_user.id == user.id
    assert session_user.role == "HR"


def test_role_is_reread_from_store(db, make_user, demo_accounts):
    user = make_user("hr@example.com", role=Role.HR)
    token = issue_token(SessionUser.from_user(user))

    stored = db.get(User, user.id)
    stored.role = Role.ADMIN.value
    db.commit()

    assert resolve_session(db, token, demo_accounts).role == "ADMIN"


def test_deleted_user_loses_session(db, make_user, demo_accounts):
    user = make_user("gone@example.com")
    token = issue_token(SessionUser.from_user(user))

    db.delete(db.get(User, user.id))
    db.commit()

    assert resolve_session(db, token, demo_accounts) is None


def test_expired_token_resolves_to_nothing(db, make_user, demo_accounts):
    user = make_user("late@example.com")
    claims = SessionUser.from_user(user).to_claims()
    token = create_access_token(user.id, claims, expires_delta=timedelta(minutes=-1))

    assert resolve_session(db, token, demo_accounts) is None


def test_missing_token(db, demo_accounts):
    assert resolve_session(db, None, demo_accounts) is None
    assert resolve_session(db, "", demo_accounts) is None


def test_token_without_subject(db, demo_accounts):
    token = jwt.encode(
        {
            "email": "admin@amealio.com",
            "role": "ADMIN",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    assert resolve_session(db, token, demo_accounts) is None


def test_demo_session(db, demo_accounts):
    demo_user = demo_accounts.validate("hr@amealio.com", "hr123")
    token = issue_token(demo_user)

    session_user = resolve_session(db, token, demo_accounts)

    assert session_user == demo_user
    assert session_user.is_demo


def test_demo_session_ends_when_demo_accounts_disabled(db, demo_accounts):
    token = issue_token(demo_accounts.validate("hr@amealio.com", "hr123"))

    assert resolve_session(db, token, DemoAccounts(enabled=False)) is None


def test_demo_role_comes_from_configuration_not_token(db, demo_accounts):
    forged = create_access_token("user@amealio.com", {
        "email": "user@amealio.com",
        "name": "John Doe",
        "role": "ADMIN",
    })

    assert resolve_session(db, forged, demo_accounts).role == "APPLICANT"


def test_claims_carry_linked_profile():
    session_user = SessionUser(
        id="1", email="a@b.com", name="A B", role="APPLICANT",
        linkedin_profile="https://linkedin.com/in/ab",
    )

    claims = session_user.to_claims()

    assert "sub" not in claims
    assert claims["role"] == "APPLICANT"
    assert claims["linkedin_profile"] == "https://linkedin.com/in/ab"
    assert "password" not in claims


def test_issued_token_subject_is_session_id(make_user):
    user = make_user("subject@example.com")

    payload = decode_access_token(issue_token(SessionUser.from_user(user)))

    assert payload["sub"] == user.id
    assert payload["email"] == "subject@example.com"
    assert "iat" in payload


def test_stored_account_shadows_live_demo_token(db, make_user, demo_accounts):
    token = issue_token(demo_accounts.validate("admin@amealio.com", "admin123"))
    assert resolve_session(db, token, demo_accounts).is_demo

    # Someone registers the demo email as an ordinary applicant
    make_user("admin@amealio.com", role=Role.APPLICANT)

    assert resolve_session(db, token, demo_accounts) is None
