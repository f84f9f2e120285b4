import os
from datetime import datetime

# Cheap hashes and no on-disk database while testing; must precede portal imports
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.core.config import DEFAULT_DEMO_ACCOUNTS, settings
from portal.core.security import get_password_hash
from portal.db.base import Base
from portal.db.session import get_db
from portal.main import app
from portal.models import Role, User
from portal.services import DemoAccounts, SessionUser, get_demo_accounts, issue_token

API = settings.API_PREFIX


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def demo_accounts():
    return DemoAccounts(DEFAULT_DEMO_ACCOUNTS)


@pytest.fixture
def client(session_factory, demo_accounts):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_demo_accounts] = lambda: demo_accounts
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """Insert a user straight into the store and return a detached copy."""

    def _make(
        email,
        password="password123",
        role=Role.APPLICANT,
        first_name="Test",
        last_name="User",
        created_at=None,
    ):
        with session_factory() as session:
            user = User(
                email=email,
                password=get_password_hash(password),
                role=role.value,
                first_name=first_name,
                last_name=last_name,
                created_at=created_at or datetime.utcnow(),
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user

    return _make


@pytest.fixture
def fetch_user(session_factory):
    """Read a user back from the store in a fresh session."""

    def _fetch(user_id):
        with session_factory() as session:
            user = session.get(User, user_id)
            if user is not None:
                session.expunge(user)
            return user

    return _fetch


def bearer(user) -> dict:
    """Authorization header for a stored user or a SessionUser."""
    session_user = user if isinstance(user, SessionUser) else SessionUser.from_user(user)
    return {"Authorization": f"Bearer {issue_token(session_user)}"}


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", role=Role.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)
