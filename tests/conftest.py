"""
Shared fixtures: an in-memory SQLite database and a TestClient whose
database session and authenticated user are swapped through
``app.dependency_overrides``.
"""
import os

# must be set before myskool.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from myskool.database import Base, get_db
from myskool.main import app
from myskool.models.program import Program
from myskool.models.user import User
from myskool.utils.auth import get_current_user


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def fetch_programs() -> list[Program]:
    """Read the program table through a fresh session, ordered by id."""
    with TestingSessionLocal() as session:
        return session.query(Program).order_by(Program.id).all()


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def current_user(db):
    user = User(username="user", password_hash="not-a-real-hash", role="user")
    db.add(user)
    db.commit()
    db.refresh(user)
    # detached so the app threads can read it without touching this session
    db.expunge(user)
    return user


@pytest.fixture()
def client(db, current_user):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def anonymous_client(db):
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
