"""Shared fixtures: in-memory SQLite, user factory, authenticated TestClient."""

import os
import tempfile

# Settings are read at import time, so configure before importing mychat.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="mychat-uploads-"))
os.environ.setdefault("CHAT_RESPONSE_DELAY_MS", "0")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mychat.core.auth import create_access_token
from mychat.db.session import Base
from mychat.models import ProfileVisibility, User
from mychat.services import AvatarService, ContactService, ProfileService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(
        username=None,
        display_name=None,
        email=None,
        visibility=ProfileVisibility.public,
        bio=None,
    ) -> User:
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            display_name=display_name or username.title(),
            bio=bio,
            profile_visibility=visibility,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def contact_service(db) -> ContactService:
    return ContactService(db)


@pytest.fixture
def avatar_service(tmp_path) -> AvatarService:
    return AvatarService(uploads_dir=tmp_path)


@pytest.fixture
def profile_service(db, contact_service, avatar_service) -> ProfileService:
    return ProfileService(db, contact_service, avatar_service)


def _bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


@pytest.fixture
def auth_headers():
    """auth_headers(user) -> Authorization header for that user."""
    return _bearer


@pytest.fixture
def client(session_factory, tmp_path):
    from fastapi.testclient import TestClient

    from main import app
    from mychat.core.deps import get_avatar_service, get_chat_service
    from mychat.db.session import get_db
    from mychat.services import ChatService

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_avatar_service] = lambda: AvatarService(uploads_dir=tmp_path)
    app.dependency_overrides[get_chat_service] = lambda: ChatService(delay_seconds=0)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
