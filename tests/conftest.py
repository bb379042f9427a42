"""Shared fixtures: in-memory database, temporary object store, API client."""

import os
import tempfile

# Settings are read at import time, so point them at throwaway locations first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="storage-uploads-"))
os.environ.setdefault("PUBLIC_URL", "http://testserver")
os.environ["SCHEDULER_URL"] = ""
os.environ["SCHEDULER_SIGNING_KEY"] = ""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
import models  # noqa: F401
from main import app
from models.item import Item
from utils.access import Identity
from utils.scheduler import DeletionScheduler, get_scheduler
from utils.storage import LocalObjectStore, get_storage
from utils.tokenJWT import create_access_token

OWNER = Identity(user_id="user-owner", email="owner@example.com")
OTHER = Identity(user_id="user-other", email="other@example.com")
FRIEND = Identity(user_id="user-friend", email="friend@example.com")

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage(tmp_path):
    return LocalObjectStore(tmp_path / "uploads", "http://testserver/uploads")


@pytest.fixture
def scheduler():
    # Disabled: no base URL, no signing key
    return DeletionScheduler(base_url="", token="", signing_key="")


@pytest.fixture
def client(session_factory, storage, scheduler):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_scheduler] = lambda: scheduler
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def headers():
    """Build Authorization headers for an Identity."""
    def _headers(identity: Identity):
        return {"Authorization": f"Bearer {create_access_token(identity.user_id, identity.email)}"}
    return _headers


@pytest.fixture
def make_item(db):
    """Insert an item directly; ``minutes`` offsets updated_at from a fixed base time."""
    def _make_item(identity: Identity, title: str = "Item", visibility: str = "private", minutes: int = 0, **values):
        stamp = BASE_TIME + timedelta(minutes=minutes)
        item = Item(
            user_id=identity.user_id,
            title=title,
            visibility=visibility,
            created_at=stamp,
            updated_at=stamp,
            **values,
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        return item
    return _make_item
