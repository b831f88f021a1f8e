# tests/conftest.py

from __future__ import annotations

import os

# Keep the module-level engine off the developer's database file
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from user_service.core.database import get_db, init_db, register_engine_events
from user_service.core.events import get_event_publisher
from user_service.main import app
from user_service.repositories.user_repository import UserRepository

from .fakes import FakePublisher


@pytest.fixture()
def engine():
    """
    One in-memory SQLite database per test.

    StaticPool hands the same connection to every session, so the
    TestClient's worker threads see the rows written by the test.
    """
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_engine_events(db_engine)
    init_db(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def repository(db: Session) -> UserRepository:
    return UserRepository(db)


@pytest.fixture()
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture()
def client(session_factory, publisher: FakePublisher) -> TestClient:
    """TestClient with the database and event publisher swapped out."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    try:
        # No context manager: startup would create tables on the real engine
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
