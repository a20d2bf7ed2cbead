#!/usr/bin/env python
"""
pytest configuration file

This file contains shared fixtures for all tests.
"""

import os

# Must be set before the app (and its settings) is imported
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = ""
os.environ["SUPABASE_POOL_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, get_db
from app.main import app
from app.repositories import workspace_repository

OWNER_ID = "user_owner"
OTHER_USER_ID = "user_other"


@pytest.fixture
def engine():
    """In-memory SQLite engine with a fresh schema per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session bound to the test engine."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    """TestClient whose requests use the test engine."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def workspace(db_session):
    """Workspace owned by OWNER_ID."""
    return workspace_repository.create_workspace(db_session, user_id=OWNER_ID, title="Main")


@pytest.fixture
def other_workspace(db_session):
    """Workspace owned by someone else."""
    return workspace_repository.create_workspace(db_session, user_id=OTHER_USER_ID, title="Not yours")


@pytest.fixture
def owner_headers() -> dict:
    return {"x-user-id": OWNER_ID}
