"""Pytest configuration and fixtures."""

import os

# Must be set before the application modules create their engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from propdash.core.database import Base, SessionLocal, engine  # noqa: E402
from propdash.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def clean_database():
    """Provide empty tables for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    """A database session on the test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """Create a test client with proper lifespan handling."""
    with TestClient(app) as c:
        yield c
