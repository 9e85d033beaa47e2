"""Pytest configuration and fixtures."""

import os

# Settings are read at import time
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["GATEWAY_PROVIDER"] = "sql"
os.environ["AUTH_PROVIDER"] = "local"
os.environ["SMTP_HOST"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory_console.database import Base, get_db
from inventory_console.gateway.sql_gateway import SqlDataGateway
from inventory_console.main import app
from inventory_console.services.auth_service import LocalAuthProvider


@pytest.fixture
def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_db(test_engine):
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def gateway(test_db):
    """SQL gateway over the test database."""
    return SqlDataGateway(test_db)


@pytest.fixture
def session_token():
    """Session token of a signed-in staff member."""
    provider = LocalAuthProvider()
    return provider.exchange(provider.issue_magic_link_token("staff@example.com")).access_token


@pytest.fixture
def client_with_db(test_db):
    """Create a test client with database session override."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client_with_db, session_token):
    """Test client sending a valid session token."""
    client_with_db.headers.update({"Authorization": f"Bearer {session_token}"})
    return client_with_db
