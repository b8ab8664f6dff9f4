"""
Pytest configuration and shared fixtures for the Job Application Tracker tests.
"""
import base64
import os

# Must be set before the app module is imported so the module-level app
# is built against an in-memory database.
os.environ.setdefault("TESTING", "true")

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from job_tracker_app.backend.config.settings import Settings
from job_tracker_app.backend.main import create_app
from job_tracker_app.backend.models.db.database import Base, create_db_engine, create_session_factory
from job_tracker_app.backend.models.db.job_application import JobApplication


TEST_PASSWORD = "correct-horse-battery-staple"


def basic_auth(password: str, username: str = "anyone") -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


# Settings Fixtures
@pytest.fixture
def make_settings():
    """Build explicit settings that ignore the developer's environment and .env file."""
    def _make(**overrides):
        values = {
            "testing": True,
            "environment": "testing",
            "demo_mode": False,
            "read_only": None,
            "app_password": TEST_PASSWORD,
            "cors_enabled": False,
            "log_level": "WARNING",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def test_settings(make_settings):
    return make_settings()


# Database Fixtures
@pytest.fixture(scope="function")
def test_db_session():
    """A session bound to a fresh in-memory database."""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def add_job(test_db_session):
    """Insert a job application directly, bypassing the services."""
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _add(**fields):
        counter["n"] += 1
        fields.setdefault("position", "Engineer")
        fields.setdefault("created_at", base_time + timedelta(minutes=counter["n"]))
        job = JobApplication(**fields)
        test_db_session.add(job)
        test_db_session.commit()
        test_db_session.refresh(job)
        return job
    return _add


# Client Fixtures
@pytest.fixture
def make_client(make_settings):
    def _make(**overrides):
        return TestClient(create_app(make_settings(**overrides)))
    return _make


@pytest.fixture
def test_client(make_client):
    """Client for a guarded, writable tracker."""
    return make_client()


@pytest.fixture
def demo_client(make_client):
    """Client for the open, read-only demo tracker."""
    return make_client(demo_mode=True)


@pytest.fixture
def auth_headers():
    return basic_auth(TEST_PASSWORD)


@pytest.fixture
def create_job(test_client, auth_headers):
    """Create a job through the API and return its JSON body."""
    def _create(**fields):
        fields.setdefault("position", "Engineer")
        response = test_client.post("/api/jobs", json=fields, headers=auth_headers)
        assert response.status_code == 200, response.text
        return response.json()
    return _create
