"""Pytest configuration and fixtures."""

import asyncio
import tempfile
import time
from pathlib import Path

import jwt
import pytest
from fastapi.testclient import TestClient

from treino.config import Settings
from treino.db import init_db
from treino.models import ExerciseDraft, Intensity, TemplateDraft
from treino.services import WorkoutService
from treino.web import create_app

TEST_SECRET = "treino-test-secret-0123456789abcdef"


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema applied."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def service(db_path):
    return WorkoutService.for_database(db_path)


@pytest.fixture
def test_settings(temp_db_path):
    return Settings(
        _env_file=None,
        environment="test",
        database_path=temp_db_path,
        auth_provider="shared_secret",
        jwt_secret=TEST_SECRET,
    )


@pytest.fixture
def make_token():
    """Mint HS256 tokens accepted by the test app."""

    def _make(user_id="user-1", email=None, secret=TEST_SECRET, expires_in=3600):
        now = int(time.time())
        payload = {"iat": now, "exp": now + expires_in}
        if user_id is not None:
            payload["sub"] = user_id
        if email:
            payload["email"] = email
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token('user-1')}"}


@pytest.fixture
def client(test_settings):
    """TestClient running the app lifespan (schema creation)."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def sample_template_draft():
    """A push-day template with two exercises and two tags."""
    return TemplateDraft(
        title="Push Day",
        description="Chest, shoulders, triceps",
        intensity=Intensity.HIGH,
        duration_seconds=3600,
        exercises=[
            ExerciseDraft(name="Bench Press", sets=4, reps=6, rest_seconds=180, weight=80.0, rpe=8.5),
            ExerciseDraft(name="Overhead Press", sets=3, reps=8, notes="strict"),
        ],
        tags=["push", "strength"],
    )
