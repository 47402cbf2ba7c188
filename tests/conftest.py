"""
Clips API - Pytest Configuration & Shared Fixtures

Every test gets its own in-memory SQLite database with the clips table
created, plus an application wired to it with a private metrics registry.
"""

import pytest
from fastapi.testclient import TestClient

from clipstream.config import Settings
from clipstream.database import create_database_engine, create_session_factory, sync_schema
from clipstream.main import create_app
from clipstream.metrics import Metrics


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://", environment="test")


@pytest.fixture
def engine(settings):
    engine = create_database_engine(settings.database_url)
    sync_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = create_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def metrics() -> Metrics:
    return Metrics()


@pytest.fixture
def app(settings, engine, metrics):
    return create_app(settings=settings, engine=engine, metrics=metrics)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def clip_payload():
    return {
        "title": "Chill Vibes",
        "description": "Relaxing ambient sound",
        "genre": "ambient",
        "duration": "30s",
        "audioUrl": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-1.mp3",
    }


@pytest.fixture
def create_clip(client, clip_payload):
    """Factory fixture: POST a clip (optionally overriding fields), return its JSON."""

    def _factory(**overrides):
        response = client.post("/clips", json={**clip_payload, **overrides})
        assert response.status_code == 201
        return response.json()

    return _factory
