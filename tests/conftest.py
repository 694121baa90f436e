"""
Shared fixtures for the test suite.

Applications are built against an in-memory SQLite store so tests never
touch the filesystem or the network.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.infrastructure.tours.tour_repository import SqlTourRepository, build_engine
from app.main import create_app


@pytest.fixture
def tour_payload():
    """Factory for a valid tour creation body."""

    def _payload(**overrides):
        payload = {
            "name": "The Forest Hiker",
            "duration": 5,
            "max_group_size": 25,
            "difficulty": "easy",
            "price": 397,
            "summary": "Breathtaking hike through the Canadian Banff National Park",
            "image_cover": "tour-1-cover.jpg",
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def repository():
    """A tour repository backed by a fresh in-memory database."""
    engine = build_engine("sqlite://")
    repo = SqlTourRepository(engine=engine)
    repo.create_schema()
    yield repo
    engine.dispose()


@pytest.fixture
def make_client():
    """Factory building a started TestClient for the given settings overrides."""
    clients = []

    def _make(**overrides) -> TestClient:
        values = {"database_url": "sqlite://", "app_env": "production"}
        values.update(overrides)
        client = TestClient(create_app(Settings(**values)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)
