import os

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_COLORS"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.models import wish_orm  # noqa: F401
from app.services.database import Base, SessionLocal, engine
from main import app


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_wish(client):
    """Create a wish through the API and return its data."""
    def _make_wish(name="Ana", message="Congrats!", attending="ATTENDING"):
        response = client.post("/wishes", json={"name": name, "message": message, "attending": attending})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        return body["data"]
    return _make_wish
