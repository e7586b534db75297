import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from portfolioflow.ai import ollama
from portfolioflow.auth.auth import register_user
from portfolioflow.chat.session import chat_sessions
from portfolioflow.db.db import SessionLocal
from portfolioflow.db.dbmodels import Base
from portfolioflow.main import create_app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"


class FakeModelResponse:
    """Stands in for a requests.Response from the Ollama API."""

    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.text = json.dumps(payload)

    def json(self):
        return self.payload


@pytest.fixture(autouse=True)
def test_db(tmp_path):
    """Point SessionLocal at a fresh SQLite file for each test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    original_bind = SessionLocal.kw["bind"]
    SessionLocal.configure(bind=engine)
    yield engine
    SessionLocal.configure(bind=original_bind)
    engine.dispose()


@pytest.fixture(autouse=True)
def offline_model(monkeypatch):
    """No test talks to a real model server unless it patches one in."""
    def refuse(path, payload):
        raise ollama.ModelCallError("model server not available in tests")

    monkeypatch.setattr(ollama, "_post", refuse)


@pytest.fixture(autouse=True)
def reset_chat_sessions():
    chat_sessions.clear()
    yield
    chat_sessions.clear()


@pytest.fixture()
def app():
    """Create and configure a new FastAPI app instance for each test."""
    return create_app()


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture()
def admin_user(test_db):
    db = SessionLocal()
    try:
        return register_user(db, ADMIN_USERNAME, ADMIN_PASSWORD)
    finally:
        db.close()


@pytest.fixture()
def admin_client(client, admin_user):
    """A test client logged in to the admin panel."""
    response = client.post("/admin/login", data={
        "username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client
