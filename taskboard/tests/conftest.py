from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.db.models import User
from taskboard.server import create_app
from taskboard.services.auth import AuthContext
from taskboard.services.task_service import TaskService

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'tasks.db'}",
        secret_key=TEST_SECRET,
    )


@pytest.fixture()
def app(settings: Settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture()
def make_client(app):
    """Build independent clients so two users can hold separate sessions."""

    def _make() -> TestClient:
        # https so the secure session cookie is sent back
        return TestClient(app, base_url="https://testserver")

    return _make


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture()
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def register_and_login(client: TestClient, email: str, password: str = "pw", name=None) -> dict:
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    res = client.post("/api/register", json=body)
    assert res.status_code == 200, res.text
    res = client.post("/api/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()


@pytest.fixture()
def ann(client: TestClient) -> TestClient:
    register_and_login(client, "a@x.com", "pw", "Ann")
    return client


@pytest.fixture()
def bob(make_client) -> TestClient:
    other = make_client()
    register_and_login(other, "b@x.com", "pw", "Bob")
    return other


def auth_context(user_id: int, email: str = "a@x.com") -> AuthContext:
    return AuthContext(id=user_id, email=email, name=None, issued_at=0, expires_at=0)


@pytest.fixture()
def owner(db) -> User:
    user = User(email="owner@x.com", password="not-a-real-hash", name="Owner")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def service(db, owner) -> TaskService:
    return TaskService(db, auth_context(owner.id, owner.email))
