import os

# Configure before clubhub.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clubhub.api.routes import auth as auth_routes
from clubhub.app import app
from clubhub.core.database import build_engine, get_db
from clubhub.models.base import Base


class ClubHubApi:
    """Thin helpers over the HTTP API so tests read as user flows."""

    def __init__(self, client: TestClient):
        self.client = client

    def _session(self, body: dict) -> dict:
        return {
            "id": body["principal"]["user_id"],
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
            "principal": body["principal"],
        }

    def register_student(self, email="student@example.com", full_name="Sam Student"):
        resp = self.client.post(
            "/api/auth/register",
            json={"email": email, "password": "secret123", "full_name": full_name},
        )
        assert resp.status_code == 200, resp.text
        return self._session(resp.json())

    def register_admin(self, email="admin@example.com", full_name="Alex Admin"):
        resp = self.client.post(
            "/api/auth/admin/register",
            json={
                "email": email,
                "password": "secret123",
                "full_name": full_name,
                "school_name": "Springfield High",
            },
        )
        assert resp.status_code == 200, resp.text
        return self._session(resp.json())

    def create_club(self, admin, name="Chess Club", description="Weekly chess meetups"):
        resp = self.client.post(
            "/api/admin/clubs",
            json={"name": name, "description": description, "category": "Games"},
            headers=admin["headers"],
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    def assign_president(self, admin, club_id, profile_id):
        resp = self.client.put(
            f"/api/admin/clubs/{club_id}/president",
            json={"profile_id": profile_id},
            headers=admin["headers"],
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    def join(self, student, club_id):
        resp = self.client.post(f"/api/clubs/{club_id}/join", headers=student["headers"])
        assert resp.status_code == 200, resp.text
        return resp.json()

    def decide(self, actor, membership_id, action):
        return self.client.post(
            f"/api/memberships/{membership_id}/{action}", headers=actor["headers"]
        )

    def notifications(self, user):
        resp = self.client.get("/api/notifications", headers=user["headers"])
        assert resp.status_code == 200, resp.text
        return resp.json()


@pytest.fixture(autouse=True)
def open_admin_registration(monkeypatch):
    monkeypatch.setattr(auth_routes, "ADMIN_TOKEN", None)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def api(client):
    return ClubHubApi(client)


@pytest.fixture
def admin(api):
    return api.register_admin()


@pytest.fixture
def student(api):
    return api.register_student()


@pytest.fixture
def club(api, admin):
    return api.create_club(admin)


@pytest.fixture
def presided_club(api, admin, club):
    """A club with a president, returned as (club, president session)."""
    president = api.register_student(email="pres@example.com", full_name="Pat President")
    api.assign_president(admin, club["id"], president["id"])
    return club, president
