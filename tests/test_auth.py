from clubhub.api.routes import auth as auth_routes


def test_register_returns_profile_principal(client, student):
    assert student["principal"]["kind"] == "profile"
    assert student["principal"]["full_name"] == "Sam Student"

    resp = client.get("/api/auth/me", headers=student["headers"])
    assert resp.status_code == 200
    assert resp.json()["principal"] == student["principal"]


def test_register_duplicate_email_conflicts(client, student):
    resp = client.post(
        "/api/auth/register",
        json={"email": "STUDENT@example.com", "password": "another1", "full_name": "Copy"},
    )
    assert resp.status_code == 409


def test_register_rejects_short_password(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "a@example.com", "password": "123", "full_name": "Short"},
    )
    assert resp.status_code == 422


def test_login_with_normalized_email(client, student):
    resp = client.post(
        "/api/auth/login",
        json={"email": "  Student@Example.com ", "password": "secret123"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["principal"]["kind"] == "profile"
    assert body["principal"]["user_id"] == student["id"]
    assert body["token"]


def test_login_wrong_password_is_unauthorized(client, student):
    resp = client.post(
        "/api/auth/login", json={"email": "student@example.com", "password": "wrong-pass"}
    )
    assert resp.status_code == 401

    resp = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
    )
    assert resp.status_code == 401


def test_admin_register_and_login(client, admin):
    assert admin["principal"]["kind"] == "admin"
    assert admin["principal"]["school_name"] == "Springfield High"

    resp = client.post(
        "/api/auth/admin/login", json={"email": "admin@example.com", "password": "secret123"}
    )
    assert resp.status_code == 200
    assert resp.json()["principal"]["kind"] == "admin"

    # The generic login resolves admins too
    resp = client.post(
        "/api/auth/login", json={"email": "admin@example.com", "password": "secret123"}
    )
    assert resp.json()["principal"]["kind"] == "admin"


def test_admin_login_refuses_students(client, student):
    resp = client.post(
        "/api/auth/admin/login",
        json={"email": "student@example.com", "password": "secret123"},
    )
    assert resp.status_code == 403
    assert resp.json()["detail"] == "This account is not registered as an administrator."


def test_admin_register_requires_configured_token(client, monkeypatch):
    monkeypatch.setattr(auth_routes, "ADMIN_TOKEN", "let-me-in")
    payload = {
        "email": "head@example.com",
        "password": "secret123",
        "full_name": "Head of School",
        "school_name": "Springfield High",
    }

    resp = client.post("/api/auth/admin/register", json=payload)
    assert resp.status_code == 403

    resp = client.post(
        "/api/auth/admin/register", json={**payload, "admin_token": "let-me-in"}
    )
    assert resp.status_code == 200


def test_missing_or_bad_token_is_unauthorized(client):
    assert client.get("/api/auth/me").status_code == 401
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_logout_revokes_only_that_token(client, student):
    other = client.post(
        "/api/auth/login", json={"email": "student@example.com", "password": "secret123"}
    ).json()
    other_headers = {"Authorization": f"Bearer {other['token']}"}

    resp = client.post("/api/auth/logout", headers=student["headers"])
    assert resp.status_code == 200

    resp = client.get("/api/auth/me", headers=student["headers"])
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Session has been signed out"

    assert client.get("/api/auth/me", headers=other_headers).status_code == 200


def test_wrong_principal_kind_is_forbidden(client, admin, student):
    assert client.get("/api/clubs", headers=admin["headers"]).status_code == 403
    assert client.get("/api/admin/clubs", headers=student["headers"]).status_code == 403


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
