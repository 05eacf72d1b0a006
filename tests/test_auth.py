from tests.conftest import auth_headers


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "admin@example.com"})
    assert resp.status_code == 200
    data = resp.json()
    assert "access_token" in data
    assert data["user"]["role"] == "admin"


def test_login_is_case_insensitive(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "  Writer@Example.com "})
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "Writer"


def test_login_unknown_email(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "nobody@example.com"})
    assert resp.status_code == 401


def test_login_inactive_user(client, seed_users, db):
    user = seed_users["editor"]
    user.is_active = False
    db.commit()
    resp = client.post("/api/auth/login", json={"email": "editor@example.com"})
    assert resp.status_code == 401


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "writer@example.com")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "writer@example.com"


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401


def test_me_with_garbage_token(client, seed_users):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_logout(client, seed_users):
    headers = auth_headers(client, "writer@example.com")
    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
