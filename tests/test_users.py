from tests.conftest import auth_headers


def test_list_users_admin_success(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.get("/api/users", headers=headers)
    assert resp.status_code == 200
    assert len(resp.json()) == 3


def test_list_users_forbidden_for_employee(client, seed_users):
    headers = auth_headers(client, "writer@example.com")
    resp = client.get("/api/users", headers=headers)
    assert resp.status_code == 403


def test_create_user_admin_success(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.post(
        "/api/users",
        headers=headers,
        json={"username": "newbie", "email": "New@Example.com", "role": "employee"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == "new@example.com"
    assert data["is_active"] is True


def test_create_user_duplicate_email(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.post(
        "/api/users",
        headers=headers,
        json={"username": "other", "email": "writer@example.com"},
    )
    assert resp.status_code == 409


def test_update_user_role(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    user_id = seed_users["writer"].user_id
    resp = client.put(f"/api/users/{user_id}", headers=headers, json={"role": "admin"})
    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"


def test_admin_cannot_demote_self(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    user_id = seed_users["admin"].user_id
    resp = client.put(f"/api/users/{user_id}", headers=headers, json={"role": "employee"})
    assert resp.status_code == 400


def test_delete_user_deactivates_and_restore(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    user_id = seed_users["editor"].user_id

    resp = client.delete(f"/api/users/{user_id}", headers=headers)
    assert resp.status_code == 204

    listed = client.get("/api/users", headers=headers).json()
    assert user_id not in [u["user_id"] for u in listed]
    listed = client.get("/api/users?include_inactive=true", headers=headers).json()
    assert user_id in [u["user_id"] for u in listed]

    login = client.post("/api/auth/login", json={"email": "editor@example.com"})
    assert login.status_code == 401

    resp = client.patch(f"/api/users/{user_id}/restore", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["is_active"] is True

    resp = client.patch(f"/api/users/{user_id}/restore", headers=headers)
    assert resp.status_code == 409


def test_delete_self_rejected(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.delete(f"/api/users/{seed_users['admin'].user_id}", headers=headers)
    assert resp.status_code == 400


def test_get_unknown_user(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.get("/api/users/9999", headers=headers)
    assert resp.status_code == 404
