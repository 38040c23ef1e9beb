from app.models import Role, UserSession

from tests.conftest import PASSWORD, create_user, login


def role_id(db, name):
    return db.query(Role.id).filter(Role.name == name).scalar()


def test_admin_lists_users_with_roles(client, admin_headers):
    response = client.get("/api/users/management", headers=admin_headers)

    assert response.status_code == 200
    users = response.json()
    assert users[0]["username"] == "admin@example.com"
    assert users[0]["roles"] == [{"id": users[0]["roles"][0]["id"], "name": "Admin"}]


def test_list_roles_sorted_by_name(client, admin_headers):
    names = [role["name"] for role in client.get("/api/roles", headers=admin_headers).json()]

    assert names == ["Admin", "Manager", "Viewer"]


def test_create_user_then_log_in(client, db, admin_headers):
    response = client.post("/api/users", headers=admin_headers, json={
        "username": "new@example.com", "password": "fresh-pass", "roleIds": [role_id(db, "Viewer")],
    })

    assert response.status_code == 201
    assert response.json()["userId"] > 0
    login(client, "new@example.com", "fresh-pass")


def test_duplicate_username_is_conflict(client, db, admin_headers):
    payload = {"username": "dup@example.com", "password": "x", "roleIds": [role_id(db, "Viewer")]}
    assert client.post("/api/users", headers=admin_headers, json=payload).status_code == 201

    response = client.post("/api/users", headers=admin_headers, json=payload)

    assert response.status_code == 409


def test_unknown_role_is_rejected(client, admin_headers):
    response = client.post("/api/users", headers=admin_headers, json={
        "username": "x@example.com", "password": "x", "roleIds": [9999],
    })

    assert response.status_code == 400


def test_role_change_revokes_sessions(client, db, admin_headers):
    user_id = create_user(db, "staff@example.com", ["Viewer"])
    staff_headers = login(client, "staff@example.com")

    response = client.put(f"/api/users/{user_id}/roles", headers=admin_headers, json={
        "roleIds": [role_id(db, "Manager")],
    })

    assert response.status_code == 200
    assert db.query(UserSession).filter(UserSession.user_id == user_id).count() == 0
    assert client.get("/api/auth/me", headers=staff_headers).status_code == 401

    relogged = client.post("/api/auth/login", json={"username": "staff@example.com", "password": PASSWORD})
    assert "action:create" in relogged.json()["user"]["permissions"]


def test_role_change_for_missing_user(client, admin_headers):
    response = client.put("/api/users/4321/roles", headers=admin_headers, json={"roleIds": []})

    assert response.status_code == 404


def test_non_admin_cannot_manage_users(client, manager_headers):
    response = client.post("/api/users", headers=manager_headers, json={
        "username": "x@example.com", "password": "x", "roleIds": [],
    })

    assert response.status_code == 403
