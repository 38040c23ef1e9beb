from datetime import datetime, timedelta, timezone

from app.models import LoginHistory, PageAccessHistory, Permission, Role, UserSession
from app.services.rbac_service import ROLES_CONFIG, effective_permissions, has_permission, rbac_service

from tests.conftest import PASSWORD, create_user, login


def test_login_returns_token_and_permissions(client, db):
    create_user(db, "viewer@example.com", ["Viewer"])

    response = client.post("/api/auth/login", json={"username": "viewer@example.com", "password": PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert len(body["token"]) == 128
    assert body["user"]["email"] == "viewer@example.com"
    assert sorted(body["user"]["permissions"]) == sorted(ROLES_CONFIG["Viewer"])
    assert db.query(LoginHistory).count() == 1


def test_wrong_password_is_unauthorized(client, db):
    create_user(db, "viewer@example.com", ["Viewer"])

    response = client.post("/api/auth/login", json={"username": "viewer@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_unknown_user_is_unauthorized(client):
    response = client.post("/api/auth/login", json={"username": "ghost@example.com", "password": "x"})

    assert response.status_code == 401


def test_user_without_roles_cannot_log_in(client, db):
    create_user(db, "norole@example.com")

    response = client.post("/api/auth/login", json={"username": "norole@example.com", "password": PASSWORD})

    assert response.status_code == 403


def test_me_and_logout(client, viewer_headers):
    me = client.get("/api/auth/me", headers=viewer_headers)
    assert me.status_code == 200
    assert "page:dashboard:view" in me.json()["user"]["permissions"]

    assert client.post("/api/auth/logout", headers=viewer_headers).status_code == 200
    assert client.get("/api/auth/me", headers=viewer_headers).status_code == 401


def test_missing_or_bogus_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"}).status_code == 401


def test_expired_session_is_rejected(client, db, viewer_headers):
    db.query(UserSession).update({UserSession.expires_at: datetime.now(timezone.utc) - timedelta(minutes=1)})
    db.commit()

    assert client.get("/api/auth/me", headers=viewer_headers).status_code == 401


def test_track_access_records_page(client, db, viewer_headers):
    response = client.post("/api/track-access", json={"pagePath": "/contributions"}, headers=viewer_headers)

    assert response.json() == {"success": True}
    assert [row.page_path for row in db.query(PageAccessHistory).all()] == ["/contributions"]


def test_permission_checks(client, viewer_headers, manager_headers):
    payload = {"itemName": "Chairs", "budgetedAmount": 500, "expenseHead": "Furniture"}

    assert client.get("/api/budgets", headers=viewer_headers).status_code == 200
    denied = client.post("/api/budgets", json=payload, headers=viewer_headers)
    assert denied.status_code == 403
    assert denied.json()["error"] == "forbidden"

    assert client.post("/api/budgets", json=payload, headers=manager_headers).status_code == 201
    assert client.get("/api/users/management", headers=manager_headers).status_code == 403


def test_super_permission_grants_everything(client, db):
    manage = db.query(Permission).filter(Permission.name == "action:users:manage").one()
    db.add(Role(name="UserAdmin", permissions=[manage]))
    db.commit()
    create_user(db, "useradmin@example.com", ["UserAdmin"])
    headers = login(client, "useradmin@example.com")

    assert client.get("/api/archive", headers=headers).status_code == 200
    assert client.get("/api/tasks", headers=headers).status_code == 200


def test_effective_permissions():
    assert has_permission(["action:users:manage"], "page:budget:view")
    assert not has_permission(["page:budget:view"], "action:create")
    assert effective_permissions(["page:tasks:view"]) == {"page:tasks:view"}


def test_seed_is_idempotent(db):
    rbac_service.seed(db)
    rbac_service.seed(db)
    db.commit()

    assert db.query(Role).count() == len(ROLES_CONFIG)
    admin = db.query(Role).filter(Role.name == "Admin").one()
    assert len(admin.permissions) == len(ROLES_CONFIG["Admin"])


def test_ensure_admin_user_creates_and_promotes(db):
    user = rbac_service.ensure_admin_user(db, "root@example.com", "rootpass")
    db.commit()
    assert [role.name for role in user.roles] == ["Admin"]

    again = rbac_service.ensure_admin_user(db, "root@example.com", None)
    db.commit()
    assert again.id == user.id
    assert len(again.roles) == 1

    assert rbac_service.ensure_admin_user(db, "missing@example.com", None) is None
    assert rbac_service.ensure_admin_user(db, None, "whatever") is None
