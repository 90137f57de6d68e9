from datetime import datetime, timedelta, timezone

import pytest

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, bearer, login
from gyatt_api.app.core.security import create_access_token


def test_login_auto_registers_unknown_email(client, store):
    before = len(store.load("users"))

    response = client.post("/api/auth/login", json={"email": "new@x.com", "password": "pw"})

    assert response.status_code == 200
    body = response.json()
    user = body["user"]
    assert body["token"]
    assert user["email"] == "new@x.com"
    assert user["isAdmin"] is False
    assert user["rank"] == "Initiate"
    assert user["status"] == "Active"
    assert user["codename"].startswith("Agent-")
    suffix = user["codename"][len("Agent-"):]
    assert len(suffix) == 6 and suffix.isalnum() and suffix == suffix.upper()
    assert 25 <= user["goatLevel"] < 75
    assert 25 <= user["rizz"] < 75
    assert "password" not in user

    users = store.load("users")
    assert len(users) == before + 1
    assert len({u["id"] for u in users}) == len(users)
    stored = next(u for u in users if u["email"] == "new@x.com")
    assert stored["password"] != "pw"


def test_auto_registered_token_is_usable(client):
    token = login(client, "fresh@x.com", "pw")["token"]

    response = client.get("/api/user/profile", headers=bearer(token))
    assert response.status_code == 200
    assert response.json()["email"] == "fresh@x.com"


def test_second_login_reuses_account(client, store):
    first = login(client, "again@x.com", "pw")["user"]
    second = login(client, "again@x.com", "pw")["user"]

    assert first["id"] == second["id"]
    assert sum(1 for u in store.load("users") if u["email"] == "again@x.com") == 1


def test_login_with_wrong_password_is_rejected(client):
    login(client, "again@x.com", "right")

    response = client.post("/api/auth/login", json={"email": "again@x.com", "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_founder_can_log_in(client):
    body = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert body["user"]["isAdmin"] is True
    assert body["user"]["codename"] == "The Founder"


@pytest.mark.parametrize(
    "payload",
    [{}, {"email": "a@x.com"}, {"password": "pw"}, {"email": "", "password": "pw"}],
)
def test_login_requires_email_and_password(client, payload):
    response = client.post("/api/auth/login", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Email and password required"}


def test_profile_without_token_is_unauthenticated(client):
    response = client.get("/api/user/profile")

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. No token provided."}


@pytest.mark.parametrize("header", ["Token abc.def.ghi", "Basic dXNlcjpwdw==", "Bearer"])
def test_profile_without_bearer_scheme_is_unauthenticated(client, header):
    response = client.get("/api/user/profile", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. No token provided."}


@pytest.mark.parametrize("header", ["Bearer not-a-token", "Bearer a.b.c"])
def test_profile_with_invalid_token_is_rejected(client, header):
    response = client.get("/api/user/profile", headers={"Authorization": header})

    assert response.status_code == 403
    assert response.json() == {"error": "Invalid or expired token."}


def test_profile_with_expired_token_is_rejected(client, settings):
    issued = datetime.now(timezone.utc) - timedelta(days=7, hours=1)
    token = create_access_token({"id": 1, "email": ADMIN_EMAIL, "isAdmin": True}, settings, issued_at=issued)

    response = client.get("/api/user/profile", headers=bearer(token))

    assert response.status_code == 403


def test_profile_of_deleted_account_is_not_found(client, admin_headers):
    member = login(client, "gone@x.com", "pw")

    client.delete(f"/api/users/{member['user']['id']}", headers=admin_headers)
    response = client.get("/api/user/profile", headers=bearer(member["token"]))

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


ADMIN_ROUTES = [
    ("get", "/api/users", None),
    ("post", "/api/users", {"email": "z@x.com", "password": "pw", "codename": "Z"}),
    ("put", "/api/users/1", {"codename": "Hijacked"}),
    ("delete", "/api/users/1", None),
    ("post", "/api/missions", {"title": "t", "description": "d"}),
    ("put", "/api/missions/1", {"title": "t"}),
    ("delete", "/api/missions/1", None),
    ("get", "/api/suggestions", None),
    ("delete", "/api/suggestions/1", None),
]


@pytest.mark.parametrize("method,path,body", ADMIN_ROUTES)
def test_admin_routes_forbid_members(client, member_headers, method, path, body):
    kwargs = {"headers": member_headers}
    if body is not None:
        kwargs["json"] = body
    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required."}


@pytest.mark.parametrize("method,path,body", ADMIN_ROUTES)
def test_admin_routes_require_a_token(client, method, path, body):
    kwargs = {}
    if body is not None:
        kwargs["json"] = body
    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 401


def test_forbidden_member_request_changes_nothing(client, store, member_headers):
    before = store.load("users")

    client.delete("/api/users/1", headers=member_headers)

    assert store.load("users") == before
