import pytest

from dispatch_desk.config import Settings, validate_environment


def test_login_returns_token_and_user(client, admin_user):
    response = client.post(
        "/api/auth/login", json={"username": "admin", "password": "secret123"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["username"] == "admin"
    assert body["user"]["role"] == "admin"
    assert "createdAt" in body["user"]

    me = client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"}
    )
    assert me.status_code == 200
    assert me.json()["id"] == admin_user.id


def test_login_rejects_wrong_password(client, admin_user):
    response = client.post(
        "/api/auth/login", json={"username": "admin", "password": "wrong"}
    )

    assert response.status_code == 401


def test_login_rejects_unknown_user(client):
    response = client.post(
        "/api/auth/login", json={"username": "nobody", "password": "secret123"}
    )

    assert response.status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get(
        "/api/auth/me", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_missing_token_is_rejected(client):
    assert client.get("/api/dispatches").status_code == 401


def test_admin_manages_users(client, admin_headers, employee_user):
    created = client.post(
        "/api/users",
        json={"username": "operador", "password": "clave123", "role": "employee"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    user_id = created.json()["id"]

    duplicate = client.post(
        "/api/users",
        json={"username": "operador", "password": "clave123"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 400

    promoted = client.put(
        f"/api/users/{user_id}", json={"role": "admin"}, headers=admin_headers
    )
    assert promoted.json()["role"] == "admin"

    usernames = [
        user["username"]
        for user in client.get("/api/users", headers=admin_headers).json()["data"]
    ]
    assert usernames == ["admin", "empleado", "operador"]

    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 200


def test_admin_cannot_delete_self(client, admin_user, admin_headers):
    response = client.delete(f"/api/users/{admin_user.id}", headers=admin_headers)

    assert response.status_code == 400


def test_employee_cannot_list_users(client, employee_headers):
    assert client.get("/api/users", headers=employee_headers).status_code == 403


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_development_defaults_only_warn():
    config = Settings(secret_key="changeme", environment="development")

    warnings = validate_environment(config)

    assert warnings == ["SECRET_KEY uses a default value (development only)"]


def test_production_refuses_insecure_settings():
    config = Settings(
        secret_key="changeme",
        environment="production",
        database_url="sqlite:///./prod.db",
        disable_auth=True,
    )

    with pytest.raises(RuntimeError) as excinfo:
        validate_environment(config)

    message = str(excinfo.value)
    assert "SECRET_KEY" in message
    assert "DATABASE_URL" in message
    assert "DISABLE_AUTH" in message


def test_production_accepts_server_database():
    config = Settings(
        secret_key="a-long-random-production-key",
        environment="production",
        database_url="postgresql://dispatch:pw@db/dispatch",
    )

    assert validate_environment(config) == []
