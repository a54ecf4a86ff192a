from zeo_api.core.config import settings


def test_login_success(client):
    """Valid admin credentials return a token and the admin profile"""
    response = client.post(
        "/api/auth/login",
        json={"email": settings.admin_email, "password": settings.admin_password}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"]["email"] == settings.admin_email
    assert data["user"]["isAdmin"] is True


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"email": settings.admin_email})

    assert response.status_code == 400
    assert response.json()["error"] == "Email and password are required"


def test_login_invalid_credentials(client):
    response = client.post(
        "/api/auth/login",
        json={"email": settings.admin_email, "password": "wrong-password"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_login_lockout_after_repeated_failures(client):
    for _ in range(settings.max_login_attempts):
        response = client.post(
            "/api/auth/login",
            json={"email": settings.admin_email, "password": "wrong-password"}
        )
        assert response.status_code == 401

    response = client.post(
        "/api/auth/login",
        json={"email": settings.admin_email, "password": settings.admin_password}
    )

    assert response.status_code == 429
    assert "Retry-After" in response.headers


def test_admin_route_without_token(client):
    response = client.get("/api/admin/tours")

    assert response.status_code == 401
    assert response.json()["error"] == "Access token required"


def test_admin_route_with_bad_token(client):
    response = client.get("/api/admin/tours", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 403
    assert response.json()["error"] == "Invalid or expired token"


def test_me_returns_admin(client, admin_headers):
    response = client.get("/api/auth/me", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["email"] == settings.admin_email
