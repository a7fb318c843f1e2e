"""Tests for the sign-in, registration and sign-out pages."""

from tests.conftest import register_user


def test_login_page(client):
    response = client.get("/auth/login")

    assert response.status_code == 200
    assert b"Sign in" in response.data


def test_register_signs_in_and_redirects_to_dashboard(client):
    response = register_user(client)

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")

    page = client.get("/dashboard")
    assert page.status_code == 200
    assert b"Welcome, Ada Lovelace" in page.data


def test_register_duplicate_email(client):
    register_user(client)
    client.get("/auth/logout")

    response = register_user(client, name="Someone Else")

    assert response.status_code == 200
    assert b"Email already registered" in response.data


def test_register_password_mismatch(client):
    response = client.post(
        "/auth/register",
        data={
            "name": "Ada",
            "email": "ada@school.edu",
            "password": "secret123",
            "confirm_password": "secret124",
        },
    )

    assert response.status_code == 200
    assert b"Passwords do not match" in response.data


def test_login_with_any_password(client):
    register_user(client)
    client.get("/auth/logout")

    response = client.post(
        "/auth/login",
        data={"email": "ada@school.edu", "password": "not-the-password"},
        follow_redirects=True,
    )

    assert response.status_code == 200
    assert b"Welcome back, Ada Lovelace!" in response.data


def test_login_redirects_to_next_page(client):
    response = client.post(
        "/auth/login?next=/grading",
        data={"email": "new@school.edu", "password": "pw"},
    )

    assert response.headers["Location"].endswith("/grading")


def test_login_ignores_external_next_page(client):
    response = client.post(
        "/auth/login?next=//evil.example.com/",
        data={"email": "new@school.edu", "password": "pw"},
    )

    assert response.headers["Location"].endswith("/dashboard")


def test_dashboard_requires_login(client):
    response = client.get("/dashboard")

    assert response.status_code == 302
    assert "/auth/login" in response.headers["Location"]


def test_logout(auth_client):
    response = auth_client.get("/auth/logout")

    assert response.status_code == 302
    assert auth_client.get("/dashboard").status_code == 302


def test_landing_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert b"Get started" in response.data


def test_landing_redirects_signed_in_users(auth_client):
    assert auth_client.get("/").headers["Location"].endswith("/dashboard")
