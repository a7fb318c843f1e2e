"""Unit tests for the placeholder account service."""

import threading

import pytest
from flask import session

from src.database.local_storage import CURRENT_USER_KEY, USERS_STORAGE_KEY, LocalStorage
from src.database.models import db
from src.exceptions import ValidationError
from src.services.auth_service import AuthService


@pytest.fixture
def auth_service(app):
    with app.test_request_context():
        yield AuthService()


class TestAuthService:
    """Test cases for AuthService."""

    def test_register_stores_user_and_signs_in(self, auth_service):
        user = auth_service.register("Ada", "ada@school.edu", "secret123")

        assert user.id.startswith("user-")
        assert len(user.id) == len("user-") + 9
        assert user.name == "Ada"
        stored = LocalStorage().get_item(USERS_STORAGE_KEY)
        assert stored == [
            {"id": user.id, "name": "Ada", "email": "ada@school.edu", "password": "secret123"}
        ]
        assert session[CURRENT_USER_KEY] == {
            "id": user.id,
            "name": "Ada",
            "email": "ada@school.edu",
        }

    def test_register_duplicate_email(self, auth_service):
        auth_service.register("Ada", "ada@school.edu", "secret123")

        with pytest.raises(ValidationError) as exc_info:
            auth_service.register("Other Ada", "ada@school.edu", "different")

        assert exc_info.value.user_message == "Email already registered"
        assert len(auth_service.get_stored_users()) == 1

    def test_users_persist_across_service_instances(self, auth_service):
        auth_service.register("Ada", "ada@school.edu", "secret123")

        assert AuthService().find_user("ada@school.edu").name == "Ada"

    def test_login_returns_registered_profile(self, auth_service):
        registered = auth_service.register("Ada", "ada@school.edu", "secret123")
        auth_service.logout()

        user = auth_service.login("ada@school.edu", "anything")

        assert user.id == registered.id
        assert user.display_name == "Ada"
        assert auth_service.current_user().id == registered.id

    def test_login_unknown_email_creates_session_user(self, auth_service):
        user = auth_service.login("new@school.edu", "whatever")

        assert user.id.startswith("user-")
        assert user.display_name == "new@school.edu"
        assert auth_service.get_stored_users() == []

    def test_logout_clears_current_user(self, auth_service):
        auth_service.login("ada@school.edu", "secret123")

        auth_service.logout()

        assert CURRENT_USER_KEY not in session
        assert auth_service.current_user() is None

    def test_load_user_matches_session_user(self, auth_service):
        user = auth_service.login("ada@school.edu", "secret123")

        assert auth_service.load_user(user.id).email == "ada@school.edu"
        assert auth_service.load_user("user-someoneelse") is None

    def test_concurrent_registrations_are_all_stored(self, app):
        count = 8
        errors = []

        def register(i):
            try:
                with app.test_request_context():
                    AuthService().register(f"User {i}", f"user{i}@school.edu", "pw")
                    db.session.remove()
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=register, args=(i,)) for i in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        stored = LocalStorage().get_item(USERS_STORAGE_KEY)
        assert len(stored) == count
        assert {u["email"] for u in stored} == {f"user{i}@school.edu" for i in range(count)}
